"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    jenkins-cli list [SEARCH]            # job 검색 + 대화형 작업 메뉴
    jenkins-cli build [--job NAME]       # 빌드 트리거 + 후속 작업
    jenkins-cli status [--job NAME]      # 마지막 빌드 상태 + 후속 작업
    jenkins-cli wait [--job NAME]        # 빌드 완료까지 대기 (--interval, --timeout)
    jenkins-cli logs [--job NAME]        # 콘솔 출력
    jenkins-cli cancel [--job NAME]      # 실행 중인 빌드 중지
    jenkins-cli rerun [--job NAME]       # 마지막 실패 빌드 재실행
    jenkins-cli --version                # 버전 표시

공통 옵션:
    --lang en|ko         UI 언어 (기본: JENKINS_CLI_LANG 또는 en)
    --debug              Flow 전이/API 요청 디버그 로그 (RichHandler)
    --non-interactive    프롬프트 없이 실행

에러 처리:
    JenkinsCliError  → ERROR:/HINT: 출력 후 exit 1
    Ctrl+C           → exit 130
    wait             → 빌드 실패 1, 시간 초과 124, 대기 중단 130

Usage:
    $ jenkins-cli build --job api-deploy --branch main
    $ python -m cli.app list deploy
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click
from click import Context

from cli.i18n import SUPPORTED_LANGS, set_lang, t
from core.config import API_LOG_FILE, LogConfig, get_version
from core.exceptions import JenkinsCliError

# Keep lightweight, centralized logging config
# WARNING 레벨로 설정하여 INFO 로그가 프롬프트 출력에 섞이지 않도록 함
_log_config = LogConfig.from_env()
logging.basicConfig(
    level=getattr(logging, _log_config.level, logging.WARNING),
    format=_log_config.format,
    datefmt=_log_config.date_format,
)

logger = logging.getLogger(__name__)

VERSION = get_version()

# Jenkins API 요청 로그를 받는 logger
API_LOGGER_NAME = "core.jenkins"


def setup_api_log(path: Path = API_LOG_FILE) -> None:
    """Jenkins API 요청/응답을 api.log에 기록 (설정 실패는 무시)"""
    api_logger = logging.getLogger(API_LOGGER_NAME)
    if any(isinstance(handler, logging.FileHandler) for handler in api_logger.handlers):
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as e:
        logger.debug("api.log 설정 실패 (%s): %s", path, e)
        return

    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    api_logger.addHandler(handler)
    api_logger.setLevel(logging.DEBUG)


def configure_logging(debug: bool = False) -> None:
    """콘솔 로그 레벨 설정

    --debug면 root 핸들러를 RichHandler(stderr)로 교체합니다. 콘솔 핸들러에도
    레벨을 지정하여 api.log용 DEBUG 레코드가 콘솔로 새지 않도록 합니다.
    """
    root = logging.getLogger()
    if debug:
        from cli.ui.console import get_rich_handler

        level = logging.DEBUG
        root.handlers = [get_rich_handler()]
    else:
        level = getattr(logging, _log_config.level, logging.WARNING)

    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)
    setup_api_log()


def _execute(ctx: Context, command: Callable[..., Any], non_interactive: bool = False, **kwargs: Any) -> Any:
    """명령 공통 실행: 설정 로드, 클라이언트 생성, 에러 → 종료 코드

    Returns:
        명령 함수의 반환값
    """
    from cli.ui.console import err_console, print_cli_error
    from cli.ui.prompts import QuestionaryPromptAdapter
    from core.config import load_env
    from core.jenkins import JenkinsClient

    non_interactive = non_interactive or ctx.obj.get("non_interactive", False)
    try:
        env = load_env()
        client = JenkinsClient(env)
        adapter = None if non_interactive else QuestionaryPromptAdapter()
        return command(client, env, adapter=adapter, non_interactive=non_interactive, **kwargs)
    except JenkinsCliError as e:
        logger.debug("command failed", exc_info=True)
        print_cli_error(e)
        ctx.exit(1)
    except KeyboardInterrupt:
        err_console.print(t("cli.aborted"))
        ctx.exit(130)


@click.group(context_settings={"help_option_names": ["-h", "--help"]}, help=t("cli.app_help"))
@click.version_option(VERSION, prog_name="jenkins-cli")
@click.option("--lang", type=click.Choice(SUPPORTED_LANGS), default=None, help=t("cli.lang_help"))
@click.option("--debug", is_flag=True, help=t("cli.debug_help"))
@click.option("--non-interactive", "non_interactive", is_flag=True, help=t("cli.non_interactive_help"))
@click.pass_context
def cli(ctx: Context, lang: str | None, debug: bool, non_interactive: bool) -> None:
    """Jenkins CLI"""
    if lang:
        set_lang(lang)
    configure_logging(debug)

    ctx.ensure_object(dict)
    ctx.obj["non_interactive"] = non_interactive


@cli.command("list", help=t("cli.list_help"))
@click.argument("search", required=False)
@click.option("--refresh", is_flag=True, help="Fetch the job list from Jenkins again")
@click.option("--non-interactive", "non_interactive", is_flag=True, help=t("cli.non_interactive_help"))
@click.pass_context
def list_command(ctx: Context, search: str | None, refresh: bool, non_interactive: bool) -> None:
    from cli.commands.list_cmd import run_list

    _execute(ctx, run_list, non_interactive=non_interactive, search=search, refresh=refresh)


@cli.command("build", help=t("cli.build_help"))
@click.option("-j", "--job", default=None, help="Job name or search query")
@click.option("--job-url", default=None, help="Job URL (skips the job search)")
@click.option("-b", "--branch", default=None, help="Branch to build")
@click.option("--branch-param", default=None, help="Build parameter that receives the branch")
@click.option("--default-branch", is_flag=True, help="Build the job's default branch without parameters")
@click.option("--non-interactive", "non_interactive", is_flag=True, help=t("cli.non_interactive_help"))
@click.pass_context
def build_command(
    ctx: Context,
    job: str | None,
    job_url: str | None,
    branch: str | None,
    branch_param: str | None,
    default_branch: bool,
    non_interactive: bool,
) -> None:
    from cli.commands.build_cmd import run_build

    _execute(
        ctx,
        run_build,
        non_interactive=non_interactive,
        job=job,
        job_url=job_url,
        branch=branch,
        branch_param=branch_param,
        default_branch=default_branch,
    )


@cli.command("status", help=t("cli.status_help"))
@click.option("-j", "--job", default=None, help="Job name or search query")
@click.option("--job-url", default=None, help="Job URL (skips the job search)")
@click.option("--non-interactive", "non_interactive", is_flag=True, help=t("cli.non_interactive_help"))
@click.pass_context
def status_command(ctx: Context, job: str | None, job_url: str | None, non_interactive: bool) -> None:
    from cli.commands.status_cmd import run_status

    _execute(ctx, run_status, non_interactive=non_interactive, job=job, job_url=job_url)


@cli.command("wait", help=t("cli.wait_help"))
@click.option("-j", "--job", default=None, help="Job name or search query")
@click.option("--job-url", default=None, help="Job URL (skips the job search)")
@click.option("--build-url", default=None, help="Build URL to wait for")
@click.option("--queue-url", default=None, help="Queue item URL returned by a trigger")
@click.option("--interval", default=None, help="Poll interval, e.g. 3s (default: 3s)")
@click.option("--timeout", default=None, help="Give up after this long, e.g. 10m")
@click.option("--non-interactive", "non_interactive", is_flag=True, help=t("cli.non_interactive_help"))
@click.pass_context
def wait_command(
    ctx: Context,
    job: str | None,
    job_url: str | None,
    build_url: str | None,
    queue_url: str | None,
    interval: str | None,
    timeout: str | None,
    non_interactive: bool,
) -> None:
    from cli.commands.ops_cmd import run_wait

    waited = _execute(
        ctx,
        run_wait,
        non_interactive=non_interactive,
        job=job,
        job_url=job_url,
        build_url=build_url,
        queue_url=queue_url,
        interval=interval,
        timeout=timeout,
    )
    if waited is not None and waited.exit_code:
        ctx.exit(waited.exit_code)


@cli.command("logs", help=t("cli.logs_help"))
@click.option("-j", "--job", default=None, help="Job name or search query")
@click.option("--job-url", default=None, help="Job URL (skips the job search)")
@click.option("--build-url", default=None, help="Build URL (default: the job's last build)")
@click.option("--non-interactive", "non_interactive", is_flag=True, help=t("cli.non_interactive_help"))
@click.pass_context
def logs_command(
    ctx: Context, job: str | None, job_url: str | None, build_url: str | None, non_interactive: bool
) -> None:
    from cli.commands.ops_cmd import run_logs

    _execute(ctx, run_logs, non_interactive=non_interactive, job=job, job_url=job_url, build_url=build_url)


@cli.command("cancel", help=t("cli.cancel_help"))
@click.option("-j", "--job", default=None, help="Job name or search query")
@click.option("--job-url", default=None, help="Job URL (skips the job search)")
@click.option("--non-interactive", "non_interactive", is_flag=True, help=t("cli.non_interactive_help"))
@click.pass_context
def cancel_command(ctx: Context, job: str | None, job_url: str | None, non_interactive: bool) -> None:
    from cli.commands.ops_cmd import run_cancel

    _execute(ctx, run_cancel, non_interactive=non_interactive, job=job, job_url=job_url)


@cli.command("rerun", help=t("cli.rerun_help"))
@click.option("-j", "--job", default=None, help="Job name or search query")
@click.option("--job-url", default=None, help="Job URL (skips the job search)")
@click.option("--non-interactive", "non_interactive", is_flag=True, help=t("cli.non_interactive_help"))
@click.pass_context
def rerun_command(ctx: Context, job: str | None, job_url: str | None, non_interactive: bool) -> None:
    from cli.commands.ops_cmd import run_rerun

    _execute(ctx, run_rerun, non_interactive=non_interactive, job=job, job_url=job_url)


if __name__ == "__main__":
    cli(sys.argv[1:])
