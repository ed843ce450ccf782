# cli/commands/build_cmd.py
"""
build 명령

    1. 옵션 검증 (--job / --job-url, --branch / --default-branch)
    2. BUILD_PRE_FLOW로 job, 브랜치, 파라미터 수집 (--job이 있으면 검색 단계 생략)
    3. complete → 빌드 트리거 + 캐시 기록
    4. BUILD_POST_FLOW로 후속 작업 (watch / logs / cancel / rerun)

list에서 중첩 호출되면 return_to_caller=True로 실행되고, 결과를 BuildResult로
돌려주어 바깥 Flow가 어디서 재개할지 결정합니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from cli.flow.context import BuildPostContext, BuildPreContext
from cli.flow.definitions import BUILD_POST_FLOW, BUILD_PRE_FLOW
from cli.flow.handlers import BUILD_POST_HANDLERS, BUILD_PRE_HANDLERS
from cli.flow.runner import run_flow
from cli.flow.types import ActionResult, PromptAdapter, TerminalOutcome
from cli.i18n import t
from cli.ui.console import print_cli_error
from core.config import EnvConfig, settings
from core.exceptions import JenkinsCliError, is_retryable_search_error
from core.jenkins import JenkinsClient, JenkinsJob
from core.jobs import ensure_unique_match, resolve_job_candidates
from core.recent_jobs import load_recent_jobs

from .actions import cancel_build, run_menu_action, show_logs, trigger_build, watch_build
from .common import confirm_with_adapter, load_jobs_for_command, resolve_job_label

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """build 실행 결과 (중첩 호출 시 바깥 Flow가 해석)

    Attributes:
        triggered: 빌드를 한 번 이상 트리거했는지
        root_requested: 바깥 Flow를 root 상태에서 재개
        exit_requested: 바깥 세션까지 종료
    """

    triggered: bool = False
    root_requested: bool = False
    exit_requested: bool = False


def build_result_to_action(result: BuildResult) -> ActionResult:
    """중첩 build 결과 → 바깥 Flow의 ActionResult"""
    if result.exit_requested:
        return ActionResult.EXIT
    if result.root_requested:
        return ActionResult.ROOT
    return ActionResult.ACTION_OK


def validate_build_options(
    job: Optional[str],
    job_url: Optional[str],
    branch: Optional[str],
    default_branch: bool,
    branch_param: Optional[str],
    non_interactive: bool,
) -> None:
    if job and job_url:
        raise JenkinsCliError(t("cli.job_and_job_url"))
    if branch and default_branch:
        raise JenkinsCliError(t("cli.branch_and_default_branch"))
    if branch_param is not None and not branch_param.strip():
        raise JenkinsCliError(t("cli.invalid_branch_param"), hints=[t("cli.invalid_branch_param_hint")])
    if non_interactive:
        if not job and not job_url:
            raise JenkinsCliError(t("cli.job_name_required"), hints=[t("cli.job_name_required_hint")])
        if not (branch or "").strip() and not default_branch:
            raise JenkinsCliError(t("cli.missing_branch"), hints=[t("cli.missing_branch_hint")])


def preset_job_selection(
    ctx: BuildPreContext,
    job: Optional[str] = None,
    job_url: Optional[str] = None,
) -> Optional[str]:
    """--job / --job-url 값으로 Context를 미리 채우고 시작 상태를 반환

    Returns:
        시작 StateId (None이면 initial_state)
    """
    if job_url:
        ctx.selected_job_url = job_url
        ctx.selected_job_label = resolve_job_label(ctx.jobs, job_url)
        return "prepare_branch"
    if not job:
        return None

    ctx.search_query = job.strip()
    try:
        candidates = resolve_job_candidates(job, ctx.jobs)
    except JenkinsCliError as e:
        if not is_retryable_search_error(e):
            raise
        print_cli_error(e)
        return None

    if len(candidates) == 1:
        ctx.selected_job_url = candidates[0].url
        ctx.selected_job_label = candidates[0].display_name
        return "prepare_branch"
    ctx.search_candidates = candidates
    return "results_direct"


class BuildSession:
    """트리거된 빌드 하나에 대한 후속 작업 (BUILD_POST_FLOW의 perform_action)"""

    def __init__(
        self,
        client: JenkinsClient,
        env: EnvConfig,
        adapter: PromptAdapter,
        job_url: str,
        label: str,
        params: Dict[str, str],
        branch: Optional[str] = None,
    ):
        self.client = client
        self.env = env
        self.adapter = adapter
        self.job_url = job_url
        self.label = label
        self.params = params
        self.branch = branch
        self.queue_url: Optional[str] = None
        self.build_url: Optional[str] = None

    def trigger(self) -> None:
        result = trigger_build(self.client, self.env, self.job_url, self.label, self.params, branch=self.branch)
        self.queue_url = result.queue_url
        self.build_url = None

    def _resolve_build_url(self) -> Optional[str]:
        if self.build_url is None and self.queue_url:
            self.build_url = self.client.get_queue_build_url(self.queue_url)
        return self.build_url

    def _confirm_cancel(self, message: str) -> bool:
        return confirm_with_adapter(self.adapter, self.env, message)

    def _perform(self, action: str) -> ActionResult:
        if action == "watch":
            build_url = self._resolve_build_url()
            return watch_build(
                self.client,
                self.job_url,
                self.label,
                queue_url=None if build_url else self.queue_url,
                build_url=build_url,
            )
        if action == "logs":
            return show_logs(self.client, self.job_url, self.label, build_url=self._resolve_build_url())
        if action == "cancel":
            return cancel_build(self.client, self.job_url, self.label, confirm=self._confirm_cancel)
        if action == "rerun":
            self.trigger()
            return ActionResult.ACTION_OK
        raise JenkinsCliError(t("cli.unknown_action", action=action))

    def perform_action(self, action: str) -> ActionResult:
        return run_menu_action(self._perform, action)


def _run_non_interactive(
    client: JenkinsClient,
    env: EnvConfig,
    job: Optional[str],
    job_url: Optional[str],
    branch: Optional[str],
    branch_param: str,
    default_branch: bool,
) -> BuildResult:
    jobs = load_jobs_for_command(client, env, non_interactive=True, job_url=job_url)
    if job_url:
        label = resolve_job_label(jobs, job_url)
    else:
        selected = ensure_unique_match(job or "", resolve_job_candidates(job or "", jobs))
        job_url, label = selected.url, selected.display_name

    branch = None if default_branch else (branch or "").strip()
    params = {branch_param: branch} if branch else {}
    trigger_build(client, env, job_url, label, params, branch=branch)
    return BuildResult(triggered=True)


def run_build(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: Optional[PromptAdapter] = None,
    job: Optional[str] = None,
    job_url: Optional[str] = None,
    branch: Optional[str] = None,
    branch_param: Optional[str] = None,
    default_branch: bool = False,
    non_interactive: bool = False,
    return_to_caller: bool = False,
    jobs: Optional[List[JenkinsJob]] = None,
) -> BuildResult:
    """build 명령 실행

    Args:
        adapter: 프롬프트 어댑터 (대화형 모드 필수)
        job: 검색어 (유일하게 매칭되면 검색 단계 생략)
        job_url: job URL (검색 없이 바로 브랜치 단계)
        branch: 미리 지정한 브랜치
        branch_param: 브랜치를 전달할 빌드 파라미터 이름
        default_branch: 파라미터 없이 job 기본 브랜치로 빌드
        return_to_caller: 바깥 Flow(list)에서 중첩 호출
        jobs: 이미 로드한 job 목록 (없으면 캐시에서 로드)

    Raises:
        JenkinsCliError: 옵션 오류, 캐시/API 오류
    """
    validate_build_options(job, job_url, branch, default_branch, branch_param, non_interactive)
    branch_param = (branch_param or env.branch_param_default or settings.DEFAULT_BRANCH_PARAM).strip()

    if non_interactive:
        return _run_non_interactive(client, env, job, job_url, branch, branch_param, default_branch)
    if adapter is None:
        raise JenkinsCliError(t("cli.requires_terminal", command="build"), hints=[t("cli.requires_terminal_hint")])

    if jobs is None:
        jobs = load_jobs_for_command(client, env, adapter=adapter, job_url=job_url)

    result = BuildResult()
    while True:
        ctx = BuildPreContext(
            env=env,
            jobs=jobs,
            recent_jobs=load_recent_jobs(env),
            branch_param=branch_param,
            branch=(branch or "").strip() or None,
            default_branch=default_branch,
        )
        start_state = preset_job_selection(ctx, job=job, job_url=job_url)
        pre = run_flow(BUILD_PRE_FLOW, BUILD_PRE_HANDLERS, adapter, ctx, start_state_id=start_state)
        if pre.terminal != TerminalOutcome.COMPLETE or not ctx.selected_job_url:
            return result

        label = ctx.selected_job_label or ctx.selected_job_url
        session = BuildSession(
            client,
            env,
            adapter,
            ctx.selected_job_url,
            label,
            ctx.build_parameters(),
            branch=None if ctx.default_branch else ctx.branch,
        )
        session.trigger()
        result.triggered = True

        post_ctx = BuildPostContext(
            env=env,
            job_label=label,
            perform_action=session.perform_action,
            return_to_caller=return_to_caller,
        )
        post = run_flow(BUILD_POST_FLOW, BUILD_POST_HANDLERS, adapter, post_ctx)
        logger.debug("build_post finished: %s at %s", post.terminal.value, post.state_id)

        if post.terminal == TerminalOutcome.REPEAT:
            # 새 빌드는 CLI 옵션 없이 처음부터
            job = job_url = branch = None
            default_branch = False
            if not jobs:
                jobs = load_jobs_for_command(client, env, adapter=adapter)
            continue
        if post.terminal == TerminalOutcome.RETURN_TO_CALLER_ROOT:
            result.root_requested = True
        elif post.terminal == TerminalOutcome.EXIT_COMMAND and return_to_caller:
            result.exit_requested = True
        return result
