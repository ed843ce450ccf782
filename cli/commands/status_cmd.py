# cli/commands/status_cmd.py
"""
status 명령

BUILD_PRE_FLOW를 파라미터 없음 모드로 실행해 job만 고른 뒤 마지막 빌드 상태를
출력하고, STATUS_POST_FLOW로 후속 작업을 제공합니다.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from cli.flow.context import PARAMETER_MODE_WITHOUT, BuildPreContext, StatusPostContext
from cli.flow.definitions import BUILD_PRE_FLOW, STATUS_POST_FLOW
from cli.flow.handlers import BUILD_PRE_HANDLERS, STATUS_POST_HANDLERS
from cli.flow.runner import run_flow
from cli.flow.types import ActionResult, PromptAdapter, TerminalOutcome
from cli.i18n import t
from core.config import EnvConfig
from core.exceptions import JenkinsCliError
from core.jenkins import JenkinsClient, JenkinsJob
from core.jobs import ensure_unique_match, resolve_job_candidates
from core.recent_jobs import load_recent_jobs

from .actions import cancel_build, rerun_last_failed, run_menu_action, show_logs, watch_build
from .build_cmd import build_result_to_action, preset_job_selection, run_build
from .common import confirm_with_adapter, load_jobs_for_command, resolve_job_label, show_status

logger = logging.getLogger(__name__)


def perform_job_action(
    action: str,
    client: JenkinsClient,
    env: EnvConfig,
    adapter: PromptAdapter,
    job_url: str,
    label: str,
    jobs: Optional[List[JenkinsJob]] = None,
) -> ActionResult:
    """job 하나에 대한 메뉴 작업 (list 액션 메뉴, status 후속 메뉴 공용)

    build는 BUILD_PRE/BUILD_POST Flow를 중첩 실행합니다.
    """

    def confirm(message: str) -> bool:
        return confirm_with_adapter(adapter, env, message)

    def perform() -> ActionResult:
        if action == "build":
            nested = run_build(client, env, adapter, job_url=job_url, return_to_caller=True, jobs=jobs)
            return build_result_to_action(nested)
        if action == "status":
            return show_status(client, job_url, label)
        if action == "watch":
            return watch_build(client, job_url, label)
        if action == "logs":
            return show_logs(client, job_url, label)
        if action == "cancel":
            return cancel_build(client, job_url, label, confirm=confirm)
        if action == "rerun":
            return rerun_last_failed(client, env, job_url, label)
        raise JenkinsCliError(t("cli.unknown_action", action=action))

    return run_menu_action(perform)


def select_job_target(
    env: EnvConfig,
    adapter: PromptAdapter,
    jobs: List[JenkinsJob],
    job: Optional[str] = None,
    job_url: Optional[str] = None,
) -> Optional[Tuple[str, str]]:
    """BUILD_PRE_FLOW를 파라미터 없음 모드로 실행해 job 하나를 고릅니다.

    Returns:
        (job_url, label). 사용자가 Flow를 빠져나가면 None
    """
    ctx = BuildPreContext(
        env=env,
        jobs=jobs,
        recent_jobs=load_recent_jobs(env),
        parameter_mode=PARAMETER_MODE_WITHOUT,
    )
    start_state = preset_job_selection(ctx, job=job, job_url=job_url)
    pre = run_flow(BUILD_PRE_FLOW, BUILD_PRE_HANDLERS, adapter, ctx, start_state_id=start_state)
    if pre.terminal != TerminalOutcome.COMPLETE or not ctx.selected_job_url:
        logger.debug("job selection ended: %s at %s", pre.terminal.value, pre.state_id)
        return None
    return ctx.selected_job_url, ctx.selected_job_label or ctx.selected_job_url


def resolve_job_target(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: Optional[PromptAdapter] = None,
    job: Optional[str] = None,
    job_url: Optional[str] = None,
    non_interactive: bool = False,
) -> Optional[Tuple[str, str]]:
    """--job / --job-url로 대상 job 결정 (status, wait, logs, cancel, rerun 공용)

    비대화형이면 유일하게 매칭되어야 하고, 대화형이면 job 선택 Flow를 실행합니다.

    Raises:
        JenkinsCliError: 옵션 오류, 모호한 검색어, 캐시 오류
    """
    if job and job_url:
        raise JenkinsCliError(t("cli.job_and_job_url"))

    if non_interactive or adapter is None:
        if not job and not job_url:
            raise JenkinsCliError(t("cli.job_name_required"), hints=[t("cli.job_name_required_hint")])
        jobs = load_jobs_for_command(client, env, non_interactive=True, job_url=job_url)
        if job_url:
            return job_url, resolve_job_label(jobs, job_url)
        selected = ensure_unique_match(job or "", resolve_job_candidates(job or "", jobs))
        return selected.url, selected.display_name

    jobs = load_jobs_for_command(client, env, adapter=adapter, job_url=job_url)
    return select_job_target(env, adapter, jobs, job=job, job_url=job_url)


def run_status(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: Optional[PromptAdapter] = None,
    job: Optional[str] = None,
    job_url: Optional[str] = None,
    non_interactive: bool = False,
) -> None:
    """status 명령 실행

    Raises:
        JenkinsCliError: 옵션 오류, 캐시/API 오류
    """
    if non_interactive:
        job_url, label = resolve_job_target(client, env, job=job, job_url=job_url, non_interactive=True)
        show_status(client, job_url, label)
        return

    if job and job_url:
        raise JenkinsCliError(t("cli.job_and_job_url"))
    if adapter is None:
        raise JenkinsCliError(t("cli.requires_terminal", command="status"), hints=[t("cli.requires_terminal_hint")])

    jobs = load_jobs_for_command(client, env, adapter=adapter, job_url=job_url)
    while True:
        target = select_job_target(env, adapter, jobs, job=job, job_url=job_url)
        if target is None:
            return

        selected_url, label = target
        run_menu_action(show_status, client, selected_url, label)

        post_ctx = StatusPostContext(
            env=env,
            target_label=label,
            perform_action=lambda action: perform_job_action(action, client, env, adapter, selected_url, label, jobs),
        )
        post = run_flow(STATUS_POST_FLOW, STATUS_POST_HANDLERS, adapter, post_ctx)
        logger.debug("status_post finished: %s at %s", post.terminal.value, post.state_id)
        if post.terminal != TerminalOutcome.REPEAT:
            return

        job = job_url = None
        if not jobs:
            jobs = load_jobs_for_command(client, env, adapter=adapter)
