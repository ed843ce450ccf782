# cli/commands/actions.py
"""
메뉴 후속 작업 (watch / logs / cancel / rerun) 및 빌드 트리거

Flow의 run_action 핸들러가 Context의 perform_action 콜백을 통해 호출합니다.
각 작업은 ActionResult를 반환하며, 이 값은 그대로 Flow 이벤트로 사용됩니다.

    ACTION_OK        - 완료, 메뉴로 돌아감
    WATCH_CANCELLED  - watch 중 Ctrl+C
    ACTION_ERROR     - JenkinsCliError (출력 후 반환)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from cli.flow.types import ActionResult
from cli.i18n import t
from cli.ui.console import console, print_cli_error, print_error, print_ok, print_rule, print_warning
from core.branches import record_branch_selection
from core.config import EnvConfig, settings
from core.exceptions import FlowError, JenkinsCliError
from core.jenkins import BuildStatus, JenkinsClient, TriggerResult
from core.recent_jobs import record_recent_job

from .status_format import format_duration

logger = logging.getLogger(__name__)


def run_menu_action(action: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """JenkinsCliError를 출력하고 ACTION_ERROR로 변환

    Flow 정의 오류(FlowError)는 변환하지 않고 그대로 전파합니다.
    """
    try:
        return action(*args, **kwargs)
    except FlowError:
        raise
    except JenkinsCliError as e:
        print_cli_error(e)
        return ActionResult.ACTION_ERROR


# =============================================================================
# 빌드 트리거
# =============================================================================


def record_build_caches(env: EnvConfig, job_url: str, branch: Optional[str] = None) -> None:
    """브랜치/최근 job 캐시 기록 (실패해도 빌드 결과에는 영향 없음)"""
    try:
        if branch:
            record_branch_selection(env, job_url, branch)
        record_recent_job(env, job_url)
    except OSError as e:
        logger.debug("캐시 기록 실패 (%s): %s", job_url, e)


def trigger_build(
    client: JenkinsClient,
    env: EnvConfig,
    job_url: str,
    label: str,
    params: Dict[str, str],
    branch: Optional[str] = None,
) -> TriggerResult:
    """빌드 트리거 + 캐시 기록 + 결과 출력"""
    result = client.trigger_build(job_url, params)
    record_build_caches(env, job_url, branch)
    if result.queue_url:
        print_ok(t("cli.build_queued", url=result.queue_url))
    else:
        print_ok(t("cli.build_triggered", label=label))
    return result


def rerun_last_failed(client: JenkinsClient, env: EnvConfig, job_url: str, label: str) -> ActionResult:
    """마지막 실패 빌드의 파라미터로 다시 빌드"""
    last_failed = client.get_last_failed_build(job_url)
    if last_failed is None:
        raise JenkinsCliError(
            t("cli.no_failed_build", label=label),
            hints=[t("cli.no_failed_build_hint")],
        )

    params = {param.name.strip(): param.value for param in last_failed.parameters if param.name.strip()}
    branch = next((value for name, value in params.items() if "branch" in name.lower() and value), None)
    number = f"#{last_failed.build_number}" if last_failed.build_number is not None else last_failed.build_url
    print_ok(t("cli.rerunning", label=label, number=number))
    trigger_build(client, env, job_url, label, params, branch=branch)
    return ActionResult.ACTION_OK


# =============================================================================
# Watch / Logs / Cancel
# =============================================================================


def _resolve_last_build_url(client: JenkinsClient, job_url: str, label: str) -> str:
    status = client.get_job_status(job_url)
    if not status.last_build_url:
        raise JenkinsCliError(t("cli.no_builds", label=label))
    return status.last_build_url


@dataclass
class WaitResult:
    """wait_for_build 결과

    exit_code: 성공 0, 실패 1, 시간 초과 124, 중단 130
    """

    result: str
    build_number: Optional[int] = None
    build_url: Optional[str] = None
    timed_out: bool = False
    cancelled: bool = False

    @property
    def exit_code(self) -> int:
        if self.timed_out:
            return 124
        if self.cancelled:
            return 130
        return 0 if self.result == "SUCCESS" else 1


def _poll_build(
    client: JenkinsClient,
    job_url: str,
    label: str,
    queue_url: Optional[str],
    build_url: Optional[str],
    interval: float,
    expired: Callable[[], bool],
    sleep: Callable[[float], None],
) -> Optional[BuildStatus]:
    """빌드가 끝날 때까지 폴링 (시간 초과면 None)"""
    if not build_url and queue_url:
        build_url = client.get_queue_build_url(queue_url)
        while build_url is None:
            if expired():
                return None
            sleep(interval)
            build_url = client.get_queue_build_url(queue_url)
    elif not build_url:
        build_url = _resolve_last_build_url(client, job_url, label)

    build = client.get_build_status(build_url)
    while build.building:
        if expired():
            return None
        sleep(interval)
        build = client.get_build_status(build_url)
    if not build.build_url:
        build.build_url = build_url
    return build


def wait_for_build(
    client: JenkinsClient,
    job_url: str,
    label: str,
    queue_url: Optional[str] = None,
    build_url: Optional[str] = None,
    poll_seconds: Optional[float] = None,
    timeout_seconds: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> WaitResult:
    """빌드가 끝날 때까지 대기하고 최종 결과를 출력

    Args:
        queue_url: 방금 트리거한 빌드의 큐 URL
        build_url: 추적할 빌드 URL (둘 다 없으면 job의 마지막 빌드)
        poll_seconds: 폴링 간격 (기본: settings.WATCH_POLL_SECONDS)
        timeout_seconds: 최대 대기 시간 (None이면 무제한)
    """
    interval = settings.WATCH_POLL_SECONDS if poll_seconds is None else poll_seconds
    started = clock()

    def expired() -> bool:
        return timeout_seconds is not None and clock() - started >= timeout_seconds

    try:
        with console.status(t("cli.watch_waiting", label=label)):
            build = _poll_build(client, job_url, label, queue_url, build_url, interval, expired, sleep)
    except KeyboardInterrupt:
        print_warning(t("cli.watch_cancelled"))
        return WaitResult(result="CANCELLED", build_url=build_url, cancelled=True)

    if build is None:
        elapsed = format_duration((clock() - started) * 1000)
        print_error(t("cli.watch_timed_out", label=label, elapsed=elapsed))
        return WaitResult(result="TIMEOUT", build_url=build_url, timed_out=True)

    result = build.result or "UNKNOWN"
    message = t("cli.build_finished", label=label, number=build.build_number, result=result)
    if result == "SUCCESS":
        print_ok(message)
    else:
        print_error(message)
    return WaitResult(result=result, build_number=build.build_number, build_url=build.build_url)


def watch_build(
    client: JenkinsClient,
    job_url: str,
    label: str,
    queue_url: Optional[str] = None,
    build_url: Optional[str] = None,
    poll_seconds: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ActionResult:
    """메뉴의 watch 작업 (Ctrl+C → WATCH_CANCELLED)"""
    waited = wait_for_build(
        client,
        job_url,
        label,
        queue_url=queue_url,
        build_url=build_url,
        poll_seconds=poll_seconds,
        sleep=sleep,
    )
    return ActionResult.WATCH_CANCELLED if waited.cancelled else ActionResult.ACTION_OK


def show_logs(client: JenkinsClient, job_url: str, label: str, build_url: Optional[str] = None) -> ActionResult:
    build_url = build_url or _resolve_last_build_url(client, job_url, label)
    text = client.get_console_text(build_url)
    print_rule(t("cli.console_output", url=build_url))
    console.print(text, markup=False, highlight=False)
    print_rule()
    return ActionResult.ACTION_OK


def cancel_build(
    client: JenkinsClient,
    job_url: str,
    label: str,
    confirm: Optional[Callable[[str], bool]] = None,
) -> ActionResult:
    """실행 중인 마지막 빌드 중지

    Args:
        confirm: 중지 전 확인 (None이면 묻지 않음)
    """
    status = client.get_job_status(job_url)
    if not status.building or not status.last_build_url:
        raise JenkinsCliError(
            t("cli.no_running_build", label=label),
            hints=[t("cli.no_running_build_hint")],
        )

    if confirm is not None and not confirm(t("cli.cancel_confirm", label=label, number=status.last_build_number)):
        print_ok(t("cli.cancel_skipped"))
        return ActionResult.ACTION_OK

    client.stop_build(status.last_build_url)
    print_ok(t("cli.build_cancelled", url=status.last_build_url))
    return ActionResult.ACTION_OK
