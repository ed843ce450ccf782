# cli/commands/ops_cmd.py
"""
wait / logs / cancel / rerun 명령

메뉴의 후속 작업을 단독 명령으로 실행합니다. 대상 job은 status와 같은 방식으로
정합니다 (--job 검색, --job-url, 대화형이면 job 선택 Flow).

    jenkins-cli wait --job api-deploy --timeout 10m   # 실패 1, 시간 초과 124, 중단 130
    jenkins-cli logs --build-url https://jenkins/job/api-deploy/42/
    jenkins-cli cancel --job api-deploy
    jenkins-cli rerun --job api-deploy
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from cli.flow.types import PromptAdapter
from cli.i18n import t
from core.config import EnvConfig, settings
from core.exceptions import JenkinsCliError
from core.jenkins import JenkinsClient

from .actions import WaitResult, cancel_build, rerun_last_failed, show_logs, wait_for_build
from .common import confirm_with_adapter
from .status_cmd import resolve_job_target

logger = logging.getLogger(__name__)

# 단위가 없으면 ms
_DURATION = re.compile(r"^(\d+)(ms|s|m|h)?$", re.IGNORECASE)
_DURATION_SECONDS = {"ms": 0.001, "s": 1, "m": 60, "h": 3600}


def parse_duration(value: Optional[str], option: str, default: Optional[float] = None) -> Optional[float]:
    """"500ms" / "30s" / "5m" / "1h" → 초

    Raises:
        JenkinsCliError: 형식 오류 또는 0 이하
    """
    text = (value or "").strip()
    if not text:
        return default

    match = _DURATION.match(text)
    if not match or int(match.group(1)) <= 0:
        raise JenkinsCliError(
            t("cli.invalid_duration", option=option, value=text),
            hints=[t("cli.invalid_duration_hint")],
        )
    return int(match.group(1)) * _DURATION_SECONDS[(match.group(2) or "ms").lower()]


def run_wait(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: Optional[PromptAdapter] = None,
    job: Optional[str] = None,
    job_url: Optional[str] = None,
    build_url: Optional[str] = None,
    queue_url: Optional[str] = None,
    interval: Optional[str] = None,
    timeout: Optional[str] = None,
    non_interactive: bool = False,
) -> Optional[WaitResult]:
    """wait 명령 실행

    Returns:
        WaitResult (exit_code로 종료), job 선택을 취소하면 None
    """
    if job and job_url:
        raise JenkinsCliError(t("cli.job_and_job_url"))
    if build_url and (job or job_url or queue_url):
        raise JenkinsCliError(t("cli.build_url_and_target"), hints=[t("cli.build_url_and_target_hint")])

    poll_seconds = parse_duration(interval, "interval", default=settings.WATCH_POLL_SECONDS)
    timeout_seconds = parse_duration(timeout, "timeout")

    if build_url or queue_url:
        label = (build_url or queue_url or "").strip()
        return wait_for_build(
            client,
            label,
            label,
            queue_url=queue_url,
            build_url=build_url,
            poll_seconds=poll_seconds,
            timeout_seconds=timeout_seconds,
        )

    target = resolve_job_target(client, env, adapter, job=job, job_url=job_url, non_interactive=non_interactive)
    if target is None:
        return None
    target_url, label = target
    return wait_for_build(client, target_url, label, poll_seconds=poll_seconds, timeout_seconds=timeout_seconds)


def run_logs(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: Optional[PromptAdapter] = None,
    job: Optional[str] = None,
    job_url: Optional[str] = None,
    build_url: Optional[str] = None,
    non_interactive: bool = False,
) -> None:
    """logs 명령 실행 (--build-url이 없으면 job의 마지막 빌드)"""
    if build_url and (job or job_url):
        raise JenkinsCliError(t("cli.build_url_and_target"), hints=[t("cli.build_url_and_target_hint")])

    if build_url:
        build_url = build_url.strip()
        show_logs(client, build_url, build_url, build_url=build_url)
        return

    target = resolve_job_target(client, env, adapter, job=job, job_url=job_url, non_interactive=non_interactive)
    if target is not None:
        show_logs(client, *target)


def run_cancel(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: Optional[PromptAdapter] = None,
    job: Optional[str] = None,
    job_url: Optional[str] = None,
    non_interactive: bool = False,
) -> None:
    """cancel 명령 실행 (대화형이면 중지 전에 확인)"""
    target = resolve_job_target(client, env, adapter, job=job, job_url=job_url, non_interactive=non_interactive)
    if target is None:
        return

    confirm = None
    if adapter is not None and not non_interactive:

        def confirm(message: str) -> bool:
            return confirm_with_adapter(adapter, env, message, default=True)

    cancel_build(client, *target, confirm=confirm)


def run_rerun(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: Optional[PromptAdapter] = None,
    job: Optional[str] = None,
    job_url: Optional[str] = None,
    non_interactive: bool = False,
) -> None:
    """rerun 명령 실행"""
    target = resolve_job_target(client, env, adapter, job=job, job_url=job_url, non_interactive=non_interactive)
    if target is not None:
        rerun_last_failed(client, env, *target)
