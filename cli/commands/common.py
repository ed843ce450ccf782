# cli/commands/common.py
"""list / build / status 명령 공통 유틸리티"""

from __future__ import annotations

import logging
from typing import List, Optional

from cli.flow.types import ActionResult, PromptAdapter
from cli.i18n import t
from cli.ui.console import console
from cli.ui.target import with_prompt_target
from core.config import EnvConfig
from core.exceptions import JenkinsCliError
from core.jenkins import JenkinsClient, JenkinsJob
from core.jobs import load_jobs

from .status_format import format_status_details, format_status_summary

logger = logging.getLogger(__name__)

# list 검색 프롬프트에서 종료로 처리하는 입력
QUIT_TOKENS = frozenset({"q", "quit", "exit"})


def confirm_with_adapter(adapter: PromptAdapter, env: EnvConfig, message: str, default: bool = False) -> bool:
    """Flow 밖 확인 질문 (취소는 False)"""
    value = adapter.confirm(with_prompt_target(message, env), default)
    if adapter.is_cancel(value):
        return False
    return bool(value)


def load_jobs_for_command(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: Optional[PromptAdapter] = None,
    refresh: bool = False,
    non_interactive: bool = False,
    job_url: Optional[str] = None,
) -> List[JenkinsJob]:
    """명령 시작 시 job 목록 로드

    --job-url이 주어지면 캐시는 라벨 표시용이므로 실패해도 빈 목록으로 진행합니다.

    Raises:
        JenkinsCliError: 캐시를 사용할 수 없거나 job이 하나도 없음
    """
    if job_url:
        try:
            return load_jobs(client, env, refresh=refresh, non_interactive=True)
        except JenkinsCliError as e:
            logger.debug("job 캐시 없이 진행: %s", e.message)
            return []

    confirm_refresh = None
    if adapter is not None and not non_interactive:

        def confirm_refresh(reason: str) -> bool:
            return confirm_with_adapter(adapter, env, t("cli.refresh_confirm", reason=reason), default=True)

    jobs = load_jobs(client, env, refresh=refresh, non_interactive=non_interactive, confirm_refresh=confirm_refresh)
    if not jobs:
        raise JenkinsCliError(t("cli.no_jobs_in_cache"), hints=[t("cli.no_jobs_in_cache_hint")])
    return jobs


def resolve_job_label(jobs: List[JenkinsJob], job_url: str) -> str:
    job = next((job for job in jobs if job.url == job_url), None)
    return job.display_name if job else job_url


def show_status(client: JenkinsClient, job_url: str, label: str) -> ActionResult:
    """마지막 빌드 요약 + 상세 출력"""
    status = client.get_job_status(job_url)
    if status.last_build_number is None:
        console.print(t("cli.no_builds", label=label))
        return ActionResult.ACTION_OK
    console.print(format_status_summary(label, status), markup=False, highlight=False)
    console.print(format_status_details(status, status.last_build_url or job_url), markup=False, highlight=False)
    return ActionResult.ACTION_OK
