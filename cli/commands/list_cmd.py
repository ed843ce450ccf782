# cli/commands/list_cmd.py
"""
list 명령

검색어로 job을 찾아 출력하고, 대화형 모드에서는 LIST_INTERACTIVE_FLOW로 job을
골라 작업(build / status / watch / logs / cancel / rerun)을 실행합니다.

Flow 결과 처리:
    exit_command               - 세션 종료
    root (select_job 이외에서) - 같은 Context로 select_job부터 재개
    root (select_job에서)      - 검색 프롬프트로 돌아감
"""

from __future__ import annotations

import logging
from typing import List, Optional

from cli.flow.context import ListInteractiveContext
from cli.flow.definitions import LIST_INTERACTIVE_FLOW
from cli.flow.handlers import LIST_HANDLERS
from cli.flow.runner import run_flow
from cli.flow.types import PromptAdapter, TerminalOutcome
from cli.i18n import t
from cli.ui.console import console, print_error, print_hint, print_table
from cli.ui.target import with_prompt_target
from core.config import EnvConfig
from core.jenkins import JenkinsClient, JenkinsJob
from core.jobs import filter_jobs

from .common import QUIT_TOKENS, load_jobs_for_command
from .status_cmd import perform_job_action

logger = logging.getLogger(__name__)

LIST_ROOT_STATE = "select_job"


def print_jobs(jobs: List[JenkinsJob]) -> None:
    if not jobs:
        console.print(t("cli.no_jobs_to_show"))
        return
    print_table(
        title=t("cli.jobs_title", count=len(jobs)),
        columns=[t("cli.column_job"), t("cli.column_url")],
        rows=[[job.display_name, job.url] for job in jobs],
    )


def _ask_search(adapter: PromptAdapter, env: EnvConfig) -> Optional[str]:
    """검색어 입력 (취소 또는 q/quit/exit → None)"""
    value = adapter.text(
        with_prompt_target(t("cli.list_search_prompt"), env),
        t("cli.list_search_placeholder"),
        None,
    )
    if adapter.is_cancel(value):
        return None
    query = str(value).strip()
    if query.lower() in QUIT_TOKENS:
        return None
    return query


def run_job_session(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: PromptAdapter,
    matches: List[JenkinsJob],
    jobs: Optional[List[JenkinsJob]] = None,
) -> bool:
    """검색 결과 하나에 대한 LIST_INTERACTIVE_FLOW 세션

    Returns:
        True면 명령 종료 (exit_command), False면 검색 프롬프트로
    """

    def perform_action(action: str, job: JenkinsJob):
        return perform_job_action(action, client, env, adapter, job.url, job.display_name, jobs)

    ctx = ListInteractiveContext(env=env, jobs=matches, perform_action=perform_action)
    start_state = None
    while True:
        result = run_flow(LIST_INTERACTIVE_FLOW, LIST_HANDLERS, adapter, ctx, start_state_id=start_state)
        if result.terminal == TerminalOutcome.EXIT_COMMAND:
            return True
        if result.terminal == TerminalOutcome.ROOT and result.state_id != LIST_ROOT_STATE:
            start_state = LIST_ROOT_STATE
            continue
        return False


def run_list(
    client: JenkinsClient,
    env: EnvConfig,
    adapter: Optional[PromptAdapter] = None,
    search: Optional[str] = None,
    refresh: bool = False,
    non_interactive: bool = False,
) -> None:
    """list 명령 실행

    Args:
        search: 초기 검색어 (없으면 대화형 모드에서 입력 받음)
        refresh: Jenkins에서 job 목록을 다시 가져옴
        non_interactive: 결과만 출력

    Raises:
        JenkinsCliError: 캐시/API 오류
    """
    if non_interactive or adapter is None:
        jobs = load_jobs_for_command(client, env, refresh=refresh, non_interactive=True)
        print_jobs(filter_jobs(jobs, (search or "").strip()))
        return

    jobs = load_jobs_for_command(client, env, adapter=adapter, refresh=refresh)
    query = (search or "").strip() or None
    while True:
        if query is None:
            query = _ask_search(adapter, env)
            if query is None:
                return

        matches = filter_jobs(jobs, query)
        if not matches:
            print_error(t("cli.no_jobs_match", query=query))
            print_hint(t("cli.list_try_again_hint"))
            query = None
            continue

        print_jobs(matches)
        if run_job_session(client, env, adapter, matches, jobs):
            return
        query = None
