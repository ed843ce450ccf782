# cli/flow/handlers.py
"""
Flow 핸들러 레지스트리

Context를 수정하고 다음 EventId를 계산하는 유일한 장소입니다. 캐시 조회, 검색 랭킹,
빌드 액션 호출과 재시도 전 사용자 진단 출력도 여기서 처리합니다.

    LIST_HANDLERS        - LIST_INTERACTIVE_FLOW
    BUILD_PRE_HANDLERS   - BUILD_PRE_FLOW
    BUILD_POST_HANDLERS  - BUILD_POST_FLOW
    STATUS_POST_HANDLERS - STATUS_POST_FLOW

핸들러 호출 규약:
    router:  handler(ctx) -> EventId
    prompt:  handler(ctx, value) -> EventId
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from cli.i18n import t
from cli.ui.console import print_cli_error, print_error, print_hint, print_ok
from core.branches import (
    dedupe_case_insensitive,
    load_cached_branch_history,
    load_cached_branches,
    remove_cached_branch,
)
from core.exceptions import JenkinsCliError, is_retryable_search_error
from core.jobs import resolve_job_candidates

from .constants import (
    BRANCH_CUSTOM_VALUE,
    BRANCH_REMOVE_VALUE,
    BUILD_WITH_CUSTOM_PARAMS_VALUE,
    BUILD_WITHOUT_PARAMS_VALUE,
    DONE_VALUE,
    EXIT_VALUE,
    SEARCH_AGAIN_VALUE,
    SEARCH_ALL_JOBS_VALUE,
)
from .context import (
    PARAMETER_MODE_BRANCH,
    PARAMETER_MODE_CUSTOM,
    PARAMETER_MODE_WITHOUT,
    BuildPostContext,
    BuildPreContext,
    ListInteractiveContext,
    StatusPostContext,
)
from .types import ActionResult, HandlerRegistry

logger = logging.getLogger(__name__)

ACTION_RESULTS = tuple(ActionResult)


def _select_event(value: Any) -> str:
    return f"select:{value}"


def _confirm_event(value: Any) -> str:
    return "confirm:yes" if value else "confirm:no"


def _remove_case_insensitive(entries: list[str], target: str) -> list[str]:
    key = target.lower()
    return [entry for entry in entries if entry.lower() != key]


def _set_selected_job(ctx: BuildPreContext, url: str, label: str) -> None:
    """선택된 job을 갱신합니다.

    빌드 모드를 프롬프트로 물은 뒤 job을 다시 고르면 모드 선택부터 다시 시작합니다.
    옵션으로 미리 정해진 값(--branch, --default-branch, 상태 조회 모드)은 유지됩니다.
    """
    if ctx.build_mode_prompted:
        ctx.build_mode_prompted = False
        ctx.parameter_mode = None
        ctx.branch = None
        ctx.custom_params = {}
        ctx.branch_choices = []
        ctx.removable_branches = []
        ctx.pending_custom_param_key = None
    ctx.selected_job_url = url
    ctx.selected_job_label = label


# =============================================================================
# Job 탐색 (list)
# =============================================================================

LIST_HANDLERS = HandlerRegistry("list_interactive")


@LIST_HANDLERS.register("list.select_job", emits=("select:search_again", "select:exit", "select:job"))
def list_select_job(ctx: ListInteractiveContext, value: Any = None) -> str:
    value = str(value)
    if value == SEARCH_AGAIN_VALUE:
        return "select:search_again"
    if value == EXIT_VALUE:
        return "select:exit"

    selected = next((job for job in ctx.jobs if job.url == value), None)
    if selected is None:
        return "select:search_again"
    ctx.selected_job = selected
    return "select:job"


@LIST_HANDLERS.register("list.select_action")
def list_select_action(ctx: ListInteractiveContext, value: Any = None) -> str:
    value = str(value)
    if value == DONE_VALUE:
        return DONE_VALUE
    ctx.selected_action = value
    return _select_event(value)


@LIST_HANDLERS.register("list.run_action", emits=ACTION_RESULTS)
def list_run_action(ctx: ListInteractiveContext, value: Any = None) -> Any:
    if ctx.selected_job is None or not ctx.selected_action:
        return ActionResult.ACTION_ERROR
    return ctx.perform_action(ctx.selected_action, ctx.selected_job)


# =============================================================================
# 빌드 전 입력 수집
# =============================================================================

BUILD_PRE_HANDLERS = HandlerRegistry("build_pre")


@BUILD_PRE_HANDLERS.register("build_pre.entry", emits=("show_recent", "search_direct"))
def build_pre_entry(ctx: BuildPreContext, value: Any = None) -> str:
    return "show_recent" if ctx.recent_jobs else "search_direct"


@BUILD_PRE_HANDLERS.register("build_pre.select_recent_job", emits=("select:search_all", "select:recent"))
def select_recent_job(ctx: BuildPreContext, value: Any = None) -> str:
    value = str(value)
    if value == SEARCH_ALL_JOBS_VALUE:
        return "select:search_all"

    recent = next((entry for entry in ctx.recent_jobs if entry.url == value), None)
    if recent is None:
        return "select:search_all"

    matching = next((job for job in ctx.jobs if job.url == recent.url), None)
    _set_selected_job(ctx, recent.url, matching.display_name if matching else recent.label)
    ctx.search_query = ""
    ctx.search_candidates = []
    return "select:recent"


@BUILD_PRE_HANDLERS.register("build_pre.submit_search", emits=("search:retry", "search:auto", "search:candidates"))
def submit_search(ctx: BuildPreContext, value: Any = None) -> str:
    """검색어로 job 후보를 찾습니다.

    후보가 1개면 바로 선택(search:auto), 여러 개면 선택 프롬프트(search:candidates).
    빈 검색어나 매칭 실패는 진단 출력 후 search:retry.
    """
    query = str(value if value is not None else "").strip()
    ctx.search_query = query
    if not query:
        print_error(t("flow.job_name_required"))
        print_hint(t("flow.job_name_required_hint"))
        return "search:retry"

    try:
        candidates = resolve_job_candidates(query, ctx.jobs)
    except JenkinsCliError as e:
        if not is_retryable_search_error(e):
            raise
        print_cli_error(e)
        return "search:retry"

    if len(candidates) == 1:
        _set_selected_job(ctx, candidates[0].url, candidates[0].display_name)
        ctx.search_candidates = []
        return "search:auto"

    ctx.search_candidates = candidates
    return "search:candidates"


@BUILD_PRE_HANDLERS.register("build_pre.select_search_candidate", emits=("select:search_again", "select:job"))
def select_search_candidate(ctx: BuildPreContext, value: Any = None) -> str:
    value = str(value)
    selected = next((job for job in ctx.search_candidates if job.url == value), None)
    if selected is None:
        return "select:search_again"
    _set_selected_job(ctx, selected.url, selected.display_name)
    ctx.search_candidates = []
    return "select:job"


@BUILD_PRE_HANDLERS.register(
    "build_pre.select_build_mode",
    emits=("mode:with_branch", "mode:with_custom", "mode:without_params"),
)
def select_build_mode(ctx: BuildPreContext, value: Any = None) -> str:
    value = str(value)
    ctx.build_mode_prompted = True
    if value == BUILD_WITHOUT_PARAMS_VALUE:
        ctx.parameter_mode = PARAMETER_MODE_WITHOUT
        ctx.branch = None
        ctx.custom_params = {}
        return "mode:without_params"
    if value == BUILD_WITH_CUSTOM_PARAMS_VALUE:
        ctx.parameter_mode = PARAMETER_MODE_CUSTOM
        ctx.branch = None
        return "mode:with_custom"
    ctx.parameter_mode = PARAMETER_MODE_BRANCH
    return "mode:with_branch"


@BUILD_PRE_HANDLERS.register(
    "build_pre.prepare_branch",
    emits=("branch:ready", "branch:mode", "branch:select", "branch:entry", "custom:key", "branch:error"),
)
def prepare_branch(ctx: BuildPreContext, value: Any = None) -> str:
    """브랜치 입력이 필요한지 판단하고 선택지를 준비합니다.

    - 파라미터 없음 / 기본 브랜치 / 이미 정해진 브랜치 → branch:ready
    - 사용자 정의 파라미터 모드 → custom:key
    - 처음 방문 → 빌드 모드 선택 (branch:mode)
    - 캐시된 브랜치가 있으면 branch:select, 없으면 branch:entry
    """
    branch = (ctx.branch or "").strip()
    if ctx.parameter_mode == PARAMETER_MODE_WITHOUT or ctx.default_branch or branch:
        ctx.branch = branch or None
        return "branch:ready"

    if ctx.parameter_mode == PARAMETER_MODE_CUSTOM:
        return "custom:key"

    job_url = (ctx.selected_job_url or "").strip()
    if not job_url:
        logger.debug("prepare_branch: no job selected")
        return "branch:error"

    if not ctx.build_mode_prompted and ctx.parameter_mode is None:
        ctx.build_mode_prompted = True
        return "branch:mode"

    ctx.branch_choices = dedupe_case_insensitive(load_cached_branches(ctx.env, job_url))
    ctx.removable_branches = dedupe_case_insensitive(load_cached_branch_history(ctx.env, job_url))
    return "branch:select" if ctx.branch_choices else "branch:entry"


@BUILD_PRE_HANDLERS.register(
    "build_pre.select_branch",
    emits=("branch:remove", "branch:entry", "branch:selected"),
)
def select_branch(ctx: BuildPreContext, value: Any = None) -> str:
    value = str(value)
    if value == BRANCH_REMOVE_VALUE and ctx.removable_branches:
        return "branch:remove"
    if value in (BRANCH_CUSTOM_VALUE, BRANCH_REMOVE_VALUE):
        return "branch:entry"
    branch = value.strip()
    if not branch:
        return "branch:entry"
    ctx.branch = branch
    return "branch:selected"


@BUILD_PRE_HANDLERS.register("build_pre.select_branch_to_remove", emits=("remove:selected",))
def select_branch_to_remove(ctx: BuildPreContext, value: Any = None) -> str:
    branch = str(value).strip()
    if branch:
        ctx.pending_branch_removal = branch
    return "remove:selected"


@BUILD_PRE_HANDLERS.register("build_pre.remove_branch", emits=("remove:done",))
def remove_branch(ctx: BuildPreContext, value: Any = None) -> str:
    job_url = (ctx.selected_job_url or "").strip()
    branch = (ctx.pending_branch_removal or "").strip()
    ctx.pending_branch_removal = None
    if not job_url or not branch:
        return "remove:done"

    if remove_cached_branch(ctx.env, job_url, branch):
        ctx.removable_branches = _remove_case_insensitive(ctx.removable_branches, branch)
        ctx.branch_choices = _remove_case_insensitive(ctx.branch_choices, branch)
        print_ok(t("flow.branch_removed", branch=branch))
    return "remove:done"


@BUILD_PRE_HANDLERS.register("build_pre.submit_branch", emits=("branch:retry", "branch:selected"))
def submit_branch(ctx: BuildPreContext, value: Any = None) -> str:
    branch = str(value if value is not None else "").strip()
    if not branch:
        print_error(t("flow.branch_required"))
        print_hint(t("flow.branch_required_hint"))
        return "branch:retry"
    ctx.branch = branch
    return "branch:selected"


@BUILD_PRE_HANDLERS.register("build_pre.submit_custom_param_key", emits=("param:key_retry", "param:key_ready"))
def submit_custom_param_key(ctx: BuildPreContext, value: Any = None) -> str:
    key = str(value if value is not None else "").strip()
    if not key:
        print_error(t("flow.param_name_required"))
        print_hint(t("flow.param_name_required_hint"))
        return "param:key_retry"

    taken = {name.lower() for name in ctx.custom_params}
    if ctx.branch:
        taken.add(ctx.branch_param.lower())
    if key.lower() in taken:
        print_error(t("flow.param_already_set", param=key))
        print_hint(t("flow.param_already_set_hint"))
        return "param:key_retry"

    ctx.pending_custom_param_key = key
    return "param:key_ready"


@BUILD_PRE_HANDLERS.register("build_pre.submit_custom_param_value", emits=("param:value_retry", "param:added"))
def submit_custom_param_value(ctx: BuildPreContext, value: Any = None) -> str:
    key = ctx.pending_custom_param_key
    if not key:
        return "param:value_retry"
    ctx.custom_params[key] = str(value if value is not None else "").strip()
    ctx.pending_custom_param_key = None
    return "param:added"


@BUILD_PRE_HANDLERS.register("build_pre.cancel_custom_param_entry", emits=("custom:done", "custom:mode"))
def cancel_custom_param_entry(ctx: BuildPreContext, value: Any = None) -> str:
    # 이미 입력한 값이 있으면 그대로 빌드, 없으면 빌드 모드 선택으로
    ctx.pending_custom_param_key = None
    if ctx.custom_params or ctx.branch:
        return "custom:done"
    ctx.parameter_mode = None
    return "custom:mode"


# =============================================================================
# 빌드 후 후속 작업
# =============================================================================

BUILD_POST_HANDLERS = HandlerRegistry("build_post")


def _post_select_action(ctx: Any, value: Any) -> str:
    value = str(value)
    if value == DONE_VALUE:
        return DONE_VALUE
    ctx.selected_action = value
    return _select_event(value)


def _post_run_action(ctx: Any) -> Any:
    if not ctx.selected_action:
        return ActionResult.ACTION_ERROR
    return ctx.perform_action(ctx.selected_action)


@BUILD_POST_HANDLERS.register("build_post.select_action")
def build_select_action(ctx: BuildPostContext, value: Any = None) -> str:
    return _post_select_action(ctx, value)


@BUILD_POST_HANDLERS.register("build_post.run_action", emits=ACTION_RESULTS)
def build_run_action(ctx: BuildPostContext, value: Any = None) -> Any:
    return _post_run_action(ctx)


@BUILD_POST_HANDLERS.register("build_post.after_menu", emits=("return_to_caller", "ask_repeat"))
def build_after_menu(ctx: BuildPostContext, value: Any = None) -> str:
    return "return_to_caller" if ctx.return_to_caller else "ask_repeat"


@BUILD_POST_HANDLERS.register("build_post.after_root", emits=("return_to_caller_root", "ask_repeat"))
def build_after_root(ctx: BuildPostContext, value: Any = None) -> str:
    return "return_to_caller_root" if ctx.return_to_caller else "ask_repeat"


@BUILD_POST_HANDLERS.register("build_post.repeat_confirm", emits=("confirm:yes", "confirm:no"))
def build_repeat_confirm(ctx: BuildPostContext, value: Optional[Any] = None) -> str:
    return _confirm_event(value)


# =============================================================================
# 상태 조회 후 후속 작업
# =============================================================================

STATUS_POST_HANDLERS = HandlerRegistry("status_post")


@STATUS_POST_HANDLERS.register("status_post.select_action")
def status_select_action(ctx: StatusPostContext, value: Any = None) -> str:
    return _post_select_action(ctx, value)


@STATUS_POST_HANDLERS.register("status_post.run_action", emits=ACTION_RESULTS)
def status_run_action(ctx: StatusPostContext, value: Any = None) -> Any:
    return _post_run_action(ctx)


@STATUS_POST_HANDLERS.register("status_post.repeat_confirm", emits=("confirm:yes", "confirm:no"))
def status_repeat_confirm(ctx: StatusPostContext, value: Optional[Any] = None) -> str:
    return _confirm_event(value)


HANDLERS = {
    "list_interactive": LIST_HANDLERS,
    "build_pre": BUILD_PRE_HANDLERS,
    "build_post": BUILD_POST_HANDLERS,
    "status_post": STATUS_POST_HANDLERS,
}
