# cli/flow/definitions.py
"""
Flow 정의 (선언형 상태 테이블)

    LIST_INTERACTIVE_FLOW - job 탐색 후 작업 선택 (list)
    BUILD_PRE_FLOW        - 빌드 전 job/브랜치/파라미터 수집 (build, status)
    BUILD_POST_FLOW       - 빌드 후 후속 작업
    STATUS_POST_FLOW      - 상태 조회 후 후속 작업

상태는 prompt 상태 또는 on_enter 라우터 상태입니다. 전이 대상은 상태 이름 또는
TerminalOutcome 값입니다. 모든 프롬프트 문구는 Context 투영 함수로 렌더링 시점에
번역되며 Context를 수정하지 않습니다.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Tuple

from cli.i18n import t
from cli.ui.target import with_prompt_target

from .constants import (
    BRANCH_CUSTOM_VALUE,
    BRANCH_REMOVE_VALUE,
    BUILD_WITH_CUSTOM_PARAMS_VALUE,
    BUILD_WITH_PARAMS_VALUE,
    BUILD_WITHOUT_PARAMS_VALUE,
    DONE_VALUE,
    EXIT_VALUE,
    SEARCH_AGAIN_VALUE,
    SEARCH_ALL_JOBS_VALUE,
)
from .types import (
    ActionResult,
    ConfirmPrompt,
    FlowDefinition,
    PromptOption,
    SelectPrompt,
    StateDefinition,
    TerminalOutcome,
    TextPrompt,
)

EXIT = TerminalOutcome.EXIT_COMMAND
ROOT = TerminalOutcome.ROOT
COMPLETE = TerminalOutcome.COMPLETE


def _message(key: str, **kwargs: Any) -> Callable[[Any], str]:
    return lambda ctx: with_prompt_target(t(key, **kwargs), ctx.env)


def _options(*pairs: Tuple[str, str]) -> Callable[[Any], List[PromptOption]]:
    """(value, 메시지 키) 쌍을 번역된 선택지로"""
    return lambda ctx: [PromptOption(value=value, label=t(key)) for value, key in pairs]


def _job_options(jobs: List[Any]) -> List[PromptOption]:
    return [PromptOption(value=job.url, label=job.display_name) for job in jobs]


# =============================================================================
# Job 탐색 (list)
# =============================================================================


def _list_job_options(ctx: Any) -> List[PromptOption]:
    return [
        *_job_options(ctx.jobs),
        PromptOption(value=SEARCH_AGAIN_VALUE, label=t("flow.search_again")),
        PromptOption(value=EXIT_VALUE, label=t("flow.exit")),
    ]


def _list_action_message(ctx: Any) -> str:
    label = ctx.selected_job.display_name if ctx.selected_job else t("flow.job_fallback")
    return with_prompt_target(t("flow.action_for", label=label), ctx.env)


LIST_INTERACTIVE_FLOW = FlowDefinition(
    id="list_interactive",
    initial_state="select_job",
    states={
        "select_job": StateDefinition(
            root=True,
            prompt=SelectPrompt(
                message=_message("flow.select_job_to_operate"),
                options=_list_job_options,
            ),
            on_select="list.select_job",
            transitions={
                "esc": ROOT,
                "select:search_again": ROOT,
                "select:exit": EXIT,
                "select:job": "action_menu",
            },
        ),
        "action_menu": StateDefinition(
            prompt=SelectPrompt(
                message=_list_action_message,
                options=_options(
                    ("build", "flow.action_build"),
                    ("status", "flow.action_status"),
                    ("watch", "flow.action_watch"),
                    ("logs", "flow.action_logs"),
                    ("cancel", "flow.action_cancel"),
                    ("rerun", "flow.action_rerun_failed"),
                    ("search", "flow.back_to_search"),
                    ("exit", "flow.exit"),
                ),
            ),
            on_select="list.select_action",
            transitions={
                "esc": "select_job",
                "select:search": ROOT,
                "select:exit": EXIT,
                "select:build": "run_action",
                "select:status": "run_action",
                "select:watch": "run_action",
                "select:logs": "run_action",
                "select:cancel": "run_action",
                "select:rerun": "run_action",
            },
        ),
        "run_action": StateDefinition(
            on_enter="list.run_action",
            transitions={
                ActionResult.ACTION_OK: "action_menu",
                ActionResult.WATCH_CANCELLED: ROOT,
                ActionResult.ACTION_ERROR: ROOT,
                ActionResult.ROOT: ROOT,
                ActionResult.EXIT: EXIT,
            },
        ),
    },
)


# =============================================================================
# 빌드 전 입력 수집
# =============================================================================


def _recent_options(ctx: Any) -> List[PromptOption]:
    return [
        PromptOption(value=SEARCH_ALL_JOBS_VALUE, label=t("flow.search_all_jobs")),
        *[PromptOption(value=job.url, label=job.label) for job in ctx.recent_jobs],
    ]


def _search_prompt() -> TextPrompt:
    return TextPrompt(
        message=_message("flow.job_search_prompt"),
        placeholder=lambda ctx: t("flow.job_search_placeholder"),
        initial=lambda ctx: ctx.search_query,
    )


def _candidate_prompt() -> SelectPrompt:
    return SelectPrompt(
        message=_message("flow.select_candidate"),
        options=lambda ctx: _job_options(ctx.search_candidates),
    )


def _branch_options(ctx: Any) -> List[PromptOption]:
    options: List[PromptOption] = []
    if ctx.removable_branches:
        options.append(PromptOption(value=BRANCH_REMOVE_VALUE, label=t("flow.remove_cached_branch")))
    options.extend(PromptOption(value=branch, label=branch) for branch in ctx.branch_choices)
    options.append(PromptOption(value=BRANCH_CUSTOM_VALUE, label=t("flow.type_different_branch")))
    return options


def _custom_value_message(ctx: Any) -> str:
    if ctx.pending_custom_param_key:
        message = t("flow.param_value_for", param=ctx.pending_custom_param_key)
    else:
        message = t("flow.param_value")
    return with_prompt_target(message, ctx.env)


BUILD_PRE_FLOW = FlowDefinition(
    id="build_pre",
    initial_state="entry",
    states={
        "entry": StateDefinition(
            on_enter="build_pre.entry",
            transitions={
                "show_recent": "recent_menu",
                "search_direct": "search_direct",
            },
        ),
        "recent_menu": StateDefinition(
            root=True,
            prompt=SelectPrompt(message=_message("flow.recent_jobs"), options=_recent_options),
            on_select="build_pre.select_recent_job",
            transitions={
                "esc": EXIT,
                "select:search_all": "search_from_recent",
                "select:recent": "prepare_branch",
            },
        ),
        "search_from_recent": StateDefinition(
            prompt=_search_prompt(),
            on_select="build_pre.submit_search",
            transitions={
                "esc": "recent_menu",
                "search:retry": "search_from_recent",
                "search:candidates": "results_from_recent",
                "search:auto": "prepare_branch",
            },
        ),
        "search_direct": StateDefinition(
            root=True,
            prompt=_search_prompt(),
            on_select="build_pre.submit_search",
            transitions={
                "esc": EXIT,
                "search:retry": "search_direct",
                "search:candidates": "results_direct",
                "search:auto": "prepare_branch",
            },
        ),
        "results_from_recent": StateDefinition(
            prompt=_candidate_prompt(),
            on_select="build_pre.select_search_candidate",
            transitions={
                "esc": "search_from_recent",
                "select:search_again": "search_from_recent",
                "select:job": "prepare_branch",
            },
        ),
        "results_direct": StateDefinition(
            prompt=_candidate_prompt(),
            on_select="build_pre.select_search_candidate",
            transitions={
                "esc": "search_direct",
                "select:search_again": "search_direct",
                "select:job": "prepare_branch",
            },
        ),
        "branch_mode": StateDefinition(
            prompt=SelectPrompt(
                message=_message("flow.build_mode"),
                options=_options(
                    (BUILD_WITH_PARAMS_VALUE, "flow.build_with_branch"),
                    (BUILD_WITH_CUSTOM_PARAMS_VALUE, "flow.build_with_custom"),
                    (BUILD_WITHOUT_PARAMS_VALUE, "flow.build_without_params"),
                ),
            ),
            on_select="build_pre.select_build_mode",
            transitions={
                "esc": "entry",
                "mode:with_branch": "prepare_branch",
                "mode:with_custom": "custom_key",
                "mode:without_params": COMPLETE,
            },
        ),
        "prepare_branch": StateDefinition(
            on_enter="build_pre.prepare_branch",
            transitions={
                "branch:ready": COMPLETE,
                "branch:mode": "branch_mode",
                "branch:select": "branch_select",
                "branch:entry": "branch_entry",
                "custom:key": "custom_key",
                "branch:error": "entry",
            },
        ),
        "branch_select": StateDefinition(
            prompt=SelectPrompt(message=_message("flow.branch_select"), options=_branch_options),
            on_select="build_pre.select_branch",
            transitions={
                "esc": "branch_mode",
                "branch:selected": "custom_confirm",
                "branch:entry": "branch_entry",
                "branch:remove": "branch_remove",
                "branch:retry": "branch_select",
            },
        ),
        "branch_remove": StateDefinition(
            prompt=SelectPrompt(
                message=_message("flow.remove_cached_branch"),
                options=lambda ctx: [PromptOption(value=b, label=b) for b in ctx.removable_branches],
            ),
            on_select="build_pre.select_branch_to_remove",
            transitions={
                "esc": "branch_select",
                "remove:selected": "branch_remove_apply",
            },
        ),
        "branch_remove_apply": StateDefinition(
            on_enter="build_pre.remove_branch",
            transitions={"remove:done": "branch_select"},
        ),
        "branch_entry": StateDefinition(
            prompt=TextPrompt(
                message=_message("flow.branch_name"),
                placeholder=lambda ctx: t("flow.branch_placeholder"),
            ),
            on_select="build_pre.submit_branch",
            transitions={
                "esc": "branch_mode",
                "branch:retry": "branch_entry",
                "branch:selected": "custom_confirm",
            },
        ),
        # on_select 없음: confirm:yes / confirm:no 기본 이벤트
        "custom_confirm": StateDefinition(
            prompt=ConfirmPrompt(message=_message("flow.add_custom_params"), initial=False),
            transitions={
                "esc": COMPLETE,
                "confirm:yes": "custom_key",
                "confirm:no": COMPLETE,
            },
        ),
        "custom_key": StateDefinition(
            prompt=TextPrompt(
                message=_message("flow.param_name"),
                placeholder=lambda ctx: t("flow.param_name_placeholder"),
            ),
            on_select="build_pre.submit_custom_param_key",
            transitions={
                "esc": "custom_cancel",
                "param:key_retry": "custom_key",
                "param:key_ready": "custom_value",
            },
        ),
        "custom_value": StateDefinition(
            prompt=TextPrompt(message=_custom_value_message),
            on_select="build_pre.submit_custom_param_value",
            transitions={
                "esc": "custom_key",
                "param:value_retry": "custom_key",
                "param:added": "custom_more",
            },
        ),
        "custom_more": StateDefinition(
            prompt=ConfirmPrompt(message=_message("flow.add_another_param"), initial=False),
            transitions={
                "esc": "custom_cancel",
                "confirm:yes": "custom_key",
                "confirm:no": COMPLETE,
            },
        ),
        "custom_cancel": StateDefinition(
            on_enter="build_pre.cancel_custom_param_entry",
            transitions={
                "custom:mode": "branch_mode",
                "custom:done": COMPLETE,
            },
        ),
    },
)


# =============================================================================
# 빌드 후 후속 작업
# =============================================================================

BUILD_POST_FLOW = FlowDefinition(
    id="build_post",
    initial_state="action_menu",
    states={
        "action_menu": StateDefinition(
            prompt=SelectPrompt(
                message=lambda ctx: with_prompt_target(t("flow.next_action_for", label=ctx.job_label), ctx.env),
                options=_options(
                    ("watch", "flow.action_watch"),
                    ("logs", "flow.action_logs"),
                    ("cancel", "flow.action_cancel"),
                    ("rerun", "flow.action_rerun_same"),
                    (DONE_VALUE, "flow.action_done"),
                ),
            ),
            on_select="build_post.select_action",
            transitions={
                "esc": "after_menu",
                DONE_VALUE: "after_menu",
                "select:watch": "run_action",
                "select:logs": "run_action",
                "select:cancel": "run_action",
                "select:rerun": "run_action",
            },
        ),
        "run_action": StateDefinition(
            on_enter="build_post.run_action",
            transitions={
                ActionResult.ACTION_OK: "action_menu",
                ActionResult.WATCH_CANCELLED: "after_root",
                ActionResult.ACTION_ERROR: "after_root",
                ActionResult.ROOT: "after_root",
                ActionResult.EXIT: EXIT,
            },
        ),
        "after_menu": StateDefinition(
            on_enter="build_post.after_menu",
            transitions={
                "ask_repeat": "repeat_confirm",
                "return_to_caller": TerminalOutcome.RETURN_TO_CALLER,
            },
        ),
        "after_root": StateDefinition(
            on_enter="build_post.after_root",
            transitions={
                "ask_repeat": "repeat_confirm",
                "return_to_caller_root": TerminalOutcome.RETURN_TO_CALLER_ROOT,
            },
        ),
        "repeat_confirm": StateDefinition(
            root=True,
            prompt=ConfirmPrompt(message=_message("flow.trigger_another_build"), initial=False),
            on_select="build_post.repeat_confirm",
            transitions={
                "esc": EXIT,
                "confirm:yes": TerminalOutcome.REPEAT,
                "confirm:no": EXIT,
            },
        ),
    },
)


# =============================================================================
# 상태 조회 후 후속 작업
# =============================================================================

STATUS_POST_FLOW = FlowDefinition(
    id="status_post",
    initial_state="action_menu",
    states={
        "action_menu": StateDefinition(
            prompt=SelectPrompt(
                message=lambda ctx: with_prompt_target(t("flow.action_for", label=ctx.target_label), ctx.env),
                options=_options(
                    ("watch", "flow.action_watch"),
                    ("logs", "flow.action_logs"),
                    ("cancel", "flow.action_cancel_running"),
                    ("rerun", "flow.action_rerun_last_failed"),
                    ("build", "flow.action_build_now"),
                    (DONE_VALUE, "flow.action_done"),
                ),
            ),
            on_select="status_post.select_action",
            transitions={
                "esc": "again_confirm",
                DONE_VALUE: "again_confirm",
                "select:watch": "run_action",
                "select:logs": "run_action",
                "select:cancel": "run_action",
                "select:rerun": "run_action",
                "select:build": "run_action",
            },
        ),
        "run_action": StateDefinition(
            on_enter="status_post.run_action",
            transitions={
                ActionResult.ACTION_OK: "action_menu",
                ActionResult.WATCH_CANCELLED: "again_confirm",
                ActionResult.ACTION_ERROR: "again_confirm",
                ActionResult.ROOT: "again_confirm",
                ActionResult.EXIT: EXIT,
            },
        ),
        "again_confirm": StateDefinition(
            root=True,
            prompt=ConfirmPrompt(message=_message("flow.check_another_job"), initial=False),
            on_select="status_post.repeat_confirm",
            transitions={
                "esc": EXIT,
                "confirm:yes": TerminalOutcome.REPEAT,
                "confirm:no": EXIT,
            },
        ),
    },
)


FLOWS: Dict[str, FlowDefinition] = {
    flow.id: flow for flow in (LIST_INTERACTIVE_FLOW, BUILD_PRE_FLOW, BUILD_POST_FLOW, STATUS_POST_FLOW)
}
