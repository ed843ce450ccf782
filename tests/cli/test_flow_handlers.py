# tests/cli/test_flow_handlers.py
"""
cli/flow/handlers.py 단위 테스트

핸들러는 Flow 없이 직접 호출하고, 캐시 접근은 cli.flow.handlers 네임스페이스에서 patch 합니다.
"""

from unittest.mock import MagicMock, patch

import pytest

from cli.flow import handlers
from cli.flow.constants import (
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
from cli.flow.context import (
    PARAMETER_MODE_BRANCH,
    PARAMETER_MODE_CUSTOM,
    PARAMETER_MODE_WITHOUT,
    BuildPostContext,
    BuildPreContext,
    ListInteractiveContext,
    StatusPostContext,
)
from cli.flow.types import ActionResult
from core.exceptions import JenkinsCliError
from core.recent_jobs import RecentJob


@pytest.fixture
def ctx(env, sample_jobs):
    return BuildPreContext(env=env, jobs=sample_jobs)


# =============================================================================
# list
# =============================================================================


class TestListHandlers:
    def test_select_job_by_url(self, env, sample_jobs):
        list_ctx = ListInteractiveContext(env=env, jobs=sample_jobs, perform_action=MagicMock())

        assert handlers.list_select_job(list_ctx, sample_jobs[1].url) == "select:job"
        assert list_ctx.selected_job is sample_jobs[1]

    @pytest.mark.parametrize(
        "value,event",
        [
            (SEARCH_AGAIN_VALUE, "select:search_again"),
            (EXIT_VALUE, "select:exit"),
            ("https://jenkins.example.com/job/unknown/", "select:search_again"),
        ],
    )
    def test_select_job_special_values(self, env, sample_jobs, value, event):
        list_ctx = ListInteractiveContext(env=env, jobs=sample_jobs, perform_action=MagicMock())
        assert handlers.list_select_job(list_ctx, value) == event
        assert list_ctx.selected_job is None

    def test_run_action_without_selection_is_error(self, env, sample_jobs):
        perform = MagicMock()
        list_ctx = ListInteractiveContext(env=env, jobs=sample_jobs, perform_action=perform)

        assert handlers.list_run_action(list_ctx) == ActionResult.ACTION_ERROR
        perform.assert_not_called()

    def test_run_action_passes_job(self, env, sample_jobs):
        perform = MagicMock(return_value=ActionResult.ACTION_OK)
        list_ctx = ListInteractiveContext(env=env, jobs=sample_jobs, perform_action=perform)
        list_ctx.selected_job = sample_jobs[0]

        assert handlers.list_select_action(list_ctx, "logs") == "select:logs"
        assert handlers.list_run_action(list_ctx) == ActionResult.ACTION_OK
        perform.assert_called_once_with("logs", sample_jobs[0])


# =============================================================================
# build_pre: job 선택
# =============================================================================


class TestJobSelectionHandlers:
    def test_entry_without_recent_jobs(self, ctx):
        assert handlers.build_pre_entry(ctx) == "search_direct"

    def test_entry_with_recent_jobs(self, ctx, sample_jobs):
        ctx.recent_jobs = [RecentJob(url=sample_jobs[0].url, label="api-deploy")]
        assert handlers.build_pre_entry(ctx) == "show_recent"

    def test_select_recent_job(self, ctx, sample_jobs):
        ctx.recent_jobs = [RecentJob(url=sample_jobs[2].url, label="stale label")]
        ctx.search_query = "old"

        assert handlers.select_recent_job(ctx, sample_jobs[2].url) == "select:recent"
        assert ctx.selected_job_url == sample_jobs[2].url
        assert ctx.selected_job_label == "nightly-report"
        assert ctx.search_query == ""

    def test_select_recent_job_not_in_cache_keeps_label(self, ctx):
        gone = "https://jenkins.example.com/job/removed/"
        ctx.recent_jobs = [RecentJob(url=gone, label="removed")]

        assert handlers.select_recent_job(ctx, gone) == "select:recent"
        assert ctx.selected_job_label == "removed"

    def test_select_recent_search_all(self, ctx):
        assert handlers.select_recent_job(ctx, SEARCH_ALL_JOBS_VALUE) == "select:search_all"
        assert ctx.selected_job_url is None

    def test_submit_search_unique(self, ctx, sample_jobs):
        assert handlers.submit_search(ctx, "nightly report") == "search:auto"
        assert ctx.selected_job_url == sample_jobs[2].url
        assert ctx.search_candidates == []

    def test_submit_search_candidates(self, ctx):
        assert handlers.submit_search(ctx, "deploy") == "search:candidates"
        assert [job.name for job in ctx.search_candidates] == ["api-deploy", "web-deploy"]
        assert ctx.selected_job_url is None

    def test_submit_search_empty_retries(self, ctx):
        with patch("cli.flow.handlers.print_error") as mock_error:
            assert handlers.submit_search(ctx, "   ") == "search:retry"
        mock_error.assert_called_once()

    def test_submit_search_no_match_retries(self, ctx):
        with patch("cli.flow.handlers.print_cli_error") as mock_error:
            assert handlers.submit_search(ctx, "zzzz") == "search:retry"
        assert ctx.search_query == "zzzz"
        mock_error.assert_called_once()

    def test_submit_search_propagates_other_errors(self, ctx):
        with patch(
            "cli.flow.handlers.resolve_job_candidates",
            side_effect=JenkinsCliError("Job cache is missing."),
        ):
            with pytest.raises(JenkinsCliError, match="cache is missing"):
                handlers.submit_search(ctx, "api")

    def test_select_search_candidate(self, ctx, sample_jobs):
        ctx.search_candidates = sample_jobs[:2]

        assert handlers.select_search_candidate(ctx, sample_jobs[1].url) == "select:job"
        assert ctx.selected_job_label == "web-deploy"
        assert ctx.search_candidates == []

    def test_select_search_candidate_unknown(self, ctx, sample_jobs):
        ctx.search_candidates = sample_jobs[:2]
        assert handlers.select_search_candidate(ctx, SEARCH_AGAIN_VALUE) == "select:search_again"


# =============================================================================
# build_pre: 빌드 모드 / 브랜치
# =============================================================================


class TestBranchHandlers:
    @pytest.mark.parametrize(
        "value,event,mode",
        [
            (BUILD_WITH_PARAMS_VALUE, "mode:with_branch", PARAMETER_MODE_BRANCH),
            (BUILD_WITH_CUSTOM_PARAMS_VALUE, "mode:with_custom", PARAMETER_MODE_CUSTOM),
            (BUILD_WITHOUT_PARAMS_VALUE, "mode:without_params", PARAMETER_MODE_WITHOUT),
        ],
    )
    def test_select_build_mode(self, ctx, value, event, mode):
        assert handlers.select_build_mode(ctx, value) == event
        assert ctx.parameter_mode == mode
        assert ctx.build_mode_prompted

    def test_without_params_clears_branch(self, ctx):
        ctx.branch = "develop"
        ctx.custom_params = {"ENV": "prod"}
        handlers.select_build_mode(ctx, BUILD_WITHOUT_PARAMS_VALUE)
        assert ctx.branch is None
        assert ctx.custom_params == {}

    def test_prepare_branch_ready_when_branch_given(self, ctx):
        ctx.branch = " develop "
        assert handlers.prepare_branch(ctx) == "branch:ready"
        assert ctx.branch == "develop"

    def test_prepare_branch_ready_for_default_branch(self, ctx):
        ctx.default_branch = True
        assert handlers.prepare_branch(ctx) == "branch:ready"

    def test_prepare_branch_custom_mode(self, ctx):
        ctx.parameter_mode = PARAMETER_MODE_CUSTOM
        assert handlers.prepare_branch(ctx) == "custom:key"

    def test_prepare_branch_without_job_is_error(self, ctx):
        assert handlers.prepare_branch(ctx) == "branch:error"

    def test_prepare_branch_asks_mode_once(self, ctx, sample_jobs):
        ctx.selected_job_url = sample_jobs[0].url
        assert handlers.prepare_branch(ctx) == "branch:mode"
        assert ctx.build_mode_prompted

    def test_prepare_branch_loads_choices(self, ctx, sample_jobs):
        ctx.selected_job_url = sample_jobs[0].url
        ctx.build_mode_prompted = True
        with patch("cli.flow.handlers.load_cached_branches", return_value=["feature/x", "master", "Master"]), patch(
            "cli.flow.handlers.load_cached_branch_history", return_value=["feature/x"]
        ):
            assert handlers.prepare_branch(ctx) == "branch:select"
        assert ctx.branch_choices == ["feature/x", "master"]
        assert ctx.removable_branches == ["feature/x"]

    def test_prepare_branch_without_choices_goes_to_entry(self, ctx, sample_jobs):
        ctx.selected_job_url = sample_jobs[0].url
        ctx.build_mode_prompted = True
        with patch("cli.flow.handlers.load_cached_branches", return_value=[]), patch(
            "cli.flow.handlers.load_cached_branch_history", return_value=[]
        ):
            assert handlers.prepare_branch(ctx) == "branch:entry"

    def test_select_branch(self, ctx):
        assert handlers.select_branch(ctx, "release/1.2") == "branch:selected"
        assert ctx.branch == "release/1.2"

    def test_select_branch_custom(self, ctx):
        assert handlers.select_branch(ctx, BRANCH_CUSTOM_VALUE) == "branch:entry"

    def test_select_branch_remove(self, ctx):
        ctx.removable_branches = ["feature/x"]
        assert handlers.select_branch(ctx, BRANCH_REMOVE_VALUE) == "branch:remove"

    def test_select_branch_remove_without_history(self, ctx):
        assert handlers.select_branch(ctx, BRANCH_REMOVE_VALUE) == "branch:entry"

    def test_remove_branch(self, ctx, sample_jobs):
        ctx.selected_job_url = sample_jobs[0].url
        ctx.removable_branches = ["feature/x", "feature/y"]
        ctx.branch_choices = ["feature/x", "feature/y", "master"]

        assert handlers.select_branch_to_remove(ctx, "Feature/X") == "remove:selected"
        with patch("cli.flow.handlers.remove_cached_branch", return_value=True) as mock_remove, patch(
            "cli.flow.handlers.print_ok"
        ):
            assert handlers.remove_branch(ctx) == "remove:done"

        mock_remove.assert_called_once_with(ctx.env, sample_jobs[0].url, "Feature/X")
        assert ctx.removable_branches == ["feature/y"]
        assert ctx.branch_choices == ["feature/y", "master"]
        assert ctx.pending_branch_removal is None

    def test_remove_branch_not_removed_keeps_choices(self, ctx, sample_jobs):
        ctx.selected_job_url = sample_jobs[0].url
        ctx.removable_branches = ["feature/x"]
        ctx.pending_branch_removal = "feature/x"
        with patch("cli.flow.handlers.remove_cached_branch", return_value=False):
            assert handlers.remove_branch(ctx) == "remove:done"
        assert ctx.removable_branches == ["feature/x"]

    def test_submit_branch(self, ctx):
        assert handlers.submit_branch(ctx, "  hotfix  ") == "branch:selected"
        assert ctx.branch == "hotfix"

    def test_submit_branch_empty(self, ctx):
        with patch("cli.flow.handlers.print_error"), patch("cli.flow.handlers.print_hint"):
            assert handlers.submit_branch(ctx, "") == "branch:retry"
        assert ctx.branch is None


# =============================================================================
# build_pre: 사용자 정의 파라미터
# =============================================================================


class TestCustomParamHandlers:
    def test_key_and_value(self, ctx):
        assert handlers.submit_custom_param_key(ctx, " ENV ") == "param:key_ready"
        assert ctx.pending_custom_param_key == "ENV"

        assert handlers.submit_custom_param_value(ctx, " prod ") == "param:added"
        assert ctx.custom_params == {"ENV": "prod"}
        assert ctx.pending_custom_param_key is None

    def test_empty_key_retries(self, ctx):
        with patch("cli.flow.handlers.print_error"), patch("cli.flow.handlers.print_hint"):
            assert handlers.submit_custom_param_key(ctx, "") == "param:key_retry"

    def test_duplicate_key_retries(self, ctx):
        ctx.custom_params = {"ENV": "prod"}
        with patch("cli.flow.handlers.print_error") as mock_error, patch("cli.flow.handlers.print_hint"):
            assert handlers.submit_custom_param_key(ctx, "env") == "param:key_retry"
        mock_error.assert_called_once_with("Parameter already set: env")

    def test_branch_param_is_taken_when_branch_set(self, ctx):
        ctx.branch = "develop"
        with patch("cli.flow.handlers.print_error"), patch("cli.flow.handlers.print_hint"):
            assert handlers.submit_custom_param_key(ctx, "branch") == "param:key_retry"

    def test_value_without_key_retries(self, ctx):
        assert handlers.submit_custom_param_value(ctx, "prod") == "param:value_retry"
        assert ctx.custom_params == {}

    def test_cancel_with_params_completes(self, ctx):
        ctx.custom_params = {"ENV": "prod"}
        ctx.pending_custom_param_key = "REGION"
        assert handlers.cancel_custom_param_entry(ctx) == "custom:done"
        assert ctx.pending_custom_param_key is None

    def test_cancel_without_params_returns_to_mode(self, ctx):
        ctx.parameter_mode = PARAMETER_MODE_CUSTOM
        assert handlers.cancel_custom_param_entry(ctx) == "custom:mode"
        assert ctx.parameter_mode is None


# =============================================================================
# build_post / status_post
# =============================================================================


class TestPostHandlers:
    def test_select_done(self, env):
        post_ctx = BuildPostContext(env=env, job_label="api-deploy", perform_action=MagicMock())
        assert handlers.build_select_action(post_ctx, DONE_VALUE) == DONE_VALUE
        assert post_ctx.selected_action is None

    def test_run_selected_action(self, env):
        perform = MagicMock(return_value=ActionResult.WATCH_CANCELLED)
        post_ctx = StatusPostContext(env=env, target_label="api-deploy", perform_action=perform)

        assert handlers.status_select_action(post_ctx, "watch") == "select:watch"
        assert handlers.status_run_action(post_ctx) == ActionResult.WATCH_CANCELLED
        perform.assert_called_once_with("watch")

    @pytest.mark.parametrize(
        "return_to_caller,menu,root",
        [
            (False, "ask_repeat", "ask_repeat"),
            (True, "return_to_caller", "return_to_caller_root"),
        ],
    )
    def test_after_routers(self, env, return_to_caller, menu, root):
        post_ctx = BuildPostContext(
            env=env, job_label="api-deploy", perform_action=MagicMock(), return_to_caller=return_to_caller
        )
        assert handlers.build_after_menu(post_ctx) == menu
        assert handlers.build_after_root(post_ctx) == root

    def test_repeat_confirm(self, env):
        post_ctx = StatusPostContext(env=env, target_label="api-deploy", perform_action=MagicMock())
        assert handlers.status_repeat_confirm(post_ctx, True) == "confirm:yes"
        assert handlers.status_repeat_confirm(post_ctx, False) == "confirm:no"
