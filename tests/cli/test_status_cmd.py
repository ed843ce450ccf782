# tests/cli/test_status_cmd.py
"""
cli/commands/status_cmd.py 단위 테스트
"""

from unittest.mock import MagicMock, patch

import pytest

from cli.commands.build_cmd import BuildResult
from cli.commands.status_cmd import perform_job_action, run_status
from cli.flow.types import ActionResult
from core.exceptions import JenkinsCliError
from core.jenkins.models import JobStatus

API_DEPLOY_URL = "https://jenkins.example.com/job/api-deploy/"


@pytest.fixture
def client():
    client = MagicMock()
    client.get_job_status.return_value = JobStatus(
        last_build_number=42,
        last_build_url=f"{API_DEPLOY_URL}42/",
        result="SUCCESS",
    )
    return client


# =============================================================================
# perform_job_action
# =============================================================================


class TestPerformJobAction:
    @pytest.mark.parametrize("action,target", [("watch", "watch_build"), ("logs", "show_logs")])
    def test_simple_actions(self, client, env, make_adapter, action, target):
        with patch(f"cli.commands.status_cmd.{target}", return_value=ActionResult.ACTION_OK) as mock_action:
            result = perform_job_action(action, client, env, make_adapter([]), API_DEPLOY_URL, "api-deploy")

        assert result == ActionResult.ACTION_OK
        mock_action.assert_called_once_with(client, API_DEPLOY_URL, "api-deploy")

    def test_rerun(self, client, env, make_adapter):
        with patch("cli.commands.status_cmd.rerun_last_failed", return_value=ActionResult.ACTION_OK) as mock_rerun:
            perform_job_action("rerun", client, env, make_adapter([]), API_DEPLOY_URL, "api-deploy")
        mock_rerun.assert_called_once_with(client, env, API_DEPLOY_URL, "api-deploy")

    def test_cancel_confirms_through_adapter(self, client, env, make_adapter):
        client.get_job_status.return_value = JobStatus(
            last_build_number=43, last_build_url=f"{API_DEPLOY_URL}43/", building=True
        )
        adapter = make_adapter([True])

        with patch("cli.commands.actions.print_ok"):
            result = perform_job_action("cancel", client, env, adapter, API_DEPLOY_URL, "api-deploy")

        assert result == ActionResult.ACTION_OK
        assert adapter.calls[0][1].startswith("Stop build #43 of api-deploy?")
        client.stop_build.assert_called_once_with(f"{API_DEPLOY_URL}43/")

    @pytest.mark.parametrize(
        "nested,expected",
        [
            (BuildResult(triggered=True), ActionResult.ACTION_OK),
            (BuildResult(triggered=True, root_requested=True), ActionResult.ROOT),
            (BuildResult(exit_requested=True), ActionResult.EXIT),
        ],
    )
    def test_build_runs_nested(self, client, env, make_adapter, sample_jobs, nested, expected):
        adapter = make_adapter([])
        with patch("cli.commands.status_cmd.run_build", return_value=nested) as mock_build:
            result = perform_job_action("build", client, env, adapter, API_DEPLOY_URL, "api-deploy", sample_jobs)

        assert result == expected
        mock_build.assert_called_once_with(
            client, env, adapter, job_url=API_DEPLOY_URL, return_to_caller=True, jobs=sample_jobs
        )

    def test_error_becomes_action_error(self, client, env, make_adapter):
        client.get_job_status.side_effect = JenkinsCliError("Jenkins request failed")
        with patch("cli.commands.actions.print_cli_error") as mock_print:
            result = perform_job_action("status", client, env, make_adapter([]), API_DEPLOY_URL, "api-deploy")

        assert result == ActionResult.ACTION_ERROR
        mock_print.assert_called_once()

    def test_unknown_action(self, client, env, make_adapter):
        with patch("cli.commands.actions.print_cli_error"):
            assert (
                perform_job_action("deploy", client, env, make_adapter([]), API_DEPLOY_URL, "api-deploy")
                == ActionResult.ACTION_ERROR
            )


# =============================================================================
# run_status
# =============================================================================


class TestRunStatus:
    def test_non_interactive(self, client, env, job_cache, capsys):
        run_status(client, env, job="api deploy", non_interactive=True)

        out = capsys.readouterr().out
        assert "Last build for api-deploy: #42 SUCCESS" in out
        client.get_job_status.assert_called_once_with(API_DEPLOY_URL)

    def test_non_interactive_requires_job(self, client, env):
        with pytest.raises(JenkinsCliError, match="Job name is required."):
            run_status(client, env, non_interactive=True)

    def test_job_and_job_url_conflict(self, client, env):
        with pytest.raises(JenkinsCliError, match="not both"):
            run_status(client, env, job="api", job_url=API_DEPLOY_URL)

    def test_non_interactive_job_url_without_cache(self, client, env, capsys):
        run_status(client, env, job_url=API_DEPLOY_URL, non_interactive=True)
        assert f"Last build for {API_DEPLOY_URL}: #42 SUCCESS" in capsys.readouterr().out

    def test_no_builds(self, client, env, job_cache, capsys):
        client.get_job_status.return_value = JobStatus()
        run_status(client, env, job="nightly", non_interactive=True)
        assert "No builds found for nightly-report." in capsys.readouterr().out

    def test_interactive_skips_build_mode(self, client, env, job_cache, make_adapter):
        """job 검색 → 상태 출력 → done → 다른 job 확인 안 함"""
        adapter = make_adapter(["nightly", "done", False])

        with patch("cli.commands.status_cmd.show_status", return_value=ActionResult.ACTION_OK) as mock_show:
            run_status(client, env, adapter)

        assert adapter.kinds == ["text", "select", "confirm"]
        mock_show.assert_called_once_with(client, "https://jenkins.example.com/job/nightly-report/", "nightly-report")

    def test_interactive_repeat(self, client, env, job_cache, make_adapter):
        adapter = make_adapter(["done", True, None])

        with patch("cli.commands.status_cmd.show_status", return_value=ActionResult.ACTION_OK) as mock_show:
            run_status(client, env, adapter, job_url=API_DEPLOY_URL)

        # 두 번째는 --job-url 없이 검색부터
        assert adapter.kinds == ["select", "confirm", "text"]
        assert mock_show.call_count == 1

    def test_interactive_action_then_menu(self, client, env, job_cache, make_adapter):
        adapter = make_adapter(["logs", "done", False])

        with patch("cli.commands.status_cmd.show_status", return_value=ActionResult.ACTION_OK), patch(
            "cli.commands.status_cmd.show_logs", return_value=ActionResult.ACTION_OK
        ) as mock_logs:
            run_status(client, env, adapter, job="api deploy")

        mock_logs.assert_called_once_with(client, API_DEPLOY_URL, "api-deploy")
        assert adapter.kinds == ["select", "select", "confirm"]

    def test_interactive_requires_adapter(self, client, env):
        with pytest.raises(JenkinsCliError, match="requires a terminal"):
            run_status(client, env)
