# tests/cli/test_list_cmd.py
"""
cli/commands/list_cmd.py 단위 테스트

job 작업은 perform_job_action을 patch 해서 Flow 결과 처리만 검증합니다.
"""

from unittest.mock import MagicMock, patch

import pytest

from cli.commands.list_cmd import print_jobs, run_list
from cli.flow.constants import EXIT_VALUE
from cli.flow.types import ActionResult
from cli.i18n import set_lang
from core.exceptions import JenkinsCliError


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def mock_perform():
    with patch("cli.commands.list_cmd.perform_job_action", return_value=ActionResult.ACTION_OK) as mock:
        yield mock


@pytest.fixture
def quiet():
    """검색 실패 진단 출력 숨김"""
    with patch("cli.commands.list_cmd.print_error") as error, patch("cli.commands.list_cmd.print_hint"):
        yield error


class TestNonInteractiveList:
    def test_prints_ranked_matches(self, client, env, job_cache):
        with patch("cli.commands.list_cmd.print_jobs") as mock_print:
            run_list(client, env, search="deploy", non_interactive=True)

        jobs = mock_print.call_args.args[0]
        assert [job.name for job in jobs] == ["api-deploy", "web-deploy"]

    def test_without_search_prints_all_sorted(self, client, env, job_cache):
        with patch("cli.commands.list_cmd.print_jobs") as mock_print:
            run_list(client, env, non_interactive=True)

        jobs = mock_print.call_args.args[0]
        assert [job.name for job in jobs] == ["api-deploy", "nightly-report", "web-deploy"]

    def test_missing_cache_fails(self, client, env):
        with pytest.raises(JenkinsCliError, match="Job cache is missing."):
            run_list(client, env, non_interactive=True)
        client.list_jobs.assert_not_called()

    def test_refresh_fetches_jobs(self, client, env, sample_jobs):
        client.list_jobs.return_value = sample_jobs
        with patch("cli.commands.list_cmd.print_jobs") as mock_print:
            run_list(client, env, search="nightly", refresh=True, non_interactive=True)

        client.list_jobs.assert_called_once()
        assert [job.name for job in mock_print.call_args.args[0]] == ["nightly-report"]

    def test_print_jobs_table(self, sample_jobs, capsys):
        print_jobs(sample_jobs[:1])
        out = capsys.readouterr().out
        assert "Jenkins jobs (1)" in out
        assert "api-deploy" in out

    def test_print_jobs_empty(self, capsys):
        print_jobs([])
        assert "No jobs to show." in capsys.readouterr().out


class TestInteractiveList:
    def test_search_select_act_exit(self, client, env, job_cache, sample_jobs, make_adapter, mock_perform):
        adapter = make_adapter(["nightly", sample_jobs[2].url, "status", "exit"])

        with patch("cli.commands.list_cmd.print_jobs"):
            run_list(client, env, adapter)

        assert adapter.kinds == ["text", "select", "select", "select"]
        assert adapter.calls[0][1] == "Search jobs (q to quit) [host: jenkins.example.com | profile: env/direct]"
        mock_perform.assert_called_once()
        assert mock_perform.call_args.args[:1] == ("status",)
        assert mock_perform.call_args.args[4:6] == (sample_jobs[2].url, "nightly-report")

    def test_initial_search_skips_prompt(self, client, env, job_cache, make_adapter, mock_perform):
        adapter = make_adapter([EXIT_VALUE])

        with patch("cli.commands.list_cmd.print_jobs"):
            run_list(client, env, adapter, search="deploy")

        assert adapter.kinds == ["select"]
        options = adapter.calls[0][2]
        assert [option.label for option in options][:2] == ["api-deploy", "web-deploy"]

    def test_root_from_action_resumes_at_job_selection(
        self, client, env, job_cache, sample_jobs, make_adapter, mock_perform
    ):
        mock_perform.return_value = ActionResult.WATCH_CANCELLED
        adapter = make_adapter([sample_jobs[0].url, "watch", EXIT_VALUE])

        with patch("cli.commands.list_cmd.print_jobs"):
            run_list(client, env, adapter, search="api deploy")

        # 검색 프롬프트 없이 job 선택부터 재개
        assert adapter.kinds == ["select", "select", "select"]
        assert adapter.calls[2][1].startswith("Select a job to operate on")

    def test_root_from_job_selection_returns_to_search(self, client, env, job_cache, make_adapter, mock_perform):
        adapter = make_adapter([None, "quit"])

        with patch("cli.commands.list_cmd.print_jobs"):
            run_list(client, env, adapter, search="api deploy")

        assert adapter.kinds == ["select", "text"]
        mock_perform.assert_not_called()

    def test_nested_exit_ends_command(self, client, env, job_cache, sample_jobs, make_adapter, mock_perform):
        mock_perform.return_value = ActionResult.EXIT
        adapter = make_adapter([sample_jobs[0].url, "build"])

        with patch("cli.commands.list_cmd.print_jobs"):
            run_list(client, env, adapter, search="api deploy")

        assert adapter.kinds == ["select", "select"]

    def test_no_match_asks_again(self, client, env, job_cache, make_adapter, mock_perform, quiet):
        adapter = make_adapter(["zzzz", "q"])

        run_list(client, env, adapter)

        quiet.assert_called_once_with('No jobs match "zzzz".')
        assert adapter.kinds == ["text", "text"]

    def test_no_match_message_follows_language(self, client, env, job_cache, make_adapter, mock_perform, quiet):
        set_lang("ko")
        adapter = make_adapter(["zzzz", "q"])

        run_list(client, env, adapter)

        quiet.assert_called_once_with('"zzzz"와 일치하는 job이 없습니다.')

    def test_cancel_search_prompt(self, client, env, job_cache, make_adapter, mock_perform):
        adapter = make_adapter([None])
        run_list(client, env, adapter)
        assert adapter.kinds == ["text"]

    def test_missing_cache_asks_to_refresh(self, client, env, sample_jobs, make_adapter, mock_perform):
        client.list_jobs.return_value = sample_jobs
        adapter = make_adapter([True, "q"])

        run_list(client, env, adapter)

        assert adapter.calls[0][0] == "confirm"
        assert adapter.calls[0][1].startswith("Job cache is missing. Refresh now?")
        assert adapter.calls[0][2] is True
        client.list_jobs.assert_called_once()

    def test_refresh_declined(self, client, env, make_adapter):
        adapter = make_adapter([False])
        with pytest.raises(JenkinsCliError, match="Job cache is missing."):
            run_list(client, env, adapter)
