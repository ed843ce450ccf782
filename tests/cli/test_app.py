# tests/cli/test_app.py
"""
cli/app.py 테스트 (Click CliRunner)

명령 실행 함수는 patch 하고 옵션 전달, 종료 코드, 언어 설정만 검증합니다.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cli.app import cli
from cli.commands.actions import WaitResult
from cli.i18n import get_lang
from core.config import get_version
from core.exceptions import ConfigError, JenkinsCliError


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """실제 설정 파일과 api.log를 건드리지 않음"""
    monkeypatch.setattr("core.config.CONFIG_FILE", tmp_path / "jenkins-cli-config.json")
    with patch("cli.app.setup_api_log"):
        yield


@pytest.fixture
def jenkins_env(monkeypatch):
    monkeypatch.setenv("JENKINS_URL", "https://jenkins.example.com/")
    monkeypatch.setenv("JENKINS_USER", "alice")
    monkeypatch.setenv("JENKINS_API_TOKEN", "token")


class TestGroup:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert f"jenkins-cli, version {get_version()}" in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("list", "build", "status"):
            assert command in result.output

    def test_lang_option(self, runner, jenkins_env):
        with patch("cli.commands.list_cmd.run_list"):
            result = runner.invoke(cli, ["--lang", "ko", "list", "--non-interactive"])
        assert result.exit_code == 0
        assert get_lang() == "ko"

    def test_invalid_lang(self, runner):
        result = runner.invoke(cli, ["--lang", "fr", "list"])
        assert result.exit_code == 2


class TestCommands:
    def test_build_options_are_forwarded(self, runner, jenkins_env):
        with patch("cli.commands.build_cmd.run_build") as mock_build:
            result = runner.invoke(
                cli,
                ["build", "--non-interactive", "-j", "api deploy", "-b", "main", "--branch-param", "GIT_REF"],
            )

        assert result.exit_code == 0, result.output
        args, kwargs = mock_build.call_args
        client, env = args
        assert env.jenkins_url == "https://jenkins.example.com"
        assert kwargs == {
            "adapter": None,
            "non_interactive": True,
            "job": "api deploy",
            "job_url": None,
            "branch": "main",
            "branch_param": "GIT_REF",
            "default_branch": False,
        }

    def test_group_non_interactive_applies_to_command(self, runner, jenkins_env):
        with patch("cli.commands.status_cmd.run_status") as mock_status:
            result = runner.invoke(cli, ["--non-interactive", "status", "--job", "api"])

        assert result.exit_code == 0, result.output
        assert mock_status.call_args.kwargs["non_interactive"] is True
        assert mock_status.call_args.kwargs["adapter"] is None
        assert mock_status.call_args.kwargs["job"] == "api"

    def test_interactive_gets_prompt_adapter(self, runner, jenkins_env):
        with patch("cli.commands.list_cmd.run_list") as mock_list:
            result = runner.invoke(cli, ["list", "deploy", "--refresh"])

        assert result.exit_code == 0, result.output
        kwargs = mock_list.call_args.kwargs
        assert kwargs["adapter"] is not None
        assert kwargs["search"] == "deploy"
        assert kwargs["refresh"] is True

    def test_missing_config_exits_1(self, runner):
        with patch("cli.ui.console.print_cli_error") as mock_print:
            result = runner.invoke(cli, ["status", "--non-interactive", "--job", "api"])

        assert result.exit_code == 1
        error = mock_print.call_args.args[0]
        assert isinstance(error, ConfigError)
        assert error.message == "Missing JENKINS_URL."

    def test_command_error_exits_1(self, runner, jenkins_env):
        with patch(
            "cli.commands.build_cmd.run_build",
            side_effect=JenkinsCliError("Missing required --branch."),
        ), patch("cli.ui.console.print_cli_error") as mock_print:
            result = runner.invoke(cli, ["build", "--non-interactive", "--job", "api"])

        assert result.exit_code == 1
        assert mock_print.call_args.args[0].message == "Missing required --branch."

    def test_ctrl_c_exits_130(self, runner, jenkins_env):
        with patch("cli.commands.list_cmd.run_list", side_effect=KeyboardInterrupt):
            result = runner.invoke(cli, ["list"])

        assert result.exit_code == 130


class TestOpsCommands:
    @pytest.mark.parametrize(
        "waited,exit_code",
        [
            (WaitResult(result="SUCCESS"), 0),
            (WaitResult(result="FAILURE"), 1),
            (WaitResult(result="TIMEOUT", timed_out=True), 124),
            (WaitResult(result="CANCELLED", cancelled=True), 130),
            (None, 0),
        ],
    )
    def test_wait_exit_code(self, runner, jenkins_env, waited, exit_code):
        with patch("cli.commands.ops_cmd.run_wait", return_value=waited) as mock_wait:
            result = runner.invoke(cli, ["wait", "--job", "api", "--interval", "5s", "--timeout", "10m"])

        assert result.exit_code == exit_code
        kwargs = mock_wait.call_args.kwargs
        assert (kwargs["job"], kwargs["interval"], kwargs["timeout"]) == ("api", "5s", "10m")

    @pytest.mark.parametrize("command,target", [("logs", "run_logs"), ("cancel", "run_cancel"), ("rerun", "run_rerun")])
    def test_job_options_are_forwarded(self, runner, jenkins_env, command, target):
        with patch(f"cli.commands.ops_cmd.{target}") as mock_run:
            result = runner.invoke(
                cli, ["--non-interactive", command, "--job-url", "https://jenkins.example.com/job/a/"]
            )

        assert result.exit_code == 0, result.output
        kwargs = mock_run.call_args.kwargs
        assert kwargs["job_url"] == "https://jenkins.example.com/job/a/"
        assert kwargs["non_interactive"] is True

    def test_help_lists_ops_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        for command in ("wait", "logs", "cancel", "rerun"):
            assert command in result.output
