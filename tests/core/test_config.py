# tests/core/test_config.py
"""
core/config.py 단위 테스트
"""

import json

import pytest

from core.config import (
    LogConfig,
    get_cache_root,
    get_env_bool,
    get_env_int,
    load_env,
    normalize_url,
    settings,
)
from core.exceptions import ConfigError


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "jenkins-cli-config.json"


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadEnv:
    def test_from_environment(self, monkeypatch, config_file):
        monkeypatch.setenv("JENKINS_URL", " https://jenkins.example.com/ ")
        monkeypatch.setenv("JENKINS_USER", "alice")
        monkeypatch.setenv("JENKINS_API_TOKEN", "token")

        env = load_env(config_file)

        assert env.jenkins_url == "https://jenkins.example.com"
        assert env.jenkins_user == "alice"
        assert env.branch_param_default == "BRANCH"
        assert env.profile_name is None
        assert env.use_crumb is False

    def test_from_config_file(self, config_file):
        _write(
            config_file,
            {
                "jenkinsUrl": "http://ci.internal:8080",
                "jenkinsUser": "bot",
                "jenkinsApiToken": "secret",
                "branchParam": "GIT_REF",
                "useCrumb": True,
                "profileName": "internal",
            },
        )

        env = load_env(config_file)

        assert env.jenkins_url == "http://ci.internal:8080"
        assert env.branch_param_default == "GIT_REF"
        assert env.use_crumb is True
        assert env.profile_name == "internal"

    def test_environment_wins_over_file(self, monkeypatch, config_file):
        _write(config_file, {"jenkinsUrl": "https://file.example.com", "jenkinsUser": "bot", "jenkinsApiToken": "x"})
        monkeypatch.setenv("JENKINS_USER", "alice")
        monkeypatch.setenv("JENKINS_BRANCH_PARAM", "BRANCH_NAME")

        env = load_env(config_file)

        assert env.jenkins_url == "https://file.example.com"
        assert env.jenkins_user == "alice"
        assert env.branch_param_default == "BRANCH_NAME"

    @pytest.mark.parametrize(
        "present,missing",
        [
            ({}, "JENKINS_URL"),
            ({"JENKINS_URL": "https://jenkins.example.com"}, "JENKINS_USER"),
            ({"JENKINS_URL": "https://jenkins.example.com", "JENKINS_USER": "alice"}, "JENKINS_API_TOKEN"),
        ],
    )
    def test_missing_setting(self, monkeypatch, config_file, present, missing):
        for name, value in present.items():
            monkeypatch.setenv(name, value)

        with pytest.raises(ConfigError) as exc_info:
            load_env(config_file)

        assert exc_info.value.message == f"Missing {missing}."
        assert exc_info.value.config_key == missing
        assert exc_info.value.hints

    def test_broken_config_file_is_ignored(self, monkeypatch, config_file):
        config_file.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Missing JENKINS_URL"):
            load_env(config_file)


class TestNormalizeUrl:
    def test_strips_trailing_slashes(self):
        assert normalize_url("https://jenkins.example.com//") == "https://jenkins.example.com"

    @pytest.mark.parametrize(
        "url,message",
        [
            ("jenkins.example.com", "Invalid JENKINS_URL."),
            ("ftp://jenkins.example.com", "Invalid JENKINS_URL protocol."),
        ],
    )
    def test_invalid(self, url, message):
        with pytest.raises(ConfigError) as exc_info:
            normalize_url(url)
        assert exc_info.value.message == message


class TestEnvHelpers:
    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("1", True), ("ON", True), ("no", False), ("0", False), ("maybe", None)],
    )
    def test_get_env_bool(self, monkeypatch, raw, expected):
        monkeypatch.setenv("JENKINS_CLI_TEST_FLAG", raw)
        default = object()
        result = get_env_bool("JENKINS_CLI_TEST_FLAG", default)
        assert result is (default if expected is None else expected)

    def test_get_env_bool_unset(self, monkeypatch):
        monkeypatch.delenv("JENKINS_CLI_TEST_FLAG", raising=False)
        assert get_env_bool("JENKINS_CLI_TEST_FLAG", True) is True

    def test_get_env_int(self, monkeypatch):
        monkeypatch.setenv("JENKINS_CLI_TEST_INT", " 42 ")
        assert get_env_int("JENKINS_CLI_TEST_INT") == 42
        monkeypatch.setenv("JENKINS_CLI_TEST_INT", "forty")
        assert get_env_int("JENKINS_CLI_TEST_INT", 7) == 7

    def test_cache_root_override(self, tmp_path):
        assert get_cache_root() == tmp_path / "cache"

    def test_cache_root_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("JENKINS_CLI_CACHE_DIR")
        monkeypatch.chdir(tmp_path)
        assert get_cache_root() == tmp_path / ".jenkins-cli"

    def test_log_config_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert LogConfig.from_env().level == "DEBUG"


class TestSettings:
    def test_immutable(self):
        with pytest.raises(AttributeError):
            settings.MIN_SCORE = 0  # type: ignore[misc]

    def test_default_branches(self):
        assert "master" in settings.DEFAULT_BRANCHES
