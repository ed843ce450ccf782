"""
core/config.py - 애플리케이션 설정

Central place for tunables, environment helpers and the Jenkins connection
settings used by every command.

Usage:
    from core.config import load_env, settings

    env = load_env()
    timeout = settings.API_TIMEOUT
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from core.exceptions import ConfigError

logger = logging.getLogger(__name__)

__version__ = "0.9.0"

CONFIG_DIR = Path.home() / ".config" / "jenkins-cli"
CONFIG_FILE = CONFIG_DIR / "jenkins-cli-config.json"
API_LOG_FILE = CONFIG_DIR / "api.log"


# =============================================================================
# 전역 설정
# =============================================================================


@dataclass(frozen=True)
class Settings:
    """Application-wide constants (immutable)."""

    # HTTP
    API_TIMEOUT: int = 30

    # Caches
    MAX_RECENT_JOBS: int = 15
    MAX_BRANCHES_PER_JOB: int = 10
    DEFAULT_BRANCHES: tuple[str, ...] = ("development", "staging", "master")

    # Job ranking
    MIN_SCORE: int = 20
    AMBIGUITY_GAP: int = 10
    MAX_OPTIONS: int = 10
    FUZZY_MIN_SCORE: int = 85
    FUZZY_MATCH_SCORE: int = 22

    # Watch
    WATCH_POLL_SECONDS: float = 3.0

    DEFAULT_BRANCH_PARAM: str = "BRANCH"


settings = Settings()


def get_version() -> str:
    """버전 문자열 반환"""
    return __version__


# =============================================================================
# 환경변수 헬퍼
# =============================================================================


def get_env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable.

    Unknown values fall back to ``default``.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in ("true", "1", "yes", "on"):
        return True
    if value in ("false", "0", "no", "off"):
        return False
    return default


def get_env_int(name: str, default: int = 0) -> int:
    """Read an integer environment variable, falling back to ``default``."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def get_cache_root() -> Path:
    """Directory holding jobs.json (``JENKINS_CLI_CACHE_DIR`` overrides it)."""
    override = os.environ.get("JENKINS_CLI_CACHE_DIR", "").strip()
    if override:
        return Path(override)
    return Path.cwd() / ".jenkins-cli"


@dataclass
class LogConfig:
    """Logging settings."""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_env(cls) -> LogConfig:
        """LOG_LEVEL / LOG_FORMAT 환경변수에서 로드"""
        return cls(
            level=os.environ.get("LOG_LEVEL", cls.level).upper(),
            format=os.environ.get("LOG_FORMAT", cls.format),
        )


# =============================================================================
# Jenkins 연결 설정
# =============================================================================


@dataclass
class EnvConfig:
    """Connection settings for one Jenkins server."""

    jenkins_url: str
    jenkins_user: str
    jenkins_api_token: str
    branch_param_default: str = Settings.DEFAULT_BRANCH_PARAM
    use_crumb: bool = False
    profile_name: str | None = None


def normalize_url(raw_url: str) -> str:
    """Validate a Jenkins base URL and strip trailing slashes.

    Raises:
        ConfigError: not an http(s) URL
    """
    trimmed = raw_url.strip()
    parsed = urlparse(trimmed)
    if not parsed.scheme or not parsed.netloc:
        raise ConfigError(
            "JENKINS_URL",
            "Invalid JENKINS_URL.",
            hints=["Use a full URL like https://jenkins.example.com."],
        )
    if parsed.scheme not in ("http", "https"):
        raise ConfigError(
            "JENKINS_URL",
            "Invalid JENKINS_URL protocol.",
            hints=["Use http:// or https:// for JENKINS_URL."],
        )
    return trimmed.rstrip("/")


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("설정 파일 로드 실패 (%s): %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


_REQUIRED_SETTINGS = (
    (
        "JENKINS_URL",
        "jenkinsUrl",
        "Set JENKINS_URL to your Jenkins base URL (e.g., https://jenkins.example.com).",
    ),
    (
        "JENKINS_USER",
        "jenkinsUser",
        "Set JENKINS_USER to your Jenkins username or service account.",
    ),
    (
        "JENKINS_API_TOKEN",
        "jenkinsApiToken",
        "Set JENKINS_API_TOKEN to your Jenkins API token.",
    ),
)


def load_env(config_file: Path | None = None) -> EnvConfig:
    """Build the connection settings.

    Environment variables win over the JSON config file.

    Args:
        config_file: config file path (default: ~/.config/jenkins-cli/jenkins-cli-config.json)

    Returns:
        EnvConfig

    Raises:
        ConfigError: a required setting is missing or invalid
    """
    file_values = _read_config_file(config_file or CONFIG_FILE)
    resolved: dict[str, str] = {}

    for env_name, file_key, hint in _REQUIRED_SETTINGS:
        raw = os.environ.get(env_name) or file_values.get(file_key) or ""
        if not str(raw).strip():
            raise ConfigError(env_name, f"Missing {env_name}.", hints=[hint])
        resolved[env_name] = str(raw).strip()

    branch_param = (
        os.environ.get("JENKINS_BRANCH_PARAM") or file_values.get("branchParam") or Settings.DEFAULT_BRANCH_PARAM
    ).strip()

    return EnvConfig(
        jenkins_url=normalize_url(resolved["JENKINS_URL"]),
        jenkins_user=resolved["JENKINS_USER"],
        jenkins_api_token=resolved["JENKINS_API_TOKEN"],
        branch_param_default=branch_param or Settings.DEFAULT_BRANCH_PARAM,
        use_crumb=get_env_bool("JENKINS_USE_CRUMB", bool(file_values.get("useCrumb", False))),
        profile_name=os.environ.get("JENKINS_PROFILE") or file_values.get("profileName"),
    )
