# cli/ui/target.py
"""
프롬프트 대상 표시

모든 flow 프롬프트 뒤에 현재 Jenkins 호스트와 프로필을 붙입니다:

    "Recent jobs [host: jenkins.example.com | profile: env/direct]"
"""

from __future__ import annotations

from urllib.parse import urlsplit

from cli.i18n import t
from core.config import EnvConfig

DIRECT_PROFILE_LABEL = "env/direct"


def _resolve_host(url: str | None) -> str:
    trimmed = (url or "").strip()
    if not trimmed:
        return "unknown"
    try:
        return urlsplit(trimmed).netloc or trimmed
    except ValueError:
        return trimmed


def format_prompt_target(env: EnvConfig) -> str:
    profile = (env.profile_name or "").strip() or DIRECT_PROFILE_LABEL
    return f"host: {_resolve_host(env.jenkins_url)} | profile: {profile}"


def with_prompt_target(message: str, env: EnvConfig) -> str:
    return t("flow.target_suffix", message=message, target=format_prompt_target(env))
