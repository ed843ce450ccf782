"""
cli/i18n/__init__.py - Internationalization (i18n) Module

Provides translation support for the CLI.
English (en) is the default language, with Korean (ko) as an option.

Architecture:
    - Messages are organized by namespace (cli, flow)
    - Translation function t() supports format string interpolation
    - The initial language comes from JENKINS_CLI_LANG; --lang overrides it

Usage:
    from cli.i18n import t, set_lang, get_lang

    # Basic translation
    print(t("flow.recent_jobs"))  # "Recent jobs" or "최근 job"

    # With interpolation
    print(t("cli.build_queued", url=queue_url))

    set_lang("ko")
    print(t("flow.exit"))  # "종료"
"""

from __future__ import annotations

import contextlib
import os
from contextvars import ContextVar
from typing import Any

# Supported languages
SUPPORTED_LANGS = ("en", "ko")
DEFAULT_LANG = "en"

LANG_ENV_VAR = "JENKINS_CLI_LANG"


def _lang_from_env() -> str:
    lang = os.environ.get(LANG_ENV_VAR, "").strip().lower()
    return lang if lang in SUPPORTED_LANGS else DEFAULT_LANG


_current_lang: ContextVar[str] = ContextVar("lang", default=_lang_from_env())


def get_lang() -> str:
    """Get current language from context variable."""
    return _current_lang.get()


def set_lang(lang: str | None) -> None:
    """Set current language in context variable.

    Args:
        lang: Language code ("en" or "ko"); None or unknown falls back to the default
    """
    if lang not in SUPPORTED_LANGS:
        lang = DEFAULT_LANG
    _current_lang.set(lang)


def t(key: str, lang: str | None = None, **kwargs: Any) -> str:
    """Translate a message key to the current language.

    Args:
        key: Message key in namespace.key format (e.g., "flow.recent_jobs")
        lang: Optional language override. If not provided, uses context variable.
        **kwargs: Format string arguments for interpolation

    Returns:
        Translated string, or key if translation not found

    Examples:
        >>> t("flow.exit", lang="ko")
        "종료"

        >>> t("cli.no_builds", label="api-deploy")
        "No builds found for api-deploy."
    """
    from cli.i18n.messages import MESSAGES

    if lang is None:
        lang = get_lang()

    if lang not in SUPPORTED_LANGS:
        lang = DEFAULT_LANG

    msg_dict = MESSAGES.get(key)
    if msg_dict is None:
        # Key not found, return key as-is
        return key

    text = msg_dict.get(lang)
    if text is None:
        text = msg_dict.get(DEFAULT_LANG, key)

    if kwargs:
        with contextlib.suppress(KeyError, ValueError, IndexError):
            text = text.format(**kwargs)

    return text


__all__ = [
    "t",
    "get_lang",
    "set_lang",
    "SUPPORTED_LANGS",
    "DEFAULT_LANG",
]
