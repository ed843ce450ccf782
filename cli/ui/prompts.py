# cli/ui/prompts.py
"""
questionary 기반 PromptAdapter

Flow 엔진의 프롬프트 경계 구현입니다. questionary의 ``ask()``는 Ctrl+C 시 None을
반환하며, Esc 키도 같은 방식으로 취소되도록 바인딩합니다.

    adapter = QuestionaryPromptAdapter()
    value = adapter.select("Recent jobs", options)
    if adapter.is_cancel(value):
        ...
"""

from __future__ import annotations

from typing import Any, List, Optional

import questionary
from prompt_toolkit.key_binding import KeyBindings, merge_key_bindings
from prompt_toolkit.keys import Keys

from cli.flow.types import PromptOption


def _bind_escape(question: questionary.Question) -> questionary.Question:
    """Esc → 취소 (ask()가 None 반환)"""
    bindings = KeyBindings()

    @bindings.add(Keys.Escape, eager=True)
    def _cancel(event):
        event.app.exit(result=None)

    app = question.application
    app.key_bindings = merge_key_bindings([app.key_bindings, bindings]) if app.key_bindings else bindings
    return question


class QuestionaryPromptAdapter:
    """PromptAdapter implementation backed by questionary."""

    def select(self, message: str, options: List[PromptOption]) -> Any:
        choices = [questionary.Choice(title=option.label, value=option.value) for option in options]
        return _bind_escape(questionary.select(message, choices=choices)).ask()

    def confirm(self, message: str, initial: Optional[bool] = None) -> Any:
        return _bind_escape(questionary.confirm(message, default=bool(initial))).ask()

    def text(self, message: str, placeholder: Optional[str] = None, initial: Optional[str] = None) -> Any:
        kwargs = {"placeholder": placeholder} if placeholder else {}
        return _bind_escape(questionary.text(message, default=initial or "", **kwargs)).ask()

    def is_cancel(self, value: Any) -> bool:
        return value is None
