# cli/ui - TUI 컴포넌트 (questionary, rich)
"""
TUI 컴포넌트 모듈

CLI 전용 UI 컴포넌트들 (대화형 프롬프트, 콘솔 출력, 프롬프트 대상 표시)
"""

# Direct imports (rich/questionary are commonly used, no lazy import needed)
from .console import (
    console,
    err_console,
    get_console,
    get_rich_handler,
    print_cli_error,
    print_error,
    print_hint,
    print_ok,
    print_rule,
    print_table,
    print_warning,
)
from .prompts import QuestionaryPromptAdapter
from .target import format_prompt_target, with_prompt_target

__all__ = [
    # Console
    "console",
    "err_console",
    "get_console",
    "get_rich_handler",
    "print_cli_error",
    "print_error",
    "print_hint",
    "print_ok",
    "print_rule",
    "print_table",
    "print_warning",
    # Prompts
    "QuestionaryPromptAdapter",
    # Prompt target
    "format_prompt_target",
    "with_prompt_target",
]
