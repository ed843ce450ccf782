"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들. 결과는 stdout, 진단(ERROR/HINT)은 stderr로 출력합니다.
"""

import logging
import platform

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

# requests/urllib3 노이즈 로그 제한
logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()
err_console = get_console(stderr=True)


def get_rich_handler() -> RichHandler:
    """stderr 콘솔에 출력하는 RichHandler (--debug 로깅용)"""
    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    return handler


# =============================================================================
# 표준 출력 스타일
# =============================================================================


def print_ok(message: str) -> None:
    """성공 메시지 출력 (OK: 접두사, 초록색)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[green]OK:[/green] {escape(message)}")


def print_error(message: str) -> None:
    """에러 메시지 출력 (ERROR: 접두사, stderr)

    Args:
        message: 출력할 메시지
    """
    err_console.print(f"[red]ERROR:[/red] {escape(message)}")


def print_hint(message: str) -> None:
    """힌트 출력 (HINT: 접두사, stderr)"""
    err_console.print(f"[yellow]HINT:[/yellow] {escape(message)}")


def print_warning(message: str) -> None:
    err_console.print(f"[yellow]! {escape(message)}[/yellow]")


def print_cli_error(error: Exception) -> None:
    """예외를 ERROR/HINT 라인으로 출력

    hints 속성이 있는 예외(JenkinsCliError)는 힌트도 함께 출력합니다.
    """
    message = getattr(error, "message", None) or str(error) or "Unexpected error."
    print_error(message)
    for hint in getattr(error, "hints", None) or []:
        print_hint(hint)


def print_table(
    title: str,
    columns: list[str],
    rows: list[list],
) -> None:
    """테이블 형식으로 데이터를 출력합니다.

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 리스트
        rows: 행 데이터 리스트
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column)

    for row in rows:
        table.add_row(*[escape(str(cell)) for cell in row])

    console.print(table)


def print_rule(title: str = "", style: str = "dim") -> None:
    """Rich Rule로 구분선 출력

    Args:
        title: 구분선 제목 (빈 문자열이면 제목 없는 구분선)
        style: 스타일 (기본: dim)
    """
    if title:
        console.print(Rule(title=title, style=style))
    else:
        console.print(Rule(style=style))
