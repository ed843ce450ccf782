# cli/flow/types.py
"""
Flow 엔진 타입 정의

선언형 상태 머신(FlowDefinition)과 그 실행에 필요한 계약을 정의합니다.

구성:
    TerminalOutcome  - Runner가 반환하는 6개의 예약 종료 토큰
    ActionResult     - 메뉴 액션 콜백 결과 (그대로 EventId로 사용)
    PromptSpec       - SelectPrompt | ConfirmPrompt | TextPrompt
    StateDefinition  - prompt 상태 또는 on_enter 라우터 상태
    FlowDefinition   - 불변 상태 테이블
    HandlerRegistry  - 이름 → 핸들러 매핑 (+ 라우터가 발생시키는 이벤트 선언)
    PromptAdapter    - 프롬프트 렌더링 경계 (questionary 구현은 cli/ui/prompts.py)

Prompt의 message/options/initial 값은 리터럴 또는 Context를 받는 순수 함수입니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Generic, List, Mapping, Optional, Protocol, TypeVar, Union

T = TypeVar("T")
CtxT = TypeVar("CtxT")

StateId = str
EventId = str
PromptValue = Union[str, bool]

# 리터럴 또는 Context 투영 함수
Projection = Union[T, Callable[[Any], T]]


class TerminalOutcome(str, Enum):
    """Reserved end-of-run results interpreted by host commands.

    The values double as reserved words: no StateId may use them.
    """

    EXIT_COMMAND = "exit_command"
    RETURN_TO_CALLER = "return_to_caller"
    RETURN_TO_CALLER_ROOT = "return_to_caller_root"
    REPEAT = "repeat"
    ROOT = "root"
    COMPLETE = "complete"


TERMINAL_OUTCOMES: FrozenSet[str] = frozenset(outcome.value for outcome in TerminalOutcome)


class ActionResult(str, Enum):
    """Outcome of a menu action callback, consumed directly as an EventId."""

    ACTION_OK = "action_ok"
    WATCH_CANCELLED = "watch_cancelled"
    ACTION_ERROR = "action_error"
    ROOT = "root"
    EXIT = "exit"


def as_key(value: Any) -> Any:
    """Enum 멤버를 문자열 값으로 변환 (그 외는 그대로)

    str 기반 Enum은 name으로 해시되므로 dict 조회 전에 반드시 값으로 바꿔야 합니다.
    """
    if isinstance(value, Enum):
        return value.value
    return value


def resolve(value: Any, context: Any) -> Any:
    """리터럴 또는 투영 함수를 Context에 대해 평가"""
    if callable(value):
        return value(context)
    return value


# =============================================================================
# Prompt 스펙
# =============================================================================


@dataclass(frozen=True)
class PromptOption:
    value: str
    label: str


@dataclass(frozen=True)
class SelectPrompt:
    """Option picker."""

    message: Projection[str]
    options: Projection[List[PromptOption]]
    kind: str = field(default="select", init=False)


@dataclass(frozen=True)
class ConfirmPrompt:
    """Yes/no question."""

    message: Projection[str]
    initial: Projection[Optional[bool]] = None
    kind: str = field(default="confirm", init=False)


@dataclass(frozen=True)
class TextPrompt:
    """Free-form text input."""

    message: Projection[str]
    placeholder: Projection[Optional[str]] = None
    initial: Projection[Optional[str]] = None
    kind: str = field(default="text", init=False)


PromptSpec = Union[SelectPrompt, ConfirmPrompt, TextPrompt]


# =============================================================================
# 상태 / Flow 정의
# =============================================================================


@dataclass(frozen=True)
class StateDefinition:
    """Single node of a flow.

    Either interactive (``prompt``, optionally ``on_select``) or an automatic
    router (``on_enter``). ``root`` marks a resumption point after a ``root``
    outcome and carries no runtime behaviour.
    """

    transitions: Mapping[EventId, str]
    prompt: Optional[PromptSpec] = None
    on_enter: Optional[str] = None
    on_select: Optional[str] = None
    root: bool = False

    def __post_init__(self) -> None:
        normalized = {as_key(event): as_key(target) for event, target in dict(self.transitions).items()}
        object.__setattr__(self, "transitions", MappingProxyType(normalized))

    @property
    def is_router(self) -> bool:
        return self.on_enter is not None


@dataclass(frozen=True)
class FlowDefinition:
    """Immutable state table of one interactive flow."""

    id: str
    initial_state: StateId
    states: Mapping[StateId, StateDefinition]

    def __post_init__(self) -> None:
        object.__setattr__(self, "states", MappingProxyType(dict(self.states)))

    @property
    def root_states(self) -> List[StateId]:
        return [state_id for state_id, state in self.states.items() if state.root]


@dataclass
class FlowRunResult(Generic[CtxT]):
    """Final output of one runner invocation."""

    terminal: TerminalOutcome
    state_id: StateId
    context: CtxT


# =============================================================================
# Prompt Adapter
# =============================================================================


class PromptAdapter(Protocol):
    """Renders prompts and recognises cancellation.

    Implementations return an adapter-specific sentinel on cancel;
    ``is_cancel`` is the only way the runner learns about it.
    """

    def select(self, message: str, options: List[PromptOption]) -> Any: ...

    def confirm(self, message: str, initial: Optional[bool] = None) -> Any: ...

    def text(self, message: str, placeholder: Optional[str] = None, initial: Optional[str] = None) -> Any: ...

    def is_cancel(self, value: Any) -> bool: ...


# =============================================================================
# Handler Registry
# =============================================================================

Handler = Callable[..., Any]


class HandlerRegistry:
    """Named handlers referenced by ``on_enter`` / ``on_select``.

    A handler is called as ``handler(context)`` for routers and
    ``handler(context, value)`` after a prompt, and returns an EventId.
    Routers declare the events they can emit so definitions can be checked
    for exhaustive transitions.

    Example:
        handlers = HandlerRegistry("build_post")

        @handlers.register("build.after_menu", emits=("ask_repeat", "return_to_caller"))
        def after_menu(context, value=None):
            return "return_to_caller" if context.return_to_caller else "ask_repeat"
    """

    def __init__(self, name: str):
        self.name = name
        self._handlers: Dict[str, Handler] = {}
        self._emits: Dict[str, FrozenSet[str]] = {}

    def register(self, name: str, emits: Optional[Any] = None) -> Callable[[Handler], Handler]:
        def decorator(func: Handler) -> Handler:
            if name in self._handlers:
                raise ValueError(f"Handler already registered: {name}")
            self._handlers[name] = func
            if emits is not None:
                self._emits[name] = frozenset(as_key(event) for event in emits)
            return func

        return decorator

    def get(self, name: str) -> Optional[Handler]:
        return self._handlers.get(name)

    def emits(self, name: str) -> Optional[FrozenSet[str]]:
        """Declared events of a handler, or None when undeclared."""
        return self._emits.get(name)

    def names(self) -> List[str]:
        return list(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
