# cli/flow/validation.py
"""
Flow 정의 구조 검증

FlowRunner 생성 시와 테스트에서 호출됩니다. 발견한 문제를 모두 모아 한 번에 보고합니다.

검사 항목:
    - initial_state가 states에 존재
    - 상태 이름이 TerminalOutcome 값과 겹치지 않음
    - 모든 전이 대상이 상태 이름 또는 TerminalOutcome 값
    - 각 상태는 prompt 또는 on_enter 중 정확히 하나
    - 모든 prompt 상태에 "esc" 전이 존재
    - on_select 없는 prompt는 기본 이벤트 키만 사용 (text는 on_select 필수)
    - 참조된 핸들러가 레지스트리에 등록됨
    - 라우터 핸들러가 선언한 모든 이벤트가 전이 테이블에 존재
"""

from __future__ import annotations

from typing import List, Optional

from core.exceptions import MalformedDefinitionError

from .types import (
    TERMINAL_OUTCOMES,
    ConfirmPrompt,
    FlowDefinition,
    HandlerRegistry,
    SelectPrompt,
    StateDefinition,
    TextPrompt,
)

CONFIRM_DEFAULT_EVENTS = frozenset({"esc", "confirm:yes", "confirm:no"})


def _check_handler(
    state_id: str,
    state: StateDefinition,
    name: str,
    handlers: HandlerRegistry,
    require_emits: bool,
) -> List[str]:
    if name not in handlers:
        return [f"{state_id}: handler not registered: {name}"]

    emits = handlers.emits(name)
    if emits is None:
        if require_emits:
            return [f"{state_id}: router handler {name} does not declare its events"]
        return []
    missing = sorted(event for event in emits if event not in state.transitions)
    return [f"{state_id}: no transition for event '{event}' emitted by {name}" for event in missing]


def _check_state(
    definition: FlowDefinition,
    state_id: str,
    state: StateDefinition,
    handlers: Optional[HandlerRegistry],
) -> List[str]:
    problems: List[str] = []

    if state_id in TERMINAL_OUTCOMES:
        problems.append(f"state id '{state_id}' is a reserved terminal outcome")

    for event, target in state.transitions.items():
        if target not in TERMINAL_OUTCOMES and target not in definition.states:
            problems.append(f"{state_id}: transition '{event}' targets unknown state '{target}'")

    if state.prompt is None and state.on_enter is None:
        problems.append(f"{state_id}: state has neither prompt nor on_enter")
        return problems
    if state.prompt is not None and state.on_enter is not None:
        problems.append(f"{state_id}: state has both prompt and on_enter")
        return problems

    if state.on_enter is not None:
        if state.on_select is not None:
            problems.append(f"{state_id}: router state cannot have on_select")
        if handlers is not None:
            problems.extend(_check_handler(state_id, state, state.on_enter, handlers, require_emits=True))
        return problems

    # prompt 상태
    if "esc" not in state.transitions:
        problems.append(f"{state_id}: prompt state has no 'esc' transition")

    if state.on_select is not None:
        if handlers is not None:
            problems.extend(_check_handler(state_id, state, state.on_select, handlers, require_emits=False))
        return problems

    prompt = state.prompt
    if isinstance(prompt, TextPrompt):
        problems.append(f"{state_id}: text prompt requires on_select")
    elif isinstance(prompt, ConfirmPrompt):
        extra = sorted(set(state.transitions) - CONFIRM_DEFAULT_EVENTS)
        if extra:
            problems.append(f"{state_id}: confirm prompt without on_select uses non-default events {extra}")
    elif isinstance(prompt, SelectPrompt):
        extra = sorted(event for event in state.transitions if event != "esc" and not event.startswith("select:"))
        if extra:
            problems.append(f"{state_id}: select prompt without on_select uses non-default events {extra}")
    return problems


def validate_definition(definition: FlowDefinition, handlers: Optional[HandlerRegistry] = None) -> List[str]:
    """정의의 구조적 문제 목록 (비어 있으면 유효)

    Args:
        definition: 검사할 Flow 정의
        handlers: 주어지면 핸들러 등록 여부와 라우터 전이 커버리지도 검사
    """
    problems: List[str] = []
    if definition.initial_state not in definition.states:
        problems.append(f"initial state '{definition.initial_state}' is not defined")

    for state_id, state in definition.states.items():
        problems.extend(_check_state(definition, state_id, state, handlers))
    return problems


def assert_valid_definition(definition: FlowDefinition, handlers: Optional[HandlerRegistry] = None) -> None:
    """validate_definition 결과가 있으면 MalformedDefinitionError"""
    problems = validate_definition(definition, handlers)
    if problems:
        raise MalformedDefinitionError(definition.id, problems)
