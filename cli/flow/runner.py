# cli/flow/runner.py
"""
Flow Runner - 선언형 Flow 정의를 실행하는 인터프리터

상태를 하나씩 해석하며 TerminalOutcome에 도달할 때까지 반복합니다.

    1. on_enter 라우터 상태: 핸들러가 반환한 이벤트로 즉시 전이 (프롬프트 없음)
    2. prompt 상태: 어댑터로 프롬프트 표시 후
       - 취소          → "esc"
       - on_select 있음 → 핸들러 결과
       - confirm       → "confirm:yes" / "confirm:no"
       - select        → "select:<value>"
    3. 전이 대상이 TerminalOutcome이면 FlowRunResult 반환, 아니면 다음 상태로

핸들러 예외는 잡지 않고 그대로 호출자에게 전달합니다. Runner는 호출 사이에
내부 상태를 유지하지 않으므로 같은 Context로 root 상태부터 다시 실행할 수 있습니다.

사용법:
    from cli.flow import run_flow, BUILD_POST_FLOW, BUILD_POST_HANDLERS

    result = run_flow(BUILD_POST_FLOW, BUILD_POST_HANDLERS, adapter, ctx)
    if result.terminal == TerminalOutcome.REPEAT:
        ...
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Optional, TypeVar

from core.exceptions import MalformedDefinitionError, UnhandledEventError, UnknownStateError

from .types import (
    TERMINAL_OUTCOMES,
    ConfirmPrompt,
    EventId,
    FlowDefinition,
    FlowRunResult,
    HandlerRegistry,
    PromptAdapter,
    SelectPrompt,
    StateDefinition,
    StateId,
    TerminalOutcome,
    TextPrompt,
    as_key,
    resolve,
)
from .validation import assert_valid_definition

logger = logging.getLogger(__name__)

CtxT = TypeVar("CtxT")


class FlowRunner(Generic[CtxT]):
    """FlowDefinition + HandlerRegistry + PromptAdapter 실행기

    Args:
        definition: 실행할 Flow 정의
        handlers: 정의가 참조하는 핸들러 레지스트리
        adapter: 프롬프트 어댑터
        validate: 생성 시 정의 구조 검증 (MalformedDefinitionError)
    """

    def __init__(
        self,
        definition: FlowDefinition,
        handlers: HandlerRegistry,
        adapter: PromptAdapter,
        validate: bool = True,
    ):
        if validate:
            assert_valid_definition(definition, handlers)
        self.definition = definition
        self.handlers = handlers
        self.adapter = adapter

    def run(self, context: CtxT, start_state_id: Optional[StateId] = None) -> FlowRunResult[CtxT]:
        """TerminalOutcome에 도달할 때까지 실행

        Args:
            context: 이 실행이 소유하는 Context (핸들러가 수정)
            start_state_id: 시작 상태 (기본: initial_state, root 재개 시 지정)

        Returns:
            FlowRunResult(terminal, state_id, context)

        Raises:
            UnknownStateError: 존재하지 않는 상태
            UnhandledEventError: 현재 상태의 전이 테이블에 없는 이벤트
            MalformedDefinitionError: prompt/on_enter가 없는 상태 또는 미등록 핸들러
        """
        current_id = start_state_id or self.definition.initial_state
        logger.debug("[%s] start at %s", self.definition.id, current_id)

        while True:
            state = self._get_state(current_id)

            if state.on_enter is not None:
                event = self._call_handler(current_id, state.on_enter, context)
            elif state.prompt is not None:
                event = self._prompt_event(current_id, state, context)
            else:
                raise MalformedDefinitionError(
                    self.definition.id,
                    ["state has neither prompt nor on_enter"],
                    state_id=current_id,
                )

            target = self._resolve_transition(current_id, state, event)
            logger.debug("[%s] %s --%s--> %s", self.definition.id, current_id, event, target)

            if target in TERMINAL_OUTCOMES:
                return FlowRunResult(terminal=TerminalOutcome(target), state_id=current_id, context=context)
            current_id = target

    # -------------------------------------------------------------------------
    # 내부 단계
    # -------------------------------------------------------------------------

    def _get_state(self, state_id: StateId) -> StateDefinition:
        state = self.definition.states.get(state_id)
        if state is None:
            raise UnknownStateError(self.definition.id, state_id)
        return state

    def _call_handler(self, state_id: StateId, name: str, context: Any, *args: Any) -> EventId:
        handler = self.handlers.get(name)
        if handler is None:
            raise MalformedDefinitionError(
                self.definition.id,
                [f"handler not registered: {name}"],
                state_id=state_id,
            )
        return as_key(handler(context, *args))

    def _prompt_event(self, state_id: StateId, state: StateDefinition, context: Any) -> EventId:
        prompt = state.prompt
        message = resolve(prompt.message, context)

        if isinstance(prompt, SelectPrompt):
            value = self.adapter.select(message, list(resolve(prompt.options, context)))
        elif isinstance(prompt, ConfirmPrompt):
            value = self.adapter.confirm(message, resolve(prompt.initial, context))
        elif isinstance(prompt, TextPrompt):
            value = self.adapter.text(
                message,
                resolve(prompt.placeholder, context),
                resolve(prompt.initial, context),
            )
        else:
            raise MalformedDefinitionError(
                self.definition.id,
                [f"unknown prompt type: {type(prompt).__name__}"],
                state_id=state_id,
            )

        if self.adapter.is_cancel(value):
            return "esc"
        if state.on_select is not None:
            return self._call_handler(state_id, state.on_select, context, value)
        return self._default_event(state_id, prompt, value)

    def _default_event(self, state_id: StateId, prompt: Any, value: Any) -> EventId:
        if isinstance(prompt, ConfirmPrompt):
            return "confirm:yes" if value else "confirm:no"
        if isinstance(prompt, SelectPrompt):
            return f"select:{value}"
        raise MalformedDefinitionError(
            self.definition.id,
            [f"{prompt.kind} prompt requires on_select"],
            state_id=state_id,
        )

    def _resolve_transition(self, state_id: StateId, state: StateDefinition, event: Any) -> str:
        target = state.transitions.get(event) if isinstance(event, str) else None
        if target is None:
            raise UnhandledEventError(self.definition.id, state_id, event)
        return target


def run_flow(
    definition: FlowDefinition,
    handlers: HandlerRegistry,
    adapter: PromptAdapter,
    context: CtxT,
    start_state_id: Optional[StateId] = None,
) -> FlowRunResult[CtxT]:
    """FlowRunner 생성 + 실행 단축 함수"""
    return FlowRunner(definition, handlers, adapter).run(context, start_state_id=start_state_id)
