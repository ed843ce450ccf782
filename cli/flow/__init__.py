# cli/flow/__init__.py
"""
CLI Flow Module - 선언형 대화형 Flow 엔진

모든 다단계 프롬프트(job 선택, 브랜치 선택, 파라미터 입력, 후속 작업)는
상태 테이블(FlowDefinition)과 이를 해석하는 FlowRunner로 구성됩니다.

구조:
    types.py        - TerminalOutcome, ActionResult, PromptSpec, StateDefinition,
                      FlowDefinition, HandlerRegistry, PromptAdapter
    context.py      - Flow별 실행 컨텍스트 데이터 클래스
    constants.py    - 내부 선택지 값
    definitions.py  - 4개의 Flow 정의
    handlers.py     - Flow별 핸들러 레지스트리
    runner.py       - FlowRunner (인터프리터)
    validation.py   - 정의 구조 검증

사용법:
    from cli.flow import run_flow, BUILD_PRE_FLOW, BUILD_PRE_HANDLERS, BuildPreContext

    ctx = BuildPreContext(env=env, jobs=jobs, recent_jobs=recent)
    result = run_flow(BUILD_PRE_FLOW, BUILD_PRE_HANDLERS, adapter, ctx)
    if result.terminal == TerminalOutcome.COMPLETE:
        trigger(ctx.selected_job_url, ctx.build_parameters())

Note:
    이 모듈은 Lazy Import 패턴을 사용합니다.
    실제 사용 시점에만 하위 모듈이 로드되어 CLI 시작 시간을 최적화합니다.
"""

__all__ = [
    # Runner
    "FlowRunner",
    "run_flow",
    "validate_definition",
    # Types
    "TerminalOutcome",
    "ActionResult",
    "FlowDefinition",
    "FlowRunResult",
    "StateDefinition",
    "SelectPrompt",
    "ConfirmPrompt",
    "TextPrompt",
    "PromptOption",
    "HandlerRegistry",
    # Context
    "ListInteractiveContext",
    "BuildPreContext",
    "BuildPostContext",
    "StatusPostContext",
    # Definitions
    "LIST_INTERACTIVE_FLOW",
    "BUILD_PRE_FLOW",
    "BUILD_POST_FLOW",
    "STATUS_POST_FLOW",
    "FLOWS",
    # Handlers
    "LIST_HANDLERS",
    "BUILD_PRE_HANDLERS",
    "BUILD_POST_HANDLERS",
    "STATUS_POST_HANDLERS",
]

# Lazy import 매핑 테이블
_IMPORT_MAPPING = {
    # Runner
    "FlowRunner": (".runner", "FlowRunner"),
    "run_flow": (".runner", "run_flow"),
    "validate_definition": (".validation", "validate_definition"),
    # Types
    "TerminalOutcome": (".types", "TerminalOutcome"),
    "ActionResult": (".types", "ActionResult"),
    "FlowDefinition": (".types", "FlowDefinition"),
    "FlowRunResult": (".types", "FlowRunResult"),
    "StateDefinition": (".types", "StateDefinition"),
    "SelectPrompt": (".types", "SelectPrompt"),
    "ConfirmPrompt": (".types", "ConfirmPrompt"),
    "TextPrompt": (".types", "TextPrompt"),
    "PromptOption": (".types", "PromptOption"),
    "HandlerRegistry": (".types", "HandlerRegistry"),
    # Context
    "ListInteractiveContext": (".context", "ListInteractiveContext"),
    "BuildPreContext": (".context", "BuildPreContext"),
    "BuildPostContext": (".context", "BuildPostContext"),
    "StatusPostContext": (".context", "StatusPostContext"),
    # Definitions
    "LIST_INTERACTIVE_FLOW": (".definitions", "LIST_INTERACTIVE_FLOW"),
    "BUILD_PRE_FLOW": (".definitions", "BUILD_PRE_FLOW"),
    "BUILD_POST_FLOW": (".definitions", "BUILD_POST_FLOW"),
    "STATUS_POST_FLOW": (".definitions", "STATUS_POST_FLOW"),
    "FLOWS": (".definitions", "FLOWS"),
    # Handlers
    "LIST_HANDLERS": (".handlers", "LIST_HANDLERS"),
    "BUILD_PRE_HANDLERS": (".handlers", "BUILD_PRE_HANDLERS"),
    "BUILD_POST_HANDLERS": (".handlers", "BUILD_POST_HANDLERS"),
    "STATUS_POST_HANDLERS": (".handlers", "STATUS_POST_HANDLERS"),
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    if name in _IMPORT_MAPPING:
        module_name, attr_name = _IMPORT_MAPPING[name]
        import importlib

        module = importlib.import_module(module_name, __name__)
        return getattr(module, attr_name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
