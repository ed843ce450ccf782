# cli/commands - list / build / status 명령 구현
"""
명령 구현 모듈

    list_cmd.py      - job 검색 + LIST_INTERACTIVE_FLOW
    build_cmd.py     - BUILD_PRE_FLOW → 트리거 → BUILD_POST_FLOW
    status_cmd.py    - BUILD_PRE_FLOW(파라미터 없음) → 상태 출력 → STATUS_POST_FLOW
    actions.py       - watch / logs / cancel / rerun / 빌드 트리거
    status_format.py - 빌드 상태 출력 포맷
"""

from .build_cmd import BuildResult, run_build
from .list_cmd import run_list
from .status_cmd import run_status

__all__ = ["BuildResult", "run_build", "run_list", "run_status"]
