# cli/flow/context.py
"""
Flow별 실행 컨텍스트

각 Flow 실행이 단독으로 소유하는 가변 레코드입니다. 호스트 명령이 생성하고,
핸들러만 수정하며, 세션이 끝나면 버려집니다.

    ListInteractiveContext - job 탐색 (list)
    BuildPreContext        - 빌드 전 job/브랜치/파라미터 수집
    BuildPostContext       - 빌드 후 후속 액션
    StatusPostContext      - 상태 조회 후 후속 액션
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from core.config import EnvConfig
from core.jenkins.models import JenkinsJob
from core.recent_jobs import RecentJob

from .types import ActionResult

# 파라미터 모드
PARAMETER_MODE_BRANCH = "branch"
PARAMETER_MODE_CUSTOM = "custom"
PARAMETER_MODE_WITHOUT = "without"


@dataclass
class ListInteractiveContext:
    """job 탐색 Flow 컨텍스트"""

    env: EnvConfig
    jobs: List[JenkinsJob]
    perform_action: Callable[[str, JenkinsJob], ActionResult]
    selected_job: Optional[JenkinsJob] = None
    selected_action: Optional[str] = None


@dataclass
class BuildPreContext:
    """빌드 전 입력 수집 Flow 컨텍스트

    Attributes:
        jobs: 검색 대상 job 목록
        recent_jobs: 최근 사용 job (비어 있으면 바로 검색)
        search_query: 마지막 검색어
        search_candidates: 모호한 검색 결과 후보
        branch_param: 브랜치를 전달할 빌드 파라미터 이름
        default_branch: job 기본 브랜치로 빌드 (파라미터 없음)
        parameter_mode: "branch" | "custom" | "without"
        build_mode_prompted: 빌드 모드 선택을 이미 물었는지
        branch_choices: 브랜치 선택지 (이력 + 기본 브랜치)
        removable_branches: 삭제 가능한 캐시 브랜치
        custom_params: 사용자 정의 빌드 파라미터
    """

    env: EnvConfig
    jobs: List[JenkinsJob]
    recent_jobs: List[RecentJob] = field(default_factory=list)
    search_query: str = ""
    search_candidates: List[JenkinsJob] = field(default_factory=list)
    selected_job_url: Optional[str] = None
    selected_job_label: Optional[str] = None
    branch_param: str = "BRANCH"
    branch: Optional[str] = None
    custom_params: Dict[str, str] = field(default_factory=dict)
    default_branch: bool = False
    parameter_mode: Optional[str] = None
    build_mode_prompted: bool = False
    branch_choices: List[str] = field(default_factory=list)
    removable_branches: List[str] = field(default_factory=list)
    pending_branch_removal: Optional[str] = None
    pending_custom_param_key: Optional[str] = None

    def build_parameters(self) -> Dict[str, str]:
        """트리거에 사용할 빌드 파라미터 (브랜치 + 사용자 정의)"""
        if self.parameter_mode == PARAMETER_MODE_WITHOUT or self.default_branch:
            return dict(self.custom_params)
        params: Dict[str, str] = {}
        if self.branch:
            params[self.branch_param] = self.branch
        params.update(self.custom_params)
        return params


@dataclass
class BuildPostContext:
    """빌드 후 후속 액션 Flow 컨텍스트"""

    env: EnvConfig
    job_label: str
    perform_action: Callable[[str], ActionResult]
    return_to_caller: bool = False
    selected_action: Optional[str] = None


@dataclass
class StatusPostContext:
    """상태 조회 후 후속 액션 Flow 컨텍스트"""

    env: EnvConfig
    target_label: str
    perform_action: Callable[[str], ActionResult]
    selected_action: Optional[str] = None
