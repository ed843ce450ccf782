"""
tests/conftest.py - pytest 공통 픽스처

Flow 엔진과 명령 테스트에 필요한 헬퍼를 제공합니다.

Usage:
    def test_something(env, sample_jobs, make_adapter):
        # env: 테스트용 EnvConfig
        # sample_jobs: 캐시에 들어갈 job 목록
        # make_adapter: 응답을 순서대로 반환하는 PromptAdapter 생성
        pass
"""

import sys
from pathlib import Path
from typing import Any, List, Optional

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cli.i18n import set_lang  # noqa: E402
from core.cache import JobCache, write_job_cache  # noqa: E402
from core.config import EnvConfig  # noqa: E402
from core.jenkins.models import JenkinsJob  # noqa: E402

JENKINS_URL = "https://jenkins.example.com"
API_DEPLOY_URL = f"{JENKINS_URL}/job/api-deploy/"
WEB_DEPLOY_URL = f"{JENKINS_URL}/job/web-deploy/"
NIGHTLY_REPORT_URL = f"{JENKINS_URL}/job/nightly-report/"


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """테스트 환경 설정 (영어 메시지, 임시 캐시 디렉토리)"""
    monkeypatch.setenv("JENKINS_CLI_CACHE_DIR", str(tmp_path / "cache"))
    for name in ("JENKINS_URL", "JENKINS_USER", "JENKINS_API_TOKEN", "JENKINS_PROFILE", "JENKINS_BRANCH_PARAM"):
        monkeypatch.delenv(name, raising=False)
    set_lang("en")

    yield

    set_lang("en")


# =============================================================================
# Prompt Adapter
# =============================================================================


class ScriptedPromptAdapter:
    """미리 정한 응답을 순서대로 반환하는 PromptAdapter

    None은 취소(Esc/Ctrl+C)로 처리됩니다. 호출 기록은 calls에 남습니다.
    """

    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls: List[tuple] = []

    def _next(self, kind: str, message: str, payload: Any) -> Any:
        self.calls.append((kind, message, payload))
        if not self.responses:
            raise AssertionError(f"unexpected {kind} prompt: {message}")
        return self.responses.pop(0)

    def select(self, message: str, options: List[Any]) -> Any:
        return self._next("select", message, options)

    def confirm(self, message: str, initial: Optional[bool] = None) -> Any:
        return self._next("confirm", message, initial)

    def text(self, message: str, placeholder: Optional[str] = None, initial: Optional[str] = None) -> Any:
        return self._next("text", message, initial)

    def is_cancel(self, value: Any) -> bool:
        return value is None

    @property
    def kinds(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def make_adapter():
    """ScriptedPromptAdapter 생성 함수"""
    return ScriptedPromptAdapter


# =============================================================================
# Jenkins 픽스처
# =============================================================================


@pytest.fixture
def env():
    """테스트용 EnvConfig"""
    return EnvConfig(
        jenkins_url=JENKINS_URL,
        jenkins_user="alice",
        jenkins_api_token="token",
    )


@pytest.fixture
def sample_jobs():
    """테스트용 job 목록"""
    return [
        JenkinsJob(name="api-deploy", url=API_DEPLOY_URL),
        JenkinsJob(name="web-deploy", url=WEB_DEPLOY_URL),
        JenkinsJob(name="nightly-report", url=NIGHTLY_REPORT_URL),
    ]


@pytest.fixture
def job_cache(env, sample_jobs):
    """sample_jobs가 들어 있는 jobs.json 작성"""
    cache = JobCache.new(env, sample_jobs)
    write_job_cache(cache)
    return cache
