# core/__init__.py
"""
core - Jenkins CLI 인프라

Flow 엔진과 무관한 기반 계층입니다. Jenkins API, 로컬 캐시, 설정, 예외를 담당합니다.

아키텍처:
    core/
    ├── jenkins/         # Jenkins REST API 클라이언트 + 모델
    ├── cache/           # jobs.json 캐시 (job 목록, 브랜치 이력, 최근 job)
    ├── jobs.py          # job 로드 및 검색 랭킹
    ├── branches.py      # job별 브랜치 이력
    ├── recent_jobs.py   # 최근 사용 job
    ├── config.py        # 중앙 설정 관리
    └── exceptions.py    # 통합 예외 계층

Usage:
    from core.config import load_env
    from core.jenkins import JenkinsClient
    from core.jobs import load_jobs, resolve_job_candidates

    env = load_env()
    jobs = load_jobs(JenkinsClient(env), env)
    candidates = resolve_job_candidates("api prod", jobs)
"""

from core import config, exceptions

__all__: list[str] = [
    "config",
    "exceptions",
]
