"""캐시 경로 유틸리티.

캐시 루트는 기본적으로 현재 작업 디렉토리의 ``.jenkins-cli/`` 이며
``JENKINS_CLI_CACHE_DIR`` 환경변수로 변경할 수 있습니다.
"""

import os
from pathlib import Path

from core.config import get_cache_root

JOB_CACHE_FILENAME = "jobs.json"


def get_cache_dir() -> Path:
    """캐시 디렉토리 경로 반환 (자동 생성됨)

    Example:
        >>> get_cache_dir()
        PosixPath('/path/to/cwd/.jenkins-cli')
    """
    cache_dir = get_cache_root()
    os.makedirs(cache_dir, exist_ok=True)
    return cache_dir


def get_cache_path(filename: str = JOB_CACHE_FILENAME) -> Path:
    """캐시 파일 경로 반환

    Args:
        filename: 캐시 파일명 (기본값: "jobs.json")

    Returns:
        캐시 파일 절대 경로 (디렉토리 자동 생성됨)
    """
    return get_cache_dir() / filename
