"""
core/cache/job_cache.py - jobs.json 읽기/쓰기

The cache is only usable when it was fetched for the same Jenkins URL and
user as the current connection settings.
"""

from __future__ import annotations

import json
import logging
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from core.config import EnvConfig
from core.jenkins.models import JenkinsJob

from .path import get_cache_path

logger = logging.getLogger(__name__)


@dataclass
class JobCache:
    """Cached job data with metadata."""

    jenkins_url: str
    user: str
    fetched_at: str
    jobs: list[JenkinsJob] = field(default_factory=list)
    recent_jobs: list[str] = field(default_factory=list)

    def matches(self, env: EnvConfig) -> bool:
        return self.jenkins_url == env.jenkins_url and self.user == env.jenkins_user

    def find_job(self, job_url: str) -> JenkinsJob | None:
        for job in self.jobs:
            if job.url == job_url:
                return job
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "jenkinsUrl": self.jenkins_url,
            "user": self.user,
            "fetchedAt": self.fetched_at,
            "jobs": [job.to_dict() for job in self.jobs],
            "recentJobs": list(self.recent_jobs),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobCache | None:
        """Parse a cache payload, or None when required fields are missing."""
        if not (
            isinstance(data.get("jenkinsUrl"), str)
            and isinstance(data.get("user"), str)
            and isinstance(data.get("fetchedAt"), str)
            and isinstance(data.get("jobs"), list)
        ):
            return None
        recent = data.get("recentJobs")
        return cls(
            jenkins_url=data["jenkinsUrl"],
            user=data["user"],
            fetched_at=data["fetchedAt"],
            jobs=[JenkinsJob.from_dict(entry) for entry in data["jobs"] if isinstance(entry, dict)],
            recent_jobs=[entry for entry in recent if isinstance(entry, str)] if isinstance(recent, list) else [],
        )

    @classmethod
    def new(cls, env: EnvConfig, jobs: list[JenkinsJob]) -> JobCache:
        return cls(
            jenkins_url=env.jenkins_url,
            user=env.jenkins_user,
            fetched_at=datetime.now(timezone.utc).isoformat(),
            jobs=jobs,
        )


def read_job_cache(path: Path | None = None) -> JobCache | None:
    """jobs.json 로드 (없거나 손상된 경우 None)"""
    path = path or get_cache_path()
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.debug("캐시 로드 실패 (%s): %s", path, e)
        return None
    if not isinstance(data, dict):
        return None
    return JobCache.from_dict(data)


def write_job_cache(cache: JobCache, path: Path | None = None) -> None:
    """파일에 원자적으로 저장 (write-to-temp-then-rename)"""
    path = path or get_cache_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(cache.to_dict(), ensure_ascii=False, indent=2)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=".jobs_")
    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        Path(tmp_path).replace(path)
    except BaseException:
        Path(tmp_path).unlink(missing_ok=True)
        raise
