"""
core/cache - 로컬 캐시 (jobs.json)

All cached data (job list, per-job branch history, recent jobs) lives in a
single ``jobs.json`` file scoped to one Jenkins URL + user.

구조:
    .jenkins-cli/
    └── jobs.json     ← {jenkinsUrl, user, fetchedAt, jobs[], recentJobs[]}

사용법:
    from core.cache import read_job_cache, write_job_cache

    cache = read_job_cache()
    if cache and cache.matches(env):
        ...
"""

from .job_cache import JobCache, read_job_cache, write_job_cache
from .path import get_cache_dir, get_cache_path

__all__ = [
    "JobCache",
    "read_job_cache",
    "write_job_cache",
    "get_cache_dir",
    "get_cache_path",
]
