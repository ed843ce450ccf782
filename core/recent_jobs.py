"""
core/recent_jobs.py - 최근 사용 job 목록

Stored as a list of job URLs inside jobs.json (most recent first).
"""

from __future__ import annotations

from dataclasses import dataclass

from core.branches import dedupe_case_insensitive
from core.cache import read_job_cache, write_job_cache
from core.config import EnvConfig, settings


@dataclass
class RecentJob:
    url: str
    label: str


def load_recent_jobs(env: EnvConfig) -> list[RecentJob]:
    cache = read_job_cache()
    if not cache or not cache.matches(env):
        return []

    urls = dedupe_case_insensitive(url.strip() for url in cache.recent_jobs if url.strip())
    recent: list[RecentJob] = []
    for url in urls:
        job = cache.find_job(url)
        recent.append(RecentJob(url=url, label=job.display_name if job else url))
    return recent


def record_recent_job(env: EnvConfig, job_url: str) -> None:
    """job_url을 최근 목록 맨 앞으로 이동 (최대 MAX_RECENT_JOBS개)"""
    job_url = job_url.strip()
    if not job_url:
        return
    cache = read_job_cache()
    if not cache or not cache.matches(env):
        return

    existing = [url for url in cache.recent_jobs if url.strip() and url.lower() != job_url.lower()]
    cache.recent_jobs = dedupe_case_insensitive([job_url, *existing])[: settings.MAX_RECENT_JOBS]
    write_job_cache(cache)
