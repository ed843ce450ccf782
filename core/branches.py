"""
core/branches.py - Job별 브랜치 선택 이력

Recently used branches are stored per job inside jobs.json. The default
branches are always offered but never stored, so they cannot be removed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from core.cache import read_job_cache, write_job_cache
from core.config import EnvConfig, settings

logger = logging.getLogger(__name__)

_DEFAULT_BRANCH_SET = {branch.lower() for branch in settings.DEFAULT_BRANCHES}


def is_default_branch(branch: str) -> bool:
    return branch.lower() in _DEFAULT_BRANCH_SET


def dedupe_case_insensitive(entries: Iterable[str]) -> list[str]:
    """대소문자 무시 중복 제거 (첫 등장 순서 유지)"""
    seen: set[str] = set()
    result: list[str] = []
    for entry in entries:
        key = entry.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(entry)
    return result


def _clean(entries: Iterable[object]) -> list[str]:
    return [entry.strip() for entry in entries if isinstance(entry, str) and entry.strip()]


def load_cached_branches(env: EnvConfig, job_url: str) -> list[str]:
    """Branch history followed by the default branches."""
    return dedupe_case_insensitive([*load_cached_branch_history(env, job_url), *settings.DEFAULT_BRANCHES])


def load_cached_branch_history(env: EnvConfig, job_url: str) -> list[str]:
    """Removable (non-default) branches recorded for a job, most recent first."""
    cache = read_job_cache()
    if not cache or not cache.matches(env):
        return []
    job = cache.find_job(job_url)
    if not job:
        return []
    return dedupe_case_insensitive(b for b in _clean(job.branches) if not is_default_branch(b))


def remove_cached_branch(env: EnvConfig, job_url: str, branch: str) -> bool:
    """Drop a branch from a job's history.

    Returns:
        True when something was removed
    """
    target = branch.strip()
    if not target or is_default_branch(target):
        return False
    cache = read_job_cache()
    if not cache or not cache.matches(env):
        return False
    job = cache.find_job(job_url)
    if not job or not job.branches:
        return False

    updated = [entry for entry in job.branches if entry.lower() != target.lower()]
    if len(updated) == len(job.branches):
        return False
    job.branches = updated
    write_job_cache(cache)
    logger.debug("Removed cached branch %s from %s", target, job_url)
    return True


def record_branch_selection(env: EnvConfig, job_url: str, branch: str) -> None:
    """Move a branch to the front of a job's history."""
    normalized = branch.strip()
    if not normalized:
        return
    cache = read_job_cache()
    if not cache or not cache.matches(env):
        return
    job = cache.find_job(job_url)
    if not job:
        return

    existing = [entry for entry in _clean(job.branches) if entry.lower() != normalized.lower()]
    job.branches = [normalized, *existing][: settings.MAX_BRANCHES_PER_JOB]
    write_job_cache(cache)
