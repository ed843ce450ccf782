"""
core/jobs.py - Job 캐시 로드 및 검색 랭킹

Jobs are cached in jobs.json and searched with a natural-language scoring
function:

    exact match        100
    prefix match        80
    substring match     60 (penalised when the job has extra tokens)
    token overlap     0-40 (rare tokens weigh more than common ones)
    typo (rapidfuzz)    FUZZY_MATCH_SCORE

Usage:
    from core.jobs import rank_jobs, resolve_job_candidates

    ranked = rank_jobs("api prod", jobs)
    candidates = resolve_job_candidates("api prod", jobs)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from rapidfuzz import fuzz

from core.cache import JobCache, read_job_cache, write_job_cache
from core.config import EnvConfig, settings
from core.exceptions import JenkinsCliError
from core.jenkins.client import JenkinsClient
from core.jenkins.models import JenkinsJob

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


@dataclass
class RankedJob:
    """랭킹 결과 항목"""

    job: JenkinsJob
    score: int


def get_job_display_name(job: JenkinsJob) -> str:
    return job.display_name


# =============================================================================
# Job 캐시
# =============================================================================


def load_jobs(
    client: JenkinsClient,
    env: EnvConfig,
    refresh: bool = False,
    non_interactive: bool = False,
    confirm_refresh: Callable[[str], bool] | None = None,
) -> list[JenkinsJob]:
    """Cached jobs for the current server, refreshing when asked or needed.

    Args:
        client: Jenkins API client
        env: connection settings
        refresh: always fetch from Jenkins
        non_interactive: never ask, fail instead
        confirm_refresh: asks the user whether to fetch now (receives the reason)

    Raises:
        JenkinsCliError: the cache is unusable and no refresh happened
    """
    if refresh:
        return fetch_and_cache_jobs(client, env)

    cache = read_job_cache()
    if cache and cache.matches(env):
        return cache.jobs

    reason = (
        "Job cache does not match the current Jenkins URL or user." if cache else "Job cache is missing."
    )
    hints = [
        "Run `jenkins-cli list --refresh` to rebuild the cache.",
        "Or pass `--job-url` to skip cache matching.",
    ]

    if not non_interactive and confirm_refresh and confirm_refresh(reason):
        return fetch_and_cache_jobs(client, env)

    raise JenkinsCliError(reason, hints=hints)


def fetch_and_cache_jobs(client: JenkinsClient, env: EnvConfig) -> list[JenkinsJob]:
    """Fetch jobs and rewrite the cache, keeping branch and recent-job history."""
    jobs = client.list_jobs()
    previous = read_job_cache()
    cache = JobCache.new(env, jobs)
    if previous and previous.matches(env):
        for job in jobs:
            old = previous.find_job(job.url)
            if old and old.branches:
                job.branches = list(old.branches)
        cache.recent_jobs = list(previous.recent_jobs)
    write_job_cache(cache)
    logger.info("Cached %d jobs from %s", len(jobs), env.jenkins_url)
    return jobs


# =============================================================================
# 검색 랭킹
# =============================================================================


def normalize_text(text: str) -> str:
    """검색용 텍스트 정규화 (소문자, 영숫자 외 문자 → 공백)"""
    return _NON_ALNUM.sub(" ", text.lower()).strip()


def _tokenize(text: str) -> list[str]:
    return [token for token in text.split(" ") if token]


def _analyze_token_frequencies(jobs: list[JenkinsJob]) -> dict[str, float]:
    counts: dict[str, int] = {}
    for job in jobs:
        for token in set(_tokenize(normalize_text(job.name))):
            counts[token] = counts.get(token, 0) + 1
    total = len(jobs) or 1
    return {token: count / total for token, count in counts.items()}


def _has_all_query_tokens(query_tokens: list[str], candidate_tokens: list[str]) -> bool:
    if not query_tokens:
        return False
    return all(
        any(candidate == token or candidate.startswith(token) for candidate in candidate_tokens)
        for token in query_tokens
    )


def _score_candidate(
    query: str,
    query_tokens: list[str],
    candidate: str,
    token_frequencies: dict[str, float],
    has_exact_or_prefix_match: bool,
) -> int:
    if not query or not candidate:
        return 0

    candidate_tokens = candidate.split(" ")
    if query_tokens and not _has_all_query_tokens(query_tokens, candidate_tokens):
        return 0

    if candidate == query:
        return 100
    if candidate.startswith(query):
        return 80

    if query in candidate:
        query_token_count = len(query.split(" "))
        extra_tokens = len(candidate_tokens) - query_token_count
        if extra_tokens <= 0:
            return 60
        single_token_query = query_token_count == 1
        if has_exact_or_prefix_match:
            # 더 나은 매치가 있으면 추가 토큰당 강한 감점
            penalty = extra_tokens * (10 if single_token_query else 20)
            return max(0, 60 - penalty)
        penalty = extra_tokens * (4 if single_token_query else 8)
        return max(25, 60 - penalty)

    if not query_tokens:
        return 0

    candidate_token_set = set(candidate_tokens)
    weighted_overlap = 0.0
    total_weight = 0.0
    for token in query_tokens:
        weight = 1.1 - token_frequencies.get(token, 0.5)
        total_weight += weight
        if token in candidate_token_set:
            weighted_overlap += weight

    if weighted_overlap == 0:
        return 0
    return round(weighted_overlap / total_weight * 40)


def _fuzzy_score(query: str, candidate: str) -> int:
    """오타 허용 매칭 (rapidfuzz)"""
    if len(query) < 4:
        return 0
    if fuzz.token_set_ratio(query, candidate) >= settings.FUZZY_MIN_SCORE:
        return settings.FUZZY_MATCH_SCORE
    return 0


def rank_jobs(query: str, jobs: list[JenkinsJob]) -> list[RankedJob]:
    """Score every job against the query, best first.

    Jobs scoring zero are dropped. Ties prefer shorter display names, then
    alphabetical order.
    """
    normalized_query = normalize_text(query)
    query_tokens = _tokenize(normalized_query)
    token_frequencies = _analyze_token_frequencies(jobs)

    def candidates_of(job: JenkinsJob) -> list[str]:
        return [normalize_text(value) for value in (job.name, job.full_name) if value]

    has_exact_or_prefix_match = any(
        candidate == normalized_query or candidate.startswith(normalized_query)
        for job in jobs
        for candidate in candidates_of(job)
    )

    ranked: list[RankedJob] = []
    for job in jobs:
        best = 0
        for candidate in candidates_of(job):
            score = _score_candidate(
                normalized_query,
                query_tokens,
                candidate,
                token_frequencies,
                has_exact_or_prefix_match,
            )
            if score == 0:
                score = _fuzzy_score(normalized_query, candidate)
            best = max(best, score)
        if best > 0:
            ranked.append(RankedJob(job=job, score=best))

    ranked.sort(key=lambda m: (-m.score, len(get_job_display_name(m.job)), get_job_display_name(m.job)))
    return ranked


def resolve_job_candidates(query: str, jobs: list[JenkinsJob]) -> list[JenkinsJob]:
    """Close matches for a query.

    A single-element result means the query resolved unambiguously.

    Raises:
        JenkinsCliError: empty query or nothing scores above MIN_SCORE
    """
    trimmed = query.strip()
    if not trimmed:
        raise JenkinsCliError(
            "Job name is required.",
            hints=["Pass --job <name> or use --job-url <url>."],
        )

    ranked = rank_jobs(trimmed, jobs)
    if not ranked or ranked[0].score < settings.MIN_SCORE:
        raise JenkinsCliError(
            f'No jobs match "{trimmed}".',
            hints=[
                "Try a different description or run `jenkins-cli list --refresh`.",
                "Or pass `--job-url` to skip cache matching.",
            ],
        )

    top_score = ranked[0].score
    close = [
        match.job
        for match in ranked
        if match.score >= settings.MIN_SCORE and top_score - match.score <= settings.AMBIGUITY_GAP
    ]
    return close[: settings.MAX_OPTIONS]


def filter_jobs(jobs: list[JenkinsJob], search: str) -> list[JenkinsJob]:
    """List-command filtering: sorted names without a search, ranked matches with one."""
    if not search:
        return sorted(jobs, key=get_job_display_name)
    return [match.job for match in rank_jobs(search, jobs) if match.score >= settings.MIN_SCORE]


def ensure_unique_match(query: str, candidates: list[JenkinsJob]) -> JenkinsJob:
    """Non-interactive resolution: exactly one candidate or an error."""
    if len(candidates) == 1:
        return candidates[0]
    names = ", ".join(get_job_display_name(job) for job in candidates)
    raise JenkinsCliError(
        f'Job name is ambiguous for "{query.strip()}".',
        hints=[f"Options: {names}", "Pass `--job <exact name>` or `--job-url <url>`."],
    )
