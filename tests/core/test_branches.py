# tests/core/test_branches.py
"""
core/branches.py + core/recent_jobs.py 단위 테스트

브랜치 이력과 최근 job은 모두 jobs.json에 저장됩니다.
"""

from core.branches import (
    dedupe_case_insensitive,
    is_default_branch,
    load_cached_branch_history,
    load_cached_branches,
    record_branch_selection,
    remove_cached_branch,
)
from core.cache import read_job_cache
from core.config import EnvConfig, settings
from core.recent_jobs import load_recent_jobs, record_recent_job

API_DEPLOY_URL = "https://jenkins.example.com/job/api-deploy/"
WEB_DEPLOY_URL = "https://jenkins.example.com/job/web-deploy/"


class TestBranchHistory:
    def test_defaults_without_history(self, env, job_cache):
        assert load_cached_branches(env, API_DEPLOY_URL) == list(settings.DEFAULT_BRANCHES)
        assert load_cached_branch_history(env, API_DEPLOY_URL) == []

    def test_record_moves_branch_to_front(self, env, job_cache):
        record_branch_selection(env, API_DEPLOY_URL, "feature/a")
        record_branch_selection(env, API_DEPLOY_URL, "feature/b")
        record_branch_selection(env, API_DEPLOY_URL, " Feature/A ")

        assert load_cached_branch_history(env, API_DEPLOY_URL) == ["Feature/A", "feature/b"]
        assert load_cached_branches(env, API_DEPLOY_URL) == [
            "Feature/A",
            "feature/b",
            *settings.DEFAULT_BRANCHES,
        ]

    def test_history_is_capped(self, env, job_cache):
        for index in range(settings.MAX_BRANCHES_PER_JOB + 3):
            record_branch_selection(env, API_DEPLOY_URL, f"feature/{index}")

        history = load_cached_branch_history(env, API_DEPLOY_URL)
        assert len(history) == settings.MAX_BRANCHES_PER_JOB
        assert history[0] == f"feature/{settings.MAX_BRANCHES_PER_JOB + 2}"

    def test_default_branch_is_not_removable(self, env, job_cache):
        record_branch_selection(env, API_DEPLOY_URL, "master")

        assert load_cached_branch_history(env, API_DEPLOY_URL) == []
        assert remove_cached_branch(env, API_DEPLOY_URL, "master") is False
        assert "master" in load_cached_branches(env, API_DEPLOY_URL)

    def test_remove_case_insensitive(self, env, job_cache):
        record_branch_selection(env, API_DEPLOY_URL, "feature/a")

        assert remove_cached_branch(env, API_DEPLOY_URL, "FEATURE/A") is True
        assert remove_cached_branch(env, API_DEPLOY_URL, "feature/a") is False
        assert load_cached_branch_history(env, API_DEPLOY_URL) == []

    def test_history_is_per_job(self, env, job_cache):
        record_branch_selection(env, API_DEPLOY_URL, "feature/a")
        assert load_cached_branch_history(env, WEB_DEPLOY_URL) == []

    def test_other_server_sees_nothing(self, env, job_cache):
        record_branch_selection(env, API_DEPLOY_URL, "feature/a")
        other = EnvConfig(jenkins_url=env.jenkins_url, jenkins_user="bob", jenkins_api_token="t")

        assert load_cached_branch_history(other, API_DEPLOY_URL) == []
        assert remove_cached_branch(other, API_DEPLOY_URL, "feature/a") is False

    def test_without_cache(self, env):
        record_branch_selection(env, API_DEPLOY_URL, "feature/a")
        assert read_job_cache() is None
        assert load_cached_branch_history(env, API_DEPLOY_URL) == []

    def test_helpers(self):
        assert is_default_branch("Master")
        assert not is_default_branch("main-feature")
        assert dedupe_case_insensitive(["a", "B", "A", "b", "c"]) == ["a", "B", "c"]


class TestRecentJobs:
    def test_empty(self, env, job_cache):
        assert load_recent_jobs(env) == []

    def test_record_and_load(self, env, job_cache):
        record_recent_job(env, API_DEPLOY_URL)
        record_recent_job(env, WEB_DEPLOY_URL)
        record_recent_job(env, API_DEPLOY_URL)

        recent = load_recent_jobs(env)

        assert [entry.url for entry in recent] == [API_DEPLOY_URL, WEB_DEPLOY_URL]
        assert [entry.label for entry in recent] == ["api-deploy", "web-deploy"]

    def test_unknown_url_uses_url_as_label(self, env, job_cache):
        url = "https://jenkins.example.com/job/removed/"
        record_recent_job(env, url)
        assert load_recent_jobs(env)[0].label == url

    def test_capped(self, env, job_cache):
        for index in range(settings.MAX_RECENT_JOBS + 5):
            record_recent_job(env, f"https://jenkins.example.com/job/job-{index}/")

        cache = read_job_cache()
        assert len(cache.recent_jobs) == settings.MAX_RECENT_JOBS
        assert cache.recent_jobs[0].endswith(f"job-{settings.MAX_RECENT_JOBS + 4}/")

    def test_blank_url_ignored(self, env, job_cache):
        record_recent_job(env, "  ")
        assert load_recent_jobs(env) == []
