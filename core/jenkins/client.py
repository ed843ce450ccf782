"""
core/jenkins/client.py - Jenkins REST API 클라이언트

Thin requests-based wrapper around the handful of Jenkins endpoints the CLI
needs. Every request is logged through the ``core.jenkins`` logger (the CLI
attaches a file handler writing to ~/.config/jenkins-cli/api.log).

Usage:
    from core.config import load_env
    from core.jenkins import JenkinsClient

    client = JenkinsClient(load_env())
    result = client.trigger_build(job_url, {"BRANCH": "main"})
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from core.config import EnvConfig, settings
from core.exceptions import APICallError

from .models import BuildParameter, BuildStatus, JenkinsJob, JobStatus, TriggerResult

logger = logging.getLogger(__name__)

_JOB_FIELDS = "name,fullName,url"
# 폴더 3단계까지 조회
_JOBS_TREE = f"jobs[{_JOB_FIELDS},jobs[{_JOB_FIELDS},jobs[{_JOB_FIELDS}]]]"
_BUILD_FIELDS = (
    "number,url,result,building,timestamp,duration,estimatedDuration,"
    "actions[parameters[name,value],queuingDurationMillis,lastBuiltRevision[branch[name]]]"
)

_BRANCH_PARAM_NAMES = ("BRANCH", "BRANCH_NAME", "GIT_BRANCH")


def _join(url: str, path: str) -> str:
    return f"{url.rstrip('/')}/{path.lstrip('/')}"


def _parse_parameters(actions: list[dict[str, Any]] | None) -> list[BuildParameter]:
    params: list[BuildParameter] = []
    for action in actions or []:
        if not isinstance(action, dict):
            continue
        for param in action.get("parameters") or []:
            name = param.get("name")
            if not name:
                continue
            value = param.get("value")
            params.append(BuildParameter(name=str(name), value="" if value is None else str(value)))
    return params


def _find_action_value(actions: list[dict[str, Any]] | None, key: str) -> Any:
    for action in actions or []:
        if isinstance(action, dict) and key in action:
            return action[key]
    return None


def _resolve_branch(actions: list[dict[str, Any]] | None, params: list[BuildParameter]) -> str | None:
    revision = _find_action_value(actions, "lastBuiltRevision")
    if isinstance(revision, dict):
        for branch in revision.get("branch") or []:
            name = branch.get("name")
            if name:
                return str(name).removeprefix("refs/remotes/").removeprefix("origin/")
    for param in params:
        if param.name.upper() in _BRANCH_PARAM_NAMES and param.value:
            return param.value
    return None


def _flatten_jobs(entries: list[dict[str, Any]] | None) -> list[JenkinsJob]:
    jobs: list[JenkinsJob] = []
    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        # 폴더는 하위 job만 수집
        if "jobs" in entry and entry.get("jobs") is not None:
            jobs.extend(_flatten_jobs(entry.get("jobs")))
            continue
        if entry.get("url") and entry.get("name"):
            jobs.append(
                JenkinsJob(
                    name=str(entry["name"]),
                    url=str(entry["url"]),
                    full_name=entry.get("fullName") or None,
                )
            )
    return jobs


class JenkinsClient:
    """Jenkins API client bound to one server/user."""

    def __init__(self, env: EnvConfig, session: requests.Session | None = None, timeout: int | None = None):
        self.env = env
        self.timeout = timeout or settings.API_TIMEOUT
        self._session = session or requests.Session()
        self._session.auth = (env.jenkins_user, env.jenkins_api_token)
        self._crumb_header: dict[str, str] | None = None

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _fetch_crumb(self) -> dict[str, str]:
        if self._crumb_header is None:
            data = self._request("GET", _join(self.env.jenkins_url, "crumbIssuer/api/json"), with_crumb=False).json()
            self._crumb_header = {data["crumbRequestField"]: data["crumb"]}
        return self._crumb_header

    def _request(self, method: str, url: str, with_crumb: bool = True, **kwargs: Any) -> requests.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if with_crumb and method != "GET" and self.env.use_crumb:
            headers.update(self._fetch_crumb())

        logger.debug("REQUEST %s %s", method, url)
        try:
            response = self._session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("NETWORK_ERROR %s %s -> %s", method, url, e)
            raise APICallError(
                method,
                url,
                hints=["Check JENKINS_URL and your network connection."],
                cause=e,
            ) from e

        if response.status_code >= 400:
            logger.warning("ERROR %s %s -> HTTP %s", method, url, response.status_code)
            hints = []
            if response.status_code in (401, 403):
                hints.append("Check JENKINS_USER and JENKINS_API_TOKEN.")
            raise APICallError(method, url, status_code=response.status_code, hints=hints)

        logger.debug("RESPONSE %s %s -> %s", method, url, response.status_code)
        return response

    def _get_json(self, url: str, tree: str | None = None) -> dict[str, Any]:
        params = {"tree": tree} if tree else None
        return self._request("GET", _join(url, "api/json"), params=params).json()

    # -------------------------------------------------------------------------
    # Jobs
    # -------------------------------------------------------------------------

    def list_jobs(self) -> list[JenkinsJob]:
        """All jobs on the server, folders flattened."""
        data = self._get_json(self.env.jenkins_url, tree=_JOBS_TREE)
        return _flatten_jobs(data.get("jobs"))

    def trigger_build(self, job_url: str, params: dict[str, str] | None = None) -> TriggerResult:
        """Queue a build, with parameters when any are given."""
        if params:
            response = self._request("POST", _join(job_url, "buildWithParameters"), data=params)
        else:
            response = self._request("POST", _join(job_url, "build"))
        return TriggerResult(queue_url=response.headers.get("Location"))

    def get_queue_build_url(self, queue_url: str) -> str | None:
        """Build URL of a queue item once it started, else None.

        Raises:
            APICallError: the queue item was cancelled or is gone
        """
        data = self._get_json(queue_url)
        if data.get("cancelled"):
            raise APICallError("GET", queue_url, hints=["The queued build was cancelled."])
        executable = data.get("executable") or {}
        return executable.get("url") or None

    def get_job_status(self, job_url: str) -> JobStatus:
        """Last build summary of a job."""
        data = self._get_json(job_url, tree=f"lastBuild[{_BUILD_FIELDS}]")
        last_build = data.get("lastBuild")
        if not last_build:
            return JobStatus()

        actions = last_build.get("actions")
        params = _parse_parameters(actions)
        return JobStatus(
            last_build_number=last_build.get("number"),
            last_build_url=last_build.get("url"),
            result=last_build.get("result"),
            building=bool(last_build.get("building")),
            last_build_timestamp=last_build.get("timestamp"),
            last_build_duration_ms=last_build.get("duration"),
            last_build_estimated_duration_ms=last_build.get("estimatedDuration"),
            queue_time_ms=_find_action_value(actions, "queuingDurationMillis"),
            parameters=params,
            branch=_resolve_branch(actions, params),
        )

    def get_build_status(self, build_url: str) -> BuildStatus:
        data = self._get_json(build_url, tree=_BUILD_FIELDS)
        return BuildStatus(
            build_number=data.get("number"),
            build_url=data.get("url") or build_url,
            result=data.get("result"),
            building=bool(data.get("building")),
            timestamp_ms=data.get("timestamp"),
            duration_ms=data.get("duration"),
            parameters=_parse_parameters(data.get("actions")),
        )

    def get_last_failed_build(self, job_url: str) -> BuildStatus | None:
        """Last failed build, or None when the job never failed."""
        try:
            return self.get_build_status(_join(job_url, "lastFailedBuild"))
        except APICallError as e:
            if e.is_not_found:
                return None
            raise

    def stop_build(self, build_url: str) -> None:
        self._request("POST", _join(build_url, "stop"))

    def get_console_text(self, build_url: str) -> str:
        return self._request("GET", _join(build_url, "consoleText")).text
