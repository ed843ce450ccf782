"""
core/exceptions.py - 통합 예외 계층 구조

Exception classes shared by the whole application. Every user-facing error
carries a message plus optional hint lines that the CLI prints below it.

Hierarchy:
    JenkinsCliError (base, user-facing message + hints)
    ├── ConfigError (JENKINS_URL / JENKINS_USER / JENKINS_API_TOKEN)
    ├── APICallError (HTTP / network failures)
    └── FlowError (interactive flow engine)
        ├── MalformedDefinitionError
        │   └── UnknownStateError
        └── UnhandledEventError

Usage:
    from core.exceptions import JenkinsCliError

    raise JenkinsCliError(
        "No jobs found in cache.",
        hints=["Run `jenkins-cli list --refresh` to fetch jobs from Jenkins."],
    )
"""

from typing import Any, Dict, List, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class JenkinsCliError(Exception):
    """Base class for every error the CLI reports to the user.

    Attributes:
        message: error message
        hints: follow-up suggestions printed as HINT lines
        cause: original exception (for chaining)
        details: extra structured information
    """

    def __init__(
        self,
        message: str,
        hints: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.hints = list(hints or [])
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "hints": self.hints,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(JenkinsCliError):
    """Missing or invalid connection settings."""

    def __init__(
        self,
        key: str,
        message: str,
        hints: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, hints=hints, cause=cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# API 호출 관련 예외
# =============================================================================


class APICallError(JenkinsCliError):
    """Jenkins API call failure.

    Wraps HTTP status errors and requests' network exceptions so callers only
    deal with one error type.
    """

    def __init__(
        self,
        method: str,
        url: str,
        status_code: Optional[int] = None,
        hints: Optional[List[str]] = None,
        cause: Optional[Exception] = None,
    ):
        if status_code is not None:
            message = f"Jenkins request failed: {method} {url} -> HTTP {status_code}"
        else:
            message = f"Jenkins request failed: {method} {url}"
        super().__init__(message, hints=hints, cause=cause)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.details.update(
            {
                "method": method,
                "url": url,
                "status_code": status_code,
            }
        )

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


# =============================================================================
# 플로우 엔진 관련 예외
# =============================================================================


class FlowError(JenkinsCliError):
    """Interactive flow engine error.

    These signal a mismatch between a flow definition and its handlers. They
    are programmer errors and are never caught by the engine.
    """

    def __init__(
        self,
        flow_id: str,
        message: str,
        state_id: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        location = f"{flow_id}.{state_id}" if state_id else flow_id
        full_message = f"Flow error [{location}]: {message}"
        super().__init__(full_message, cause=cause)
        self.flow_id = flow_id
        self.state_id = state_id
        self.details["flow_id"] = flow_id
        if state_id:
            self.details["state_id"] = state_id


class MalformedDefinitionError(FlowError):
    """Structurally invalid flow definition.

    Collects every problem found so a single validation pass reports them all.
    """

    def __init__(
        self,
        flow_id: str,
        problems: List[str],
        state_id: Optional[str] = None,
    ):
        super().__init__(flow_id, "; ".join(problems), state_id=state_id)
        self.problems = list(problems)
        self.details["problems"] = self.problems


class UnknownStateError(MalformedDefinitionError):
    """The runner was asked to enter a state the definition does not have."""

    def __init__(self, flow_id: str, state_id: str):
        super().__init__(flow_id, [f"unknown state '{state_id}'"], state_id=state_id)


class UnhandledEventError(FlowError):
    """A handler or default-event convention produced an event with no transition."""

    def __init__(self, flow_id: str, state_id: str, event: str):
        super().__init__(flow_id, f"unhandled event '{event}'", state_id=state_id)
        self.event = event
        self.details["event"] = event


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def is_retryable_search_error(error: Exception) -> bool:
    """Job search errors that the user can fix by typing another query.

    Args:
        error: 확인할 예외

    Returns:
        True for "Job name is required." and "No jobs match ..." errors
    """
    if not isinstance(error, JenkinsCliError):
        return False
    if error.message == "Job name is required.":
        return True
    return error.message.startswith("No jobs match ")
