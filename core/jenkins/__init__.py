"""
core/jenkins - Jenkins REST API 클라이언트

Usage:
    from core.jenkins import JenkinsClient, JenkinsJob

    client = JenkinsClient(env)
    jobs = client.list_jobs()
"""

from .client import JenkinsClient
from .models import (
    BuildParameter,
    BuildStatus,
    JenkinsJob,
    JobStatus,
    TriggerResult,
)

__all__ = [
    "JenkinsClient",
    "BuildParameter",
    "BuildStatus",
    "JenkinsJob",
    "JobStatus",
    "TriggerResult",
]
