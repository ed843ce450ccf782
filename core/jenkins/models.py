"""
core/jenkins/models.py - Jenkins 도메인 모델

Normalized job/build records used throughout the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class JenkinsJob:
    """Jenkins job metadata (plus cached branch history)."""

    name: str
    url: str
    full_name: str | None = None
    branches: list[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.full_name or self.name

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "url": self.url}
        if self.full_name:
            data["fullName"] = self.full_name
        if self.branches:
            data["branches"] = list(self.branches)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JenkinsJob:
        branches = data.get("branches")
        return cls(
            name=str(data.get("name", "")),
            url=str(data.get("url", "")),
            full_name=data.get("fullName") or None,
            branches=[b for b in branches if isinstance(b, str)] if isinstance(branches, list) else [],
        )


@dataclass
class BuildParameter:
    name: str
    value: str


@dataclass
class JobStatus:
    """Last build summary of a job."""

    last_build_number: int | None = None
    last_build_url: str | None = None
    result: str | None = None
    building: bool = False
    last_build_timestamp: int | None = None  # epoch ms
    last_build_duration_ms: int | None = None
    last_build_estimated_duration_ms: int | None = None
    queue_time_ms: int | None = None
    parameters: list[BuildParameter] = field(default_factory=list)
    branch: str | None = None


@dataclass
class BuildStatus:
    """Status of a single build."""

    build_number: int | None = None
    build_url: str | None = None
    result: str | None = None
    building: bool = False
    timestamp_ms: int | None = None
    duration_ms: int | None = None
    parameters: list[BuildParameter] = field(default_factory=list)


@dataclass
class TriggerResult:
    """Outcome of a build trigger request."""

    queue_url: str | None = None
