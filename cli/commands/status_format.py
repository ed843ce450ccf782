# cli/commands/status_format.py
"""
빌드 상태 출력 포맷

    Last build for api-deploy: #42 SUCCESS
    URL: https://jenkins.example.com/job/api-deploy/42/
    Started: 2026-01-05 10:12:03 | Queue: 2s | Duration: 1m 5s
    Branch: main
    Params: BRANCH=main, DEPLOY_ENV=prod
"""

from __future__ import annotations

import re
import time
from datetime import datetime

from core.jenkins.models import BuildParameter, JobStatus

PARAMS_PER_LINE = 4

_WHITESPACE = re.compile(r"\s+")


def format_duration(duration_ms: float) -> str:
    """ms → "850ms" / "12s" / "3m 5s" / "1h 2m 3s" """
    if duration_ms < 1000:
        return f"{max(0, round(duration_ms))}ms"
    total_seconds = max(0, int(duration_ms // 1000))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


def format_local_time(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def format_status_summary(job_label: str, status: JobStatus) -> str:
    result = "RUNNING" if status.building else (status.result or "UNKNOWN")
    return f"Last build for {job_label}: #{status.last_build_number} {result}"


def _resolve_duration_ms(status: JobStatus, now_ms: int | None = None) -> int:
    if status.building and status.last_build_timestamp and status.last_build_timestamp > 0:
        now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
        return max(0, now_ms - status.last_build_timestamp)
    return status.last_build_duration_ms or 0


def format_params(params: list[BuildParameter]) -> list[str]:
    entries = [f"{param.name}={_WHITESPACE.sub(' ', param.value).strip()}" for param in params]
    if not entries:
        return []
    prefix = "Params: "
    indent = " " * len(prefix)
    lines = []
    for index in range(0, len(entries), PARAMS_PER_LINE):
        label = prefix if index == 0 else indent
        lines.append(label + ", ".join(entries[index : index + PARAMS_PER_LINE]))
    return lines


def format_status_details(status: JobStatus, url: str, now_ms: int | None = None) -> str:
    """URL, 시간 정보, 브랜치, 파라미터를 여러 줄로"""
    lines = [f"URL: {url}"]

    timing: list[str] = []
    if status.last_build_timestamp is not None:
        timing.append(f"Started: {format_local_time(status.last_build_timestamp)}")
    if status.queue_time_ms:
        timing.append(f"Queue: {format_duration(status.queue_time_ms)}")
    duration = _resolve_duration_ms(status, now_ms)
    if duration > 0:
        segment = f"{'Elapsed' if status.building else 'Duration'}: {format_duration(duration)}"
        if status.building and status.last_build_estimated_duration_ms:
            segment += f" (est {format_duration(status.last_build_estimated_duration_ms)})"
        timing.append(segment)
    if timing:
        lines.append(" | ".join(timing))

    if status.branch:
        lines.append(f"Branch: {status.branch}")

    lines.extend(format_params(status.parameters))
    return "\n".join(lines)
