# tests/cli/test_status_format.py
"""
cli/commands/status_format.py 단위 테스트
"""

import pytest

from cli.commands.status_format import (
    format_duration,
    format_params,
    format_status_details,
    format_status_summary,
)
from core.jenkins.models import BuildParameter, JobStatus

URL = "https://jenkins.example.com/job/api-deploy/42/"


class TestFormatDuration:
    @pytest.mark.parametrize(
        "duration_ms,expected",
        [
            (0, "0ms"),
            (850, "850ms"),
            (12_400, "12s"),
            (185_000, "3m 5s"),
            (3_723_000, "1h 2m 3s"),
        ],
    )
    def test_format_duration(self, duration_ms, expected):
        assert format_duration(duration_ms) == expected


class TestFormatStatus:
    def test_summary(self):
        status = JobStatus(last_build_number=42, result="FAILURE")
        assert format_status_summary("api-deploy", status) == "Last build for api-deploy: #42 FAILURE"

    def test_summary_running(self):
        status = JobStatus(last_build_number=43, result=None, building=True)
        assert format_status_summary("api-deploy", status) == "Last build for api-deploy: #43 RUNNING"

    def test_summary_unknown_result(self):
        assert format_status_summary("api-deploy", JobStatus(last_build_number=1)).endswith("#1 UNKNOWN")

    def test_details_finished_build(self):
        status = JobStatus(
            last_build_number=42,
            result="SUCCESS",
            queue_time_ms=2_000,
            last_build_duration_ms=65_000,
            branch="main",
            parameters=[BuildParameter(name="BRANCH", value="main")],
        )

        lines = format_status_details(status, URL).splitlines()

        assert lines == [
            f"URL: {URL}",
            "Queue: 2s | Duration: 1m 5s",
            "Branch: main",
            "Params: BRANCH=main",
        ]

    def test_details_running_build_shows_elapsed(self):
        status = JobStatus(
            last_build_number=43,
            building=True,
            last_build_timestamp=1_000_000,
            last_build_estimated_duration_ms=120_000,
        )

        details = format_status_details(status, URL, now_ms=1_030_000)

        assert "Elapsed: 30s (est 2m 0s)" in details
        assert "Started: " in details

    def test_details_minimal(self):
        assert format_status_details(JobStatus(), URL) == f"URL: {URL}"


class TestFormatParams:
    def test_empty(self):
        assert format_params([]) == []

    def test_wraps_every_four_params(self):
        params = [BuildParameter(name=f"P{i}", value=str(i)) for i in range(6)]

        lines = format_params(params)

        assert lines[0] == "Params: P0=0, P1=1, P2=2, P3=3"
        assert lines[1] == "        P4=4, P5=5"

    def test_collapses_whitespace(self):
        params = [BuildParameter(name="NOTES", value="line one\n  line two ")]
        assert format_params(params) == ["Params: NOTES=line one line two"]
