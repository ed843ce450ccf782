"""
cli/i18n/messages/cli_commands.py - CLI Command Messages

Contains translations for the list/build/status commands and their
follow-up actions (watch, logs, cancel, rerun).
"""

from __future__ import annotations

CLI_MESSAGES = {
    # =========================================================================
    # Group / Options
    # =========================================================================
    "app_help": {
        "ko": "Jenkins job을 검색하고 빌드/상태 조회를 대화형으로 실행합니다.",
        "en": "Search Jenkins jobs and run builds or status checks interactively.",
    },
    "debug_help": {
        "ko": "디버그 로그 출력 (Flow 전이, API 요청)",
        "en": "Print debug logs (flow transitions, API requests)",
    },
    "non_interactive_help": {
        "ko": "프롬프트 없이 실행 (필요한 값은 옵션으로 전달)",
        "en": "Never prompt; all inputs must come from options",
    },
    "lang_help": {
        "ko": "UI 언어 / UI language (en, ko)",
        "en": "UI language (en, ko)",
    },
    "aborted": {
        "ko": "중단되었습니다.",
        "en": "Aborted.",
    },
    # =========================================================================
    # list
    # =========================================================================
    "list_help": {
        "ko": "job 검색 및 작업 실행",
        "en": "Search jobs and act on one",
    },
    "list_search_prompt": {
        "ko": "job 검색 (q: 종료)",
        "en": "Search jobs (q to quit)",
    },
    "list_search_placeholder": {
        "ko": "비워두면 전체 목록",
        "en": "Leave empty to list all jobs",
    },
    "list_try_again_hint": {
        "ko": "다른 검색어를 입력하거나 비워두고 전체 목록을 확인하세요.",
        "en": "Try another query, or leave it empty to list all jobs.",
    },
    "jobs_title": {
        "ko": "Jenkins job ({count}개)",
        "en": "Jenkins jobs ({count})",
    },
    "column_job": {
        "ko": "Job",
        "en": "Job",
    },
    "column_url": {
        "ko": "URL",
        "en": "URL",
    },
    "no_jobs_to_show": {
        "ko": "표시할 job이 없습니다.",
        "en": "No jobs to show.",
    },
    "refresh_confirm": {
        "ko": "{reason} 지금 새로고침할까요?",
        "en": "{reason} Refresh now?",
    },
    # =========================================================================
    # build / status
    # =========================================================================
    "build_help": {
        "ko": "job 빌드 트리거",
        "en": "Trigger a job build",
    },
    "status_help": {
        "ko": "job의 마지막 빌드 상태 조회",
        "en": "Show the last build status of a job",
    },
    "build_queued": {
        "ko": "빌드가 큐에 등록되었습니다: {url}",
        "en": "Build queued: {url}",
    },
    "build_triggered": {
        "ko": "{label} 빌드를 트리거했습니다.",
        "en": "Triggered build for {label}.",
    },
    "rerunning": {
        "ko": "{label} {number} 빌드의 파라미터로 다시 빌드합니다.",
        "en": "Rerunning {label} with the parameters of {number}.",
    },
    "no_failed_build": {
        "ko": "{label}에 실패한 빌드가 없습니다.",
        "en": "No failed build found for {label}.",
    },
    "no_failed_build_hint": {
        "ko": "다시 빌드하려면 build 명령을 사용하세요.",
        "en": "Use `jenkins-cli build` to start a new build.",
    },
    "no_builds": {
        "ko": "{label}에 빌드 기록이 없습니다.",
        "en": "No builds found for {label}.",
    },
    "unknown_action": {
        "ko": "알 수 없는 작업: {action}",
        "en": "Unknown action: {action}",
    },
    # =========================================================================
    # watch / logs / cancel
    # =========================================================================
    "watch_waiting": {
        "ko": "{label} 빌드 진행 중... (Ctrl+C로 중단)",
        "en": "Watching {label}... (Ctrl+C to stop)",
    },
    "watch_cancelled": {
        "ko": "watch를 중단했습니다. 빌드는 계속 진행됩니다.",
        "en": "Stopped watching. The build keeps running.",
    },
    "build_finished": {
        "ko": "{label} #{number} 완료: {result}",
        "en": "{label} #{number} finished: {result}",
    },
    "console_output": {
        "ko": "콘솔 출력: {url}",
        "en": "Console output: {url}",
    },
    "no_running_build": {
        "ko": "{label}에 실행 중인 빌드가 없습니다.",
        "en": "No running build for {label}.",
    },
    "no_running_build_hint": {
        "ko": "status로 마지막 빌드 상태를 확인하세요.",
        "en": "Check the last build with `jenkins-cli status`.",
    },
    "cancel_confirm": {
        "ko": "{label} #{number} 빌드를 중지할까요?",
        "en": "Stop build #{number} of {label}?",
    },
    "cancel_skipped": {
        "ko": "빌드를 중지하지 않았습니다.",
        "en": "Build left running.",
    },
    "build_cancelled": {
        "ko": "빌드 중지를 요청했습니다: {url}",
        "en": "Stop requested: {url}",
    },
    # =========================================================================
    # 옵션 검증 / 대상 job
    # =========================================================================
    "job_and_job_url": {
        "ko": "--job과 --job-url 중 하나만 지정하세요.",
        "en": "Provide either --job or --job-url, not both.",
    },
    "branch_and_default_branch": {
        "ko": "--branch와 --default-branch 중 하나만 지정하세요.",
        "en": "Use either --branch or --default-branch, not both.",
    },
    "invalid_branch_param": {
        "ko": "--branch-param 값이 올바르지 않습니다.",
        "en": "Invalid --branch-param value.",
    },
    "invalid_branch_param_hint": {
        "ko": "파라미터 이름을 지정하세요. 예: `--branch-param BRANCH`",
        "en": "Pass a parameter name, e.g. `--branch-param BRANCH`.",
    },
    "job_name_required": {
        "ko": "job 이름이 필요합니다.",
        "en": "Job name is required.",
    },
    "job_name_required_hint": {
        "ko": "--job <이름> 또는 --job-url <url>을 지정하세요.",
        "en": "Pass --job <name> or use --job-url <url>.",
    },
    "missing_branch": {
        "ko": "--branch가 필요합니다.",
        "en": "Missing required --branch.",
    },
    "missing_branch_hint": {
        "ko": "--branch <이름> 또는 --default-branch를 지정하세요.",
        "en": "Pass --branch <name> or --default-branch.",
    },
    "requires_terminal": {
        "ko": "대화형 {command}에는 터미널이 필요합니다.",
        "en": "Interactive {command} requires a terminal.",
    },
    "requires_terminal_hint": {
        "ko": "--non-interactive를 지정하세요.",
        "en": "Pass --non-interactive.",
    },
    "no_jobs_match": {
        "ko": '"{query}"와 일치하는 job이 없습니다.',
        "en": 'No jobs match "{query}".',
    },
    "no_jobs_in_cache": {
        "ko": "캐시에 job이 없습니다.",
        "en": "No jobs found in cache.",
    },
    "no_jobs_in_cache_hint": {
        "ko": "`jenkins-cli list --refresh`로 Jenkins에서 job 목록을 가져오세요.",
        "en": "Run `jenkins-cli list --refresh` to fetch jobs from Jenkins.",
    },
    # =========================================================================
    # wait / logs / cancel / rerun
    # =========================================================================
    "wait_help": {
        "ko": "빌드가 끝날 때까지 대기 (실패 1, 시간 초과 124, 중단 130으로 종료)",
        "en": "Wait for a build to finish (exit 1 on failure, 124 on timeout, 130 when stopped)",
    },
    "logs_help": {
        "ko": "빌드 콘솔 출력 보기",
        "en": "Print a build's console output",
    },
    "cancel_help": {
        "ko": "실행 중인 빌드 중지",
        "en": "Stop the running build of a job",
    },
    "rerun_help": {
        "ko": "마지막 실패 빌드를 같은 파라미터로 다시 실행",
        "en": "Re-trigger the last failed build with its parameters",
    },
    "build_url_and_target": {
        "ko": "--build-url을 지정하면 --job, --job-url, --queue-url은 함께 쓸 수 없습니다.",
        "en": "When --build-url is provided, do not pass --job, --job-url, or --queue-url.",
    },
    "build_url_and_target_hint": {
        "ko": "대상은 하나만 지정하세요.",
        "en": "Use a single target at a time.",
    },
    "invalid_duration": {
        "ko": '--{option} 값이 올바르지 않습니다: "{value}"',
        "en": 'Invalid --{option} value "{value}".',
    },
    "invalid_duration_hint": {
        "ko": "500ms, 30s, 5m, 1h 같은 0보다 큰 값을 사용하세요.",
        "en": "Use a duration greater than zero like 500ms, 30s, 5m, or 1h.",
    },
    "watch_timed_out": {
        "ko": "{label} 대기 시간 초과 ({elapsed})",
        "en": "Timed out after {elapsed} while waiting for {label}.",
    },
}
