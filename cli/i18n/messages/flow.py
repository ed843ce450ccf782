"""
cli/i18n/messages/flow.py - Flow Messages

Contains translations for the interactive flows: job browsing, pre-build
job/branch/parameter collection, and post-build/post-status menus.
"""

from __future__ import annotations

FLOW_MESSAGES = {
    # =========================================================================
    # Job Browsing (list)
    # =========================================================================
    "select_job_to_operate": {
        "ko": "작업할 job 선택",
        "en": "Select a job to operate on",
    },
    "search_again": {
        "ko": "다시 검색",
        "en": "Search again",
    },
    "exit": {
        "ko": "종료",
        "en": "Exit",
    },
    "action_for": {
        "ko": "{label} 작업 선택",
        "en": "Action for {label}",
    },
    "job_fallback": {
        "ko": "job",
        "en": "job",
    },
    "action_build": {
        "ko": "빌드",
        "en": "Build",
    },
    "action_status": {
        "ko": "상태",
        "en": "Status",
    },
    "action_watch": {
        "ko": "진행 확인",
        "en": "Watch",
    },
    "action_logs": {
        "ko": "로그",
        "en": "Logs",
    },
    "action_cancel": {
        "ko": "취소",
        "en": "Cancel",
    },
    "action_rerun_failed": {
        "ko": "마지막 실패 빌드 재실행",
        "en": "Rerun last failed",
    },
    "back_to_search": {
        "ko": "검색으로 돌아가기",
        "en": "Back to search",
    },
    # =========================================================================
    # Pre-build: Job Search
    # =========================================================================
    "recent_jobs": {
        "ko": "최근 job",
        "en": "Recent jobs",
    },
    "search_all_jobs": {
        "ko": "전체 job 검색",
        "en": "Search all jobs",
    },
    "job_search_prompt": {
        "ko": "job 이름 또는 설명",
        "en": "Job name or description",
    },
    "job_search_placeholder": {
        "ko": "예: api prod deploy",
        "en": "e.g. api prod deploy",
    },
    "select_candidate": {
        "ko": "job 선택 (Esc: 다시 검색)",
        "en": "Select a job (press Esc to search again)",
    },
    "job_name_required": {
        "ko": "job 이름이 필요합니다.",
        "en": "Job name is required.",
    },
    "job_name_required_hint": {
        "ko": "job 이름이나 설명의 일부를 입력하세요.",
        "en": "Type part of the job name or description to continue.",
    },
    # =========================================================================
    # Pre-build: Build Mode / Branch
    # =========================================================================
    "build_mode": {
        "ko": "빌드 모드",
        "en": "Build mode",
    },
    "build_with_branch": {
        "ko": "브랜치 파라미터로 빌드",
        "en": "Build with branch parameter",
    },
    "build_with_custom": {
        "ko": "사용자 정의 파라미터로 빌드",
        "en": "Build with custom parameters",
    },
    "build_without_params": {
        "ko": "파라미터 없이 빌드",
        "en": "Build without parameters",
    },
    "branch_select": {
        "ko": "브랜치 이름 (Esc: 빌드 모드)",
        "en": "Branch name (press Esc for build mode)",
    },
    "remove_cached_branch": {
        "ko": "캐시된 브랜치 삭제",
        "en": "Remove cached branch",
    },
    "type_different_branch": {
        "ko": "다른 브랜치 직접 입력",
        "en": "Type a different branch",
    },
    "branch_name": {
        "ko": "브랜치 이름",
        "en": "Branch name",
    },
    "branch_placeholder": {
        "ko": "예: main",
        "en": "e.g. main",
    },
    "branch_required": {
        "ko": "빌드하려면 브랜치가 필요합니다.",
        "en": "Branch is required to trigger a build.",
    },
    "branch_required_hint": {
        "ko": "브랜치 이름을 입력하세요 (예: main).",
        "en": "Enter a branch name (e.g. main).",
    },
    "branch_removed": {
        "ko": "캐시에서 브랜치 삭제됨: {branch}",
        "en": "Removed cached branch: {branch}",
    },
    # =========================================================================
    # Pre-build: Custom Parameters
    # =========================================================================
    "add_custom_params": {
        "ko": "사용자 정의 파라미터를 추가할까요?",
        "en": "Add custom parameters?",
    },
    "param_name": {
        "ko": "파라미터 이름",
        "en": "Parameter name",
    },
    "param_name_placeholder": {
        "ko": "예: DEPLOY_ENV",
        "en": "e.g. DEPLOY_ENV",
    },
    "param_value": {
        "ko": "파라미터 값",
        "en": "Parameter value",
    },
    "param_value_for": {
        "ko": "{param} 값",
        "en": "Value for {param}",
    },
    "add_another_param": {
        "ko": "파라미터를 더 추가할까요?",
        "en": "Add another custom parameter?",
    },
    "param_name_required": {
        "ko": "파라미터 이름이 필요합니다.",
        "en": "Parameter name is required.",
    },
    "param_name_required_hint": {
        "ko": "파라미터 이름을 입력하거나 Esc로 돌아가세요.",
        "en": "Enter a parameter name or press Esc to go back.",
    },
    "param_already_set": {
        "ko": "파라미터가 이미 설정되어 있습니다: {param}",
        "en": "Parameter already set: {param}",
    },
    "param_already_set_hint": {
        "ko": "다른 파라미터 이름을 사용하세요.",
        "en": "Use a different parameter name.",
    },
    # =========================================================================
    # Post-build / Post-status
    # =========================================================================
    "next_action_for": {
        "ko": "{label} 후속 작업",
        "en": "Next action for {label}",
    },
    "action_rerun_same": {
        "ko": "같은 입력으로 재실행",
        "en": "Rerun same inputs",
    },
    "action_done": {
        "ko": "완료",
        "en": "Done",
    },
    "trigger_another_build": {
        "ko": "다른 빌드를 실행할까요?",
        "en": "Trigger another build?",
    },
    "action_cancel_running": {
        "ko": "실행/대기 중인 빌드 취소",
        "en": "Cancel running/queued build",
    },
    "action_rerun_last_failed": {
        "ko": "마지막 실패 빌드 재실행",
        "en": "Rerun last failed build",
    },
    "action_build_now": {
        "ko": "지금 빌드",
        "en": "Build now",
    },
    "check_another_job": {
        "ko": "다른 job을 확인할까요?",
        "en": "Check another job?",
    },
    # =========================================================================
    # Prompt Target
    # =========================================================================
    "target_suffix": {
        "ko": "{message} [{target}]",
        "en": "{message} [{target}]",
    },
}
