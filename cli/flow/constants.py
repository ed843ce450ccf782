# cli/flow/constants.py
"""내부 선택지 값 (job URL/브랜치 이름과 충돌하지 않도록 접두사 사용)"""

SEARCH_AGAIN_VALUE = "__jenkins_cli_search_again__"
EXIT_VALUE = "__jenkins_cli_exit__"
SEARCH_ALL_JOBS_VALUE = "__jenkins_cli_search_all__"
BRANCH_CUSTOM_VALUE = "__jenkins_cli_custom_branch__"
BRANCH_REMOVE_VALUE = "__jenkins_cli_remove_branch__"
BUILD_WITH_PARAMS_VALUE = "__jenkins_cli_build_with_params__"
BUILD_WITH_CUSTOM_PARAMS_VALUE = "__jenkins_cli_build_with_custom_params__"
BUILD_WITHOUT_PARAMS_VALUE = "__jenkins_cli_build_without_params__"

# 메뉴 종료 값 ("done" 선택 시 select: 접두사 없이 이벤트로 사용)
DONE_VALUE = "done"
