"""
Exit codes for DailyTodo CLI.

Semantic exit codes so scripts (cron jobs, shell pipelines) can tell what
happened without parsing output.
"""

# Success
SUCCESS = 0

# General error, including an unreadable or unwritable task vault
ERROR_GENERAL = 1

# Invalid arguments, malformed repeat rule or validation error
ERROR_INVALID_ARGS = 2

# Task or step not found
ERROR_NOT_FOUND = 5

_NAMES = {
    SUCCESS: "SUCCESS",
    ERROR_GENERAL: "ERROR_GENERAL",
    ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
    ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
}


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for logging."""
    return _NAMES.get(code, f"UNKNOWN({code})")
