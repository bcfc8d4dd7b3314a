"""Process exit codes returned by ``tomato`` commands."""

SUCCESS = 0
ERROR_GENERAL = 1  # unexpected failure
ERROR_INVALID_ARGS = 2  # bad tag, blank title, out-of-range config value
ERROR_NOT_FOUND = 5  # unknown task id or config key

_NAMES = {
    SUCCESS: "SUCCESS",
    ERROR_GENERAL: "ERROR_GENERAL",
    ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
    ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
}


def get_exit_code_name(code: int) -> str:
    """Symbolic name of code, used in command log lines."""
    return _NAMES.get(code, f"UNKNOWN({code})")
