"""InstallGuard exception hierarchy.

All public exceptions inherit from InstallGuardError, giving callers a single
base class to catch when they want to handle any InstallGuard-specific failure
without swallowing unrelated errors.
"""


class InstallGuardError(Exception):
    """Base exception for all InstallGuard errors."""


class ScriptReadError(InstallGuardError):
    """Raised when a script provider cannot return a script's content.

    Covers missing files, permission errors, undecodable content and
    failed remote fetches. The aggregator treats every cause the same way:
    the script is left out of the evaluated set.
    """

    def __init__(self, script_id: str, reason: str) -> None:
        super().__init__(f"Cannot read script '{script_id}': {reason}")
        self.script_id = script_id
        self.reason = reason


class ConfigError(InstallGuardError):
    """Raised when an evaluation config file is unreadable or malformed."""
