"""
Errors raised outside the gate sequence itself.

Stage failures are not exceptions: they are reported through
CheckOutcome and RunResult.
"""


class WorkspaceGateError(Exception):
    """Base class for workspace-gate errors."""


class ConfigError(WorkspaceGateError):
    """The configuration file is unreadable or malformed."""
