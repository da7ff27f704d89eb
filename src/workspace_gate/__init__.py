"""
Workspace Gate: fail-fast quality gates across project workspaces.

Runs lint, test and format, in that order, for each configured workspace
and stops the whole run at the first failing check.
"""

__version__ = "0.1.0"

from workspace_gate.config import GateConfig
from workspace_gate.gates.runner import GateRunner, RunResult, Stage

__all__ = [
    "GateConfig",
    "GateRunner",
    "RunResult",
    "Stage",
]
