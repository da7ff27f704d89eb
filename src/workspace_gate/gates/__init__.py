"""
Gates - Fail-fast quality gate execution.

Modules:
    runner          - Drive lint/test/format across workspaces
    collaborators   - Subprocess-backed checks judged by exit status
"""

from workspace_gate.gates.collaborators import (
    CommandCollaborator,
    Collaborator,
    default_collaborators,
)
from workspace_gate.gates.runner import (
    CheckOutcome,
    GateRunner,
    RunResult,
    RunState,
    Stage,
    STAGE_ORDER,
)

__all__ = [
    "CheckOutcome",
    "Collaborator",
    "CommandCollaborator",
    "GateRunner",
    "RunResult",
    "RunState",
    "Stage",
    "STAGE_ORDER",
    "default_collaborators",
]
