"""
Collaborators - External checks invoked once per workspace.

A collaborator is judged only by its exit status. Its output is streamed
to the terminal untouched and never parsed.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

from workspace_gate.gates.runner import CheckOutcome, Stage

logger = structlog.get_logger()

WORKSPACE_PLACEHOLDER = "{workspace}"

# Fixed option sets, one per stage. Not configurable per run.
LINT_COMMAND: tuple[str, ...] = (
    "cargo",
    "clippy",
    "--manifest-path={workspace}",
    "--",
    "-D",
    "warnings",
    "-A",
    "dead-code",
)
TEST_COMMAND: tuple[str, ...] = ("cargo", "test", "--manifest-path={workspace}")
FORMAT_COMMAND: tuple[str, ...] = (
    "cargo",
    "+nightly",
    "fmt",
    "--manifest-path={workspace}",
)


@runtime_checkable
class Collaborator(Protocol):
    """Anything that can check one workspace and report an outcome."""

    def check(self, workspace: str) -> CheckOutcome:
        ...


class CommandCollaborator:
    """
    Runs a command against a workspace and maps its exit status.

    Exit status 0 is Success, anything else is Failure. A command that
    cannot be started at all (missing executable, permission denied) is
    a Failure too, as is an argument the OS cannot accept (embedded NUL).
    """

    def __init__(
        self,
        name: str,
        command: Sequence[str],
        cwd: Path | None = None,
    ) -> None:
        self.name = name
        self.command = tuple(command)
        self.cwd = cwd or Path.cwd()

    def build_command(self, workspace: str) -> list[str]:
        """Substitute the workspace into the command template."""
        return [arg.replace(WORKSPACE_PLACEHOLDER, workspace) for arg in self.command]

    def check(self, workspace: str) -> CheckOutcome:
        argv = self.build_command(workspace)
        started_at = datetime.now(timezone.utc)

        logger.debug("Invoking collaborator", collaborator=self.name, argv=argv)

        try:
            result = subprocess.run(argv, cwd=self.cwd, check=False)
        except (OSError, ValueError) as exc:
            logger.error(
                "Collaborator could not be started",
                collaborator=self.name,
                executable=argv[0] if argv else None,
                error=str(exc),
            )
            return CheckOutcome.failure(f"{self.name} could not be started: {exc}")

        duration_ms = int(
            (datetime.now(timezone.utc) - started_at).total_seconds() * 1000
        )
        logger.debug(
            "Collaborator finished",
            collaborator=self.name,
            exit_code=result.returncode,
            duration_ms=duration_ms,
        )

        if result.returncode == 0:
            return CheckOutcome.success()

        return CheckOutcome.failure(
            f"{self.name} exited with status {result.returncode}",
            exit_code=result.returncode,
        )

    def __repr__(self) -> str:
        return f"CommandCollaborator(name={self.name!r}, command={self.command!r})"


def default_collaborators(cwd: Path | None = None) -> dict[Stage, Collaborator]:
    """The cargo clippy / test / fmt collaborators, keyed by stage."""
    return {
        Stage.LINT: CommandCollaborator("clippy", LINT_COMMAND, cwd=cwd),
        Stage.TEST: CommandCollaborator("cargo test", TEST_COMMAND, cwd=cwd),
        Stage.FORMAT: CommandCollaborator("cargo fmt", FORMAT_COMMAND, cwd=cwd),
    }
