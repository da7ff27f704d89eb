"""
GateRunner - Run lint, test and format across workspaces, fail fast.

Responsibilities:
- Traverse workspaces in their configured order
- Run the stages of each workspace in the fixed order lint, test, format
- Stop the whole run at the first failing stage
- Print one progress line per attempted stage and one final status line
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import structlog
from rich.console import Console

if TYPE_CHECKING:
    from workspace_gate.gates.collaborators import Collaborator

logger = structlog.get_logger()

EXIT_PASSED = 0
EXIT_FAILED = 1


class Stage(str, Enum):
    """One of the checks applied to a workspace."""

    LINT = "lint"
    TEST = "test"
    FORMAT = "format"

    @property
    def label(self) -> str:
        return self.value.capitalize()


STAGE_ORDER: tuple[Stage, ...] = (Stage.LINT, Stage.TEST, Stage.FORMAT)


class RunState(str, Enum):
    """Lifecycle of a single run."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class CheckOutcome:
    """Result of invoking one collaborator for one workspace."""

    passed: bool
    exit_code: int | None = None
    diagnostic: str | None = None

    @classmethod
    def success(cls, exit_code: int = 0) -> CheckOutcome:
        return cls(passed=True, exit_code=exit_code)

    @classmethod
    def failure(cls, diagnostic: str, exit_code: int | None = None) -> CheckOutcome:
        return cls(passed=False, exit_code=exit_code, diagnostic=diagnostic)


@dataclass(frozen=True)
class RunResult:
    """
    Aggregate outcome of a run.

    Either every stage of every workspace passed, or the run stopped at
    (failed_workspace, failed_stage).
    """

    failed_workspace: str | None = None
    failed_stage: Stage | None = None
    diagnostic: str | None = None

    @classmethod
    def all_passed_result(cls) -> RunResult:
        return cls()

    @classmethod
    def failed_at(
        cls,
        workspace: str,
        stage: Stage,
        diagnostic: str | None = None,
    ) -> RunResult:
        return cls(
            failed_workspace=workspace,
            failed_stage=stage,
            diagnostic=diagnostic,
        )

    @property
    def all_passed(self) -> bool:
        return self.failed_stage is None

    @property
    def exit_code(self) -> int:
        # Every stage failure maps to the same code.
        return EXIT_PASSED if self.all_passed else EXIT_FAILED


class GateRunner:
    """
    Runs the quality gates for an ordered list of workspaces.

    The workspace list is fixed when the runner is built. Each call to
    run() is an independent run that starts again from the first
    workspace; nothing carries over between runs.
    """

    def __init__(
        self,
        workspaces: Sequence[str],
        collaborators: Mapping[Stage, Collaborator] | None = None,
        console: Console | None = None,
    ) -> None:
        if collaborators is None:
            from workspace_gate.gates.collaborators import default_collaborators

            collaborators = default_collaborators()

        missing = [stage.value for stage in STAGE_ORDER if stage not in collaborators]
        if missing:
            raise ValueError(f"No collaborator for stage(s): {', '.join(missing)}")

        self.workspaces: tuple[str, ...] = tuple(workspaces)
        self.collaborators = dict(collaborators)
        self.console = console or Console()
        self.state = RunState.NOT_STARTED
        self.position: tuple[int, Stage] | None = None

    def run(self) -> RunResult:
        """
        Run every stage of every workspace, stopping at the first failure.

        Returns the RunResult; the runner is left in RunState.COMPLETED.
        """
        self.state = RunState.RUNNING
        self.position = None

        if not self.workspaces:
            logger.warning("No workspaces configured, nothing to check")

        for index, workspace in enumerate(self.workspaces):
            for stage in STAGE_ORDER:
                self.position = (index, stage)
                outcome = self._run_stage(workspace, stage)

                if not outcome.passed:
                    return self._complete(
                        RunResult.failed_at(workspace, stage, outcome.diagnostic)
                    )

        self._say(
            f"All gates passed on {len(self.workspaces)} workspace(s): "
            "lint clean, tests passed, formatting applied."
        )
        return self._complete(RunResult.all_passed_result())

    def _run_stage(self, workspace: str, stage: Stage) -> CheckOutcome:
        """Announce a stage, invoke its collaborator and report a failure."""
        self._say(f"Executing {stage.value} on: {workspace}")
        logger.debug("Running stage", workspace=workspace, stage=stage.value)

        outcome = self.collaborators[stage].check(workspace)

        if outcome.passed:
            logger.debug("Stage passed", workspace=workspace, stage=stage.value)
            return outcome

        self._say(f"{stage.label} failed in: {workspace}")
        if outcome.diagnostic:
            self._say(f"  {outcome.diagnostic}")

        logger.error(
            "Stage failed",
            workspace=workspace,
            stage=stage.value,
            exit_code=outcome.exit_code,
        )
        return outcome

    def _say(self, message: str) -> None:
        # Workspace paths may contain brackets; print them verbatim.
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def _complete(self, result: RunResult) -> RunResult:
        self.state = RunState.COMPLETED
        logger.info(
            "Run completed",
            all_passed=result.all_passed,
            failed_workspace=result.failed_workspace,
            failed_stage=result.failed_stage.value if result.failed_stage else None,
        )
        return result
