"""Tests for the workspace-gate CLI."""

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from workspace_gate.cli import main
from workspace_gate.gates import collaborators as collaborators_module
from workspace_gate.gates.runner import CheckOutcome, Stage, STAGE_ORDER


class ScriptedCollaborator:
    """Fails for the listed workspaces, records the rest."""

    def __init__(self, stage: Stage, calls: list, failing: set[str]) -> None:
        self.stage = stage
        self.calls = calls
        self.failing = failing

    def check(self, workspace: str) -> CheckOutcome:
        self.calls.append((workspace, self.stage))
        if workspace in self.failing:
            return CheckOutcome.failure("scripted failure", exit_code=1)
        return CheckOutcome.success()


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / ".workspace-gate" / "config.yaml"
    path.parent.mkdir()
    path.write_text(yaml.safe_dump({"workspaces": ["A", "B", "C"]}))
    return path


@pytest.fixture
def scripted(monkeypatch: pytest.MonkeyPatch):
    """Swap the cargo collaborators for scripted ones."""
    state: dict = {"calls": [], "failures": {}, "cwd": None}

    def fake_default_collaborators(cwd=None):
        state["cwd"] = cwd
        return {
            stage: ScriptedCollaborator(
                stage, state["calls"], state["failures"].get(stage, set())
            )
            for stage in STAGE_ORDER
        }

    monkeypatch.setattr(
        collaborators_module, "default_collaborators", fake_default_collaborators
    )
    return state


class TestRun:
    """Tests for the run command."""

    def test_no_subcommand_runs_gates(self, config_path: Path, scripted: dict) -> None:
        """Bare invocation runs the gates and exits 0 on success."""
        result = CliRunner().invoke(main, ["--config", str(config_path)])

        assert result.exit_code == 0
        assert len(scripted["calls"]) == 9
        assert "Executing lint on: A" in result.output
        assert "All gates passed" in result.output

    def test_failure_exits_one(self, config_path: Path, scripted: dict) -> None:
        """Lint failing on C exits 1 after 7 invocations."""
        scripted["failures"] = {Stage.LINT: {"C"}}

        result = CliRunner().invoke(main, ["--config", str(config_path), "run"])

        assert result.exit_code == 1
        assert len(scripted["calls"]) == 7
        assert "Lint failed in: C" in result.output
        assert "All gates passed" not in result.output

    def test_root_defaults_to_repo_root(
        self, config_path: Path, scripted: dict, tmp_path: Path
    ) -> None:
        CliRunner().invoke(main, ["--config", str(config_path), "run"])

        assert scripted["cwd"] == tmp_path

    def test_root_option_overrides(
        self, config_path: Path, scripted: dict, tmp_path: Path
    ) -> None:
        other = tmp_path / "elsewhere"
        other.mkdir()

        CliRunner().invoke(main, ["--config", str(config_path), "--root", str(other), "run"])

        assert scripted["cwd"] == other

    def test_empty_workspace_list_exits_zero(self, tmp_path: Path, scripted: dict) -> None:
        """No workspaces is a successful no-op run."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"workspaces": []}))

        result = CliRunner().invoke(main, ["--config", str(path), "run"])

        assert result.exit_code == 0
        assert scripted["calls"] == []
        assert "All gates passed" in result.output

    def test_plain_config_file_root_is_its_directory(
        self, tmp_path: Path, scripted: dict
    ) -> None:
        """Commands run from the directory holding a plain config file."""
        path = tmp_path / "gate.yaml"
        path.write_text(yaml.safe_dump({"workspaces": ["A"]}))

        CliRunner().invoke(main, ["--config", str(path), "run"])

        assert scripted["cwd"] == tmp_path

    def test_bad_config_is_usage_error(self, tmp_path: Path, scripted: dict) -> None:
        """Malformed config exits 2 before any stage runs."""
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"workspaces": "not-a-list"}))

        result = CliRunner().invoke(main, ["--config", str(path), "run"])

        assert result.exit_code == 2
        assert scripted["calls"] == []


class TestInit:
    """Tests for the init command."""

    def test_creates_config(self, tmp_path: Path) -> None:
        path = tmp_path / ".workspace-gate" / "config.yaml"

        result = CliRunner().invoke(main, ["--config", str(path), "init"])

        assert result.exit_code == 0
        assert path.exists()
        assert "initialized" in result.output


class TestWorkspaces:
    """Tests for the workspaces command."""

    def test_lists_workspaces(self, config_path: Path, tmp_path: Path) -> None:
        (tmp_path / "A").write_text("")

        result = CliRunner().invoke(main, ["--config", str(config_path), "workspaces"])

        assert result.exit_code == 0
        for name in ("A", "B", "C"):
            assert name in result.output
        assert "found" in result.output
        assert "missing" in result.output

    def test_empty_list(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"workspaces": []}))

        result = CliRunner().invoke(main, ["--config", str(path), "workspaces"])

        assert result.exit_code == 0
        assert "No workspaces configured" in result.output
