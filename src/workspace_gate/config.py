"""
Gate Configuration - The workspace list a run is checked against.

Loaded from YAML. A missing file means the built-in defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from workspace_gate.errors import ConfigError

DEFAULT_CONFIG_PATH = Path(".workspace-gate/config.yaml")

DEFAULT_WORKSPACES: tuple[str, ...] = (
    "benches/Cargo.toml",
    "common/Cargo.toml",
    "protocols/Cargo.toml",
    "roles/Cargo.toml",
    "utils/Cargo.toml",
)


@dataclass(frozen=True)
class GateConfig:
    """Immutable run configuration."""

    workspaces: tuple[str, ...] = DEFAULT_WORKSPACES
    root: Path = field(default_factory=Path.cwd)
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path) -> GateConfig:
        """Load configuration from a YAML file."""
        if not config_path.exists():
            return cls(config_path=config_path)

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Cannot read {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"{config_path}: top level must be a mapping")

        return cls.from_dict(data, config_path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], config_path: Path | None = None) -> GateConfig:
        """Create config from a dictionary."""
        workspaces = _parse_workspaces(data.get("workspaces", list(DEFAULT_WORKSPACES)))

        if config_path:
            default_root = _root_for(config_path)
        else:
            default_root = Path.cwd()

        root_value = data.get("root")
        if root_value is None:
            root = default_root
        elif isinstance(root_value, str) and root_value:
            root = Path(root_value)
            if not root.is_absolute():
                root = default_root / root
        else:
            raise ConfigError("'root' must be a non-empty string")

        return cls(workspaces=workspaces, root=root, config_path=config_path)

    def with_root(self, root: Path | None) -> GateConfig:
        """Return a copy with root overridden (no-op for None)."""
        if root is None:
            return self
        return replace(self, root=root)

    def to_dict(self) -> dict[str, Any]:
        """Serialize config to a dictionary."""
        return {
            "workspaces": list(self.workspaces),
            "root": str(self.root),
        }


def _parse_workspaces(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ConfigError("'workspaces' must be a list of paths")

    workspaces: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"Invalid workspace entry: {item!r}")
        if "\0" in item:
            raise ConfigError(f"Workspace entry contains a NUL byte: {item!r}")
        if item in workspaces:
            raise ConfigError(f"Duplicate workspace entry: {item}")
        workspaces.append(item)

    return tuple(workspaces)


def _root_for(config_path: Path) -> Path:
    # .workspace-gate/config.yaml lives one level below the repo root; any
    # other config file sits in the root itself.
    if config_path.parent.name == DEFAULT_CONFIG_PATH.parent.name:
        return config_path.parent.parent
    return config_path.parent
