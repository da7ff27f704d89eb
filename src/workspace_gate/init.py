"""
Gate Initialization - Writes a default configuration file.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from rich.console import Console

from workspace_gate.config import DEFAULT_WORKSPACES

console = Console()


def initialize_config(config_path: Path) -> bool:
    """
    Create config_path with the default workspace list.

    Returns False, leaving the file untouched, if it already exists.
    """
    if config_path.exists():
        console.print(f"  [dim]Keeping existing[/dim] [cyan]{config_path}[/cyan]")
        return False

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        f.write("# Workspaces are checked in this order: lint, test, format.\n")
        f.write("# The run stops at the first failure.\n")
        yaml.dump(
            {"workspaces": list(DEFAULT_WORKSPACES)},
            f,
            default_flow_style=False,
            sort_keys=False,
        )

    console.print(f"  Created [cyan]{config_path}[/cyan]")
    return True
