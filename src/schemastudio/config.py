"""Configuration: CLI command prefix, diagnostic source label, workspace root."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass

from schemastudio.cli import find_cli

DEFAULT_SOURCE = "Sourcemeta Studio"


@dataclass(frozen=True)
class StudioConfig:
    command: tuple[str, ...]
    source: str = DEFAULT_SOURCE
    workspace_root: str | None = None

    @classmethod
    def from_env(cls, workspace_root: str | None = None) -> StudioConfig:
        """Build the configuration from the environment.

        The CLI is taken from SCHEMASTUDIO_CLI (split like a shell command
        line) when set, otherwise auto-detected.

        Raises:
            CliNotFoundError: If no CLI can be found.
        """
        raw = os.environ.get("SCHEMASTUDIO_CLI", "").strip()
        command = tuple(shlex.split(raw)) if raw else ()
        if not command:
            command = find_cli()
        return cls(command=command, workspace_root=workspace_root)
