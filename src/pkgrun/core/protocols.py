"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols, never on concrete
implementations, so resolution and lookup logic can be tested without
touching the filesystem or spawning processes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pkgrun.core.models import Package


class WorkspaceSource(Protocol):
    """Contract for loading the member packages of a workspace."""

    def list_members(self, workspace: Package) -> Sequence[Package]:
        """Return the member packages of *workspace* in a stable order.

        Every returned package must have ``parent`` set to *workspace*.

        Raises
        ------
        ManifestParseError
            When a member manifest is malformed.
        """
        ...  # pragma: no cover


class ProcessRunner(Protocol):
    """Contract for running a shell command line to completion."""

    def run(self, directory: Path, command_line: str) -> int:
        """Run *command_line* in *directory* and return its exit code.

        Raises
        ------
        ScriptExecutionError
            When the process cannot be started.
        """
        ...  # pragma: no cover
