"""Domain models for pkgrun.

All models are **frozen** dataclasses built fresh from disk on every
invocation.  They carry no I/O and are never mutated after
construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from pathlib import Path


# ---------------------------------------------------------------------------
# Package
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Package:
    """A package described by a single manifest file."""

    manifest_path: Path
    """Path of the manifest file this package was read from."""

    directory: Path
    """Resolved absolute directory containing the manifest."""

    name: str
    """Declared package name.  Empty when the manifest omits it."""

    scripts: Mapping[str, str] = field(default_factory=dict, hash=False)
    """Script name → shell command, in manifest order.  Read-only."""

    is_workspace: bool = False
    """Whether the manifest declares a ``workspaces`` field."""

    workspace_patterns: tuple[str, ...] = ()
    """Glob patterns for member directories, relative to :attr:`directory`."""

    parent: Package | None = field(default=None, repr=False, compare=False)
    """Enclosing workspace package, for workspace members only."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "scripts", MappingProxyType(dict(self.scripts)))

    def get_script(self, script_name: str) -> str | None:
        """Return the command for *script_name*, or ``None``."""
        return self.scripts.get(script_name)

    def has_script(self, script_name: str) -> bool:
        return script_name in self.scripts


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Invocation:
    """What the command-line tokens resolved to.

    ``script_name`` is ``None`` when no script was requested, which means
    "list the available scripts".
    """

    package: Package
    script_name: str | None
    args: tuple[str, ...] = ()
