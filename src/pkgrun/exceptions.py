"""Custom exception hierarchy for pkgrun.

Every user-visible failure is a subclass of :class:`PkgrunError`.
Operations raise; only the CLI error boundary turns these into
messages and process exit codes.

Hierarchy
---------
PkgrunError
├── ConfigError
├── DependencyMissingError
├── ManifestError
│   ├── ManifestNotFoundError
│   └── ManifestParseError
├── ScriptNotFoundError
├── AmbiguousNameError
├── WorkspaceError
│   ├── MissingPackageNameError
│   └── WorkspacePackageNotFoundError
└── ScriptExecutionError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pkgrun.core.models import Package


class PkgrunError(Exception):
    """Base exception for all pkgrun errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigError(PkgrunError):
    """Raised when an environment setting holds an unusable value."""


# --- Environment / tooling -------------------------------------------------

class DependencyMissingError(PkgrunError):
    """Raised when an optional runtime dependency is required but missing."""


# --- Manifest discovery ----------------------------------------------------

class ManifestError(PkgrunError):
    """Base class for manifest lookup and parsing failures."""


class ManifestNotFoundError(ManifestError):
    """Raised when no ancestor directory contains a manifest."""


class ManifestParseError(ManifestError):
    """Raised when a manifest cannot be read or is malformed."""


# --- Script lookup ---------------------------------------------------------

class ScriptNotFoundError(PkgrunError):
    """Raised when the requested script is absent from the package."""

    def __init__(
        self,
        message: str,
        *,
        package: Package,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.package: Package = package
        """Package that was searched; its scripts are listed to the user."""


class AmbiguousNameError(PkgrunError):
    """Raised when a name is both a workspace package and a root script."""


# --- Workspace selection ---------------------------------------------------

class WorkspaceError(PkgrunError):
    """Base class for invalid workspace selections on the command line."""


class MissingPackageNameError(WorkspaceError):
    """Raised when ``workspace`` is typed without a package name."""


class WorkspacePackageNotFoundError(WorkspaceError):
    """Raised when a forced workspace lookup matches no package."""


# --- Execution -------------------------------------------------------------

class ScriptExecutionError(PkgrunError):
    """Raised when the script's shell process cannot be started."""
