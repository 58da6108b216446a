"""Manifest discovery and parsing on the local filesystem.

This module is the only place that reads manifest files.  It satisfies
:class:`~pkgrun.core.protocols.WorkspaceSource` structurally and turns
every ``OSError`` / JSON failure into a
:class:`~pkgrun.exceptions.ManifestParseError`.

Rules
-----
* Read-only: nothing is ever written back to a manifest.
* No user-facing output; discovery details go to the module logger.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pkgrun.config import Settings
from pkgrun.core.models import Package
from pkgrun.exceptions import ManifestNotFoundError, ManifestParseError

logger = logging.getLogger(__name__)


class ManifestReader:
    """Loads :class:`Package` records from manifest files.

    Usage::

        reader = ManifestReader(settings)
        package = reader.find_nearest(Path.cwd())
        members = reader.list_members(package)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings: Settings = settings or Settings()

    @property
    def manifest_name(self) -> str:
        return self._settings.manifest_name

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def find_nearest(self, start: Path) -> Package:
        """Return the package whose manifest is closest at or above *start*.

        Raises
        ------
        ManifestNotFoundError
            When neither *start* nor any ancestor holds a manifest.
        ManifestParseError
            When the nearest manifest is malformed.
        """
        current = start.resolve()
        while True:
            candidate = current / self.manifest_name
            if candidate.is_file():
                logger.debug("Found manifest at %s", candidate)
                return self.read(candidate)
            if current.parent == current:
                break
            current = current.parent

        raise ManifestNotFoundError(
            f"Could not find a {self.manifest_name} containing scripts "
            "in this folder or any parent folders.",
            hint=f"Searched upward from {start}",
        )

    # ------------------------------------------------------------------
    # Workspace members
    # ------------------------------------------------------------------

    def list_members(self, workspace: Package) -> list[Package]:
        """Load every member package matched by the workspace patterns.

        Patterns are expanded relative to the workspace directory, in
        declared order, each pattern's matches sorted lexically.  A
        directory matched twice keeps its first position.
        """
        members: list[Package] = []
        seen: set[Path] = set()

        for pattern in workspace.workspace_patterns:
            for match in self._expand(workspace.directory, pattern):
                resolved = match.resolve()
                if resolved in seen:
                    continue
                seen.add(resolved)

                manifest_path = resolved / self.manifest_name
                if not manifest_path.is_file():
                    logger.debug("Skipping %s: no %s", resolved, self.manifest_name)
                    continue

                members.append(self.read(manifest_path, parent=workspace))

        logger.debug(
            "Workspace %r has %d member(s): %s",
            workspace.name,
            len(members),
            ", ".join(member.name for member in members),
        )
        return members

    @staticmethod
    def _expand(root: Path, pattern: str) -> list[Path]:
        """Return directories under *root* matching *pattern*, sorted."""
        stripped = pattern.strip().rstrip("/")
        if stripped.startswith("./"):
            stripped = stripped[2:]
        if not stripped or stripped == ".":
            return []
        if Path(stripped).is_absolute():
            logger.debug("Ignoring absolute workspace pattern %r", pattern)
            return []

        try:
            matches = [path for path in root.glob(stripped) if path.is_dir()]
        except ValueError as exc:
            raise ManifestParseError(
                f"Invalid workspace pattern {pattern!r}: {exc}",
            ) from exc
        return sorted(matches, key=lambda path: path.relative_to(root).as_posix())

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def read(self, manifest_path: Path, parent: Package | None = None) -> Package:
        """Parse the manifest at *manifest_path* into a :class:`Package`.

        Raises
        ------
        ManifestParseError
            When the file cannot be read or its content is malformed.
        """
        try:
            text = manifest_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestParseError(f"Could not read {manifest_path}: {exc}") from exc

        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ManifestParseError(
                f"Malformed JSON in {manifest_path}: {exc}",
                hint="Fix the syntax error and try again.",
            ) from exc

        return _package_from_json(manifest_path, data, parent)


# ---------------------------------------------------------------------------
# Raw JSON → domain model (pure)
# ---------------------------------------------------------------------------

def _package_from_json(manifest_path: Path, data: Any, parent: Package | None) -> Package:
    if not isinstance(data, dict):
        raise ManifestParseError(f"{manifest_path} must contain a JSON object.")

    name = data.get("name", "")
    if not isinstance(name, str):
        raise ManifestParseError(f'"name" in {manifest_path} must be a string.')

    scripts = data.get("scripts")
    if scripts is None:
        scripts = {}
    if not isinstance(scripts, dict):
        raise ManifestParseError(f'"scripts" in {manifest_path} must be an object.')
    for script_name, command in scripts.items():
        if not isinstance(command, str):
            raise ManifestParseError(
                f'Script "{script_name}" in {manifest_path} must be a string.',
            )

    is_workspace = "workspaces" in data
    patterns = _workspace_patterns(manifest_path, data.get("workspaces")) if is_workspace else ()

    return Package(
        manifest_path=manifest_path,
        directory=manifest_path.parent.resolve(),
        name=name,
        scripts=dict(scripts),
        is_workspace=is_workspace,
        workspace_patterns=patterns,
        parent=parent,
    )


def _workspace_patterns(manifest_path: Path, raw: Any) -> tuple[str, ...]:
    """Normalise both ``workspaces`` forms to a tuple of patterns.

    Accepts a plain list, or the object form that nests the list under
    ``packages`` (used alongside ``nohoist``).
    """
    if isinstance(raw, dict):
        raw = raw.get("packages", [])
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ManifestParseError(
            f'"workspaces" in {manifest_path} must be a list of glob patterns '
            'or an object with a "packages" list.',
        )
    return tuple(raw)
