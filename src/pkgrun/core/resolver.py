"""Command-line token resolution — which package, which script.

Consumes the positional tokens left to right:

1. Optional literal ``workspace`` forcing a workspace member lookup.
2. Optional workspace member selector (substring of the member name).
3. Script name.
4. Everything else is passed through to the script.

Guarantees
----------
* No filesystem access; members come from an injected
  :class:`~pkgrun.core.protocols.WorkspaceSource`.
* The caller's token list is never mutated.
* Only :class:`~pkgrun.exceptions.PkgrunError` subclasses escape.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

from pkgrun.core.models import Invocation, Package
from pkgrun.core.protocols import WorkspaceSource
from pkgrun.exceptions import (
    AmbiguousNameError,
    MissingPackageNameError,
    WorkspacePackageNotFoundError,
)

WORKSPACE_KEYWORD = "workspace"


class InvocationResolver:
    """Turns raw positional tokens into an :class:`Invocation`.

    Parameters
    ----------
    members:
        Any object satisfying the :class:`WorkspaceSource` protocol.
    """

    def __init__(self, members: WorkspaceSource) -> None:
        self._members: WorkspaceSource = members

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, package: Package, tokens: Sequence[str]) -> Invocation:
        """Resolve *tokens* against *package*.

        Raises
        ------
        MissingPackageNameError
            If ``workspace`` is the last token.
        WorkspacePackageNotFoundError
            If ``workspace <name>`` matches no member.
        AmbiguousNameError
            If the selector is both a member name and a root script.
        """
        remaining = deque(tokens)

        if package.is_workspace and remaining and remaining[0]:
            forced = remaining[0] == WORKSPACE_KEYWORD
            if forced:
                remaining.popleft()
                if not remaining or not remaining[0]:
                    raise MissingPackageNameError(
                        "You must specify a package name when using the workspace command.",
                        hint="Usage: pkgrun workspace <package-name> <script> [args...]",
                    )

            selector = remaining[0]
            member = self.find_workspace_package(package, selector, forced=forced)
            if member is not None:
                package = member
                remaining.popleft()
            elif forced:
                raise WorkspacePackageNotFoundError(
                    f'No package named "{selector}" found in workspace.',
                )

        script_name = remaining.popleft() if remaining else None
        if not script_name:
            script_name = None
        return Invocation(package=package, script_name=script_name, args=tuple(remaining))

    def find_workspace_package(
        self,
        workspace: Package,
        name: str,
        *,
        forced: bool = False,
    ) -> Package | None:
        """Return the first member whose name contains *name*.

        Members are examined in the order reported by the workspace
        source.  When the workspace root also has a script called *name*,
        the root script takes precedence (``None`` is returned) unless
        *forced* is set; an exact name clash cannot be resolved either
        way and raises :class:`AmbiguousNameError`.
        """
        if not workspace.is_workspace:
            return None

        for member in self._members.list_members(workspace):
            if name not in member.name:
                continue

            if workspace.has_script(name):
                if name == member.name:
                    raise AmbiguousNameError(
                        f'The argument "{name}" could refer to either the package '
                        f'"{member.name}" or the script "{name}" at the workspace root.',
                    )
                if not forced:
                    return None

            return member

        return None
