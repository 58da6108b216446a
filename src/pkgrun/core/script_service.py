"""Script lookup and dispatch.

Depends on a :class:`~pkgrun.core.protocols.ProcessRunner` injected at
construction time, keeping the core free of any ``subprocess`` import.
"""

from __future__ import annotations

from pkgrun.core.command import build_command_line
from pkgrun.core.models import Invocation
from pkgrun.core.protocols import ProcessRunner
from pkgrun.exceptions import ScriptNotFoundError


class ScriptService:
    """Runs the script named by an :class:`Invocation`.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`ProcessRunner` protocol.
    """

    def __init__(self, runner: ProcessRunner) -> None:
        self._runner: ProcessRunner = runner

    def command_line_for(self, invocation: Invocation) -> str:
        """Return the full shell command line for *invocation*.

        Raises
        ------
        ScriptNotFoundError
            If the package defines no script with that name.
        """
        package = invocation.package
        script_name = invocation.script_name or ""
        command = package.get_script(script_name)
        if command is None:
            raise ScriptNotFoundError(
                f'No script named "{script_name}" found in package "{package.name}".',
                package=package,
            )
        return build_command_line(command, invocation.args)

    def run(self, invocation: Invocation) -> int:
        """Run the script and return the child's exit code."""
        command_line = self.command_line_for(invocation)
        return self._runner.run(invocation.package.directory, command_line)
