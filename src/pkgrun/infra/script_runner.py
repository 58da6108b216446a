"""Shell-backed implementation of :class:`~pkgrun.core.protocols.ProcessRunner`.

This module is the **only** place in the codebase that spawns a
process.  Spawn failures are re-raised as
:class:`~pkgrun.exceptions.ScriptExecutionError`; the child's own exit
code is returned unchanged.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path

from pkgrun.config import DEFAULT_BIN_SUBDIR
from pkgrun.exceptions import ScriptExecutionError
from pkgrun.infra.bin_path import augment_search_path, collect_bin_dirs

logger = logging.getLogger(__name__)


class ShellScriptRunner:
    """Runs a command line through the system shell and waits for it.

    The child inherits stdin/stdout/stderr and every environment variable;
    only ``PATH`` is extended with the binaries directories found between
    the working directory and the filesystem root.
    """

    def __init__(
        self,
        bin_subdir: str = DEFAULT_BIN_SUBDIR,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._bin_subdir: str = bin_subdir
        self._environ: Mapping[str, str] | None = environ

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def run(self, directory: Path, command_line: str) -> int:
        """Run *command_line* in *directory* and return its exit code.

        A child terminated by a signal reports no exit code of its own and
        resolves to ``0``.

        Raises
        ------
        ScriptExecutionError
            When the shell cannot be started.
        """
        env = self.build_env(directory)
        logger.debug("Executing in %s: %s", directory, command_line)

        with _interrupts_forwarded_to_child():
            try:
                process = subprocess.Popen(command_line, shell=True, cwd=directory, env=env)
            except OSError as exc:
                raise ScriptExecutionError(
                    f"Could not start script: {exc}",
                    hint=f"Working directory: {directory}",
                ) from exc
            returncode = process.wait()

        if returncode < 0:
            logger.debug("Script terminated by signal %d", -returncode)
            return 0
        return returncode

    def build_env(self, directory: Path) -> dict[str, str]:
        """Return the child environment with the augmented ``PATH``."""
        env = dict(os.environ if self._environ is None else self._environ)
        bin_dirs = collect_bin_dirs(directory, self._bin_subdir)
        env["PATH"] = augment_search_path(env.get("PATH"), bin_dirs)
        return env


# ---------------------------------------------------------------------------
# Signal handling
# ---------------------------------------------------------------------------

def _ignore_interrupt(_signum: int, _frame: object) -> None:
    """SIGINT handler that leaves the child to react to Ctrl+C."""


@contextmanager
def _interrupts_forwarded_to_child() -> Iterator[None]:
    """Keep the parent alive on SIGINT while the child runs.

    A Python-level handler is installed rather than ``SIG_IGN``: ignored
    dispositions survive ``exec`` and would make the child deaf to Ctrl+C,
    while handlers are reset to the default in the child.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = signal.signal(signal.SIGINT, _ignore_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)
