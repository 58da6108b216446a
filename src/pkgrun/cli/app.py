"""CLI application entry point and command routing for pkgrun.

This module is the **sole error boundary** for the entire application.
It catches :class:`~pkgrun.exceptions.PkgrunError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here. Resolution is delegated to the core
  layer, file and process access to the infrastructure layer.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from pkgrun.cli import exit_codes
from pkgrun.cli.console import console
from pkgrun.config import Settings, load_settings
from pkgrun.core.models import Invocation
from pkgrun.exceptions import ConfigError, PkgrunError, ScriptNotFoundError
from pkgrun.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors exit with ``GENERAL_ERROR``."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(exit_codes.GENERAL_ERROR, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Options are only recognised before the first positional token; the
    positional tokens themselves are interpreted by
    :class:`~pkgrun.core.resolver.InvocationResolver`:

    * ``pkgrun``                               — list scripts
    * ``pkgrun <script> [args...]``            — run a script
    * ``pkgrun <member> <script> [args...]``   — run in a workspace member
    * ``pkgrun workspace <member> <script>``   — force member resolution
    """
    parser = _ArgumentParser(
        prog="pkgrun",
        description="Run a script from the nearest package manifest.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-C",
        "--cwd",
        metavar="DIR",
        default=None,
        help="Start the manifest search in DIR instead of the current directory.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log manifest discovery and process details to stderr.",
    )
    parser.add_argument(
        "tokens",
        nargs=argparse.REMAINDER,
        metavar="[workspace] [package] script [args]",
        help="Optional workspace package selector, script name, script arguments.",
    )
    return parser


def _start_directory(raw: str | None) -> Path:
    if raw is None:
        return Path.cwd()
    start = Path(raw).expanduser()
    if not start.is_dir():
        raise ConfigError(f"Directory does not exist: {raw}")
    return start


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_list(invocation: Invocation) -> int:
    """Print the scripts of the resolved package."""
    from pkgrun.cli.listing import print_available_scripts

    print_available_scripts(invocation.package)
    return exit_codes.SUCCESS


def _handle_run(invocation: Invocation, settings: Settings) -> int:
    """Run the resolved script and return its exit code."""
    from pkgrun.core.script_service import ScriptService
    from pkgrun.infra.script_runner import ShellScriptRunner

    service = ScriptService(ShellScriptRunner(bin_subdir=settings.bin_subdir))
    exit_code = service.run(invocation)
    logger.debug("Script %r exited with %d", invocation.script_name, exit_code)
    return exit_code


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the pkgrun CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code, or the script's own code when one ran.
    """
    from pkgrun.cli.logs import configure_logging
    from pkgrun.core.resolver import InvocationResolver
    from pkgrun.infra.manifest_reader import ManifestReader

    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings().with_verbose(args.verbose)
    configure_logging(settings.log_level_value)

    tokens: list[str] = list(args.tokens)
    if tokens and tokens[0] == "--":
        tokens.pop(0)

    reader = ManifestReader(settings)
    package = reader.find_nearest(_start_directory(args.cwd))
    invocation = InvocationResolver(reader).resolve(package, tokens)

    if invocation.script_name is None:
        return _handle_list(invocation)

    return _handle_run(invocation, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _render_error(exc: PkgrunError) -> None:
    console.print_styled(("Error:", "bold red"), " ", str(exc))
    if exc.hint:
        console.print_styled(("Hint:", "yellow"), " ", exc.hint)


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ScriptNotFoundError as exc:
        from pkgrun.cli.listing import print_available_scripts

        _render_error(exc)
        print_available_scripts(exc.package)
        sys.exit(exit_codes.GENERAL_ERROR)
    except PkgrunError as exc:
        _render_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print_styled(("Unexpected error.", "bold red"), " Please report this issue.")
        console.print_styled(f"  {type(exc).__name__}: {exc}")
        sys.exit(exit_codes.UNEXPECTED_ERROR)
