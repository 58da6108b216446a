"""Available-scripts listing.

Pure display: prints the package name followed by every script name,
padded to the longest one, next to its command.  Used both when no
script is requested and after an unknown-script error.  Names and
commands are printed exactly as the manifest declares them, one row
per script regardless of terminal width.
"""

from __future__ import annotations

from pkgrun.cli.console import stdout
from pkgrun.core.models import Package


def format_script_rows(package: Package) -> list[tuple[str, str]]:
    """Return ``(padded_name, command)`` pairs in manifest order."""
    if not package.scripts:
        return []
    padding = max(len(name) for name in package.scripts)
    return [(name.ljust(padding), command) for name, command in package.scripts.items()]


def print_available_scripts(package: Package) -> None:
    """Print the scripts declared by *package* to stdout."""
    label = package.name or str(package.directory)

    stdout.print()
    stdout.print_styled("Available commands in package ", (label, "bold"), ":")
    stdout.print()

    rows = format_script_rows(package)
    if not rows:
        stdout.print("  [dim]No scripts defined.[/dim]")

    for padded_name, command in rows:
        stdout.print_styled("  ", (padded_name, "bold"), " ", (command, "dim"))

    stdout.print()
