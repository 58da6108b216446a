"""Allow ``python -m pkgrun`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m pkgrun`` behaves identically to the ``pkgrun``
console script.
"""

from __future__ import annotations

from pkgrun.cli.app import cli

if __name__ == "__main__":
    cli()
