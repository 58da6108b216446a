"""pkgrun — run the scripts declared in the nearest package manifest.

Resolves ``package.json`` style manifests (including workspace members)
and launches the named script through the shell.
"""

from pkgrun.version import __version__

__all__: list[str] = ["__version__"]
