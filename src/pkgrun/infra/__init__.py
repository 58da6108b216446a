"""Infrastructure layer — filesystem and process integration.

Every raw ``OSError`` / JSON failure must be caught here and re-raised
as a :class:`~pkgrun.exceptions.PkgrunError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from pkgrun.infra.bin_path import augment_search_path, collect_bin_dirs
from pkgrun.infra.manifest_reader import ManifestReader
from pkgrun.infra.script_runner import ShellScriptRunner

__all__: list[str] = [
    "ManifestReader",
    "ShellScriptRunner",
    "augment_search_path",
    "collect_bin_dirs",
]
