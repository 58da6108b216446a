"""Executable search-path augmentation.

Walks from a package directory to the filesystem root collecting every
``node_modules/.bin`` style directory so locally installed tools can be
called by bare name from scripts.

Rules
-----
* No permanent ``PATH`` modification; the result is only used for the
  child process environment.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from pkgrun.config import DEFAULT_BIN_SUBDIR

logger = logging.getLogger(__name__)


def collect_bin_dirs(start: Path, bin_subdir: str = DEFAULT_BIN_SUBDIR) -> list[Path]:
    """Return existing *bin_subdir* directories from *start* up to the root.

    The nearest directory comes first.
    """
    found: list[Path] = []
    current = start.resolve()
    while True:
        candidate = current / bin_subdir
        if candidate.is_dir():
            found.append(candidate)
        if current.parent == current:
            break
        current = current.parent

    logger.debug("Binary directories for %s: %s", start, [str(path) for path in found])
    return found


def augment_search_path(base: str | None, bin_dirs: Sequence[Path]) -> str:
    """Append *bin_dirs* to the inherited *base* search path."""
    parts = [base] if base else []
    parts.extend(str(path) for path in bin_dirs)
    return os.pathsep.join(parts)
