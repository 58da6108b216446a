"""Runtime settings read from the environment.

Settings are resolved once per invocation and passed explicitly to the
layers that need them; nothing reads ``os.environ`` for configuration
outside this module.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from pkgrun.exceptions import ConfigError

DEFAULT_MANIFEST_NAME = "package.json"
DEFAULT_BIN_SUBDIR = "node_modules/.bin"
DEFAULT_LOG_LEVEL = "WARNING"

_VALID_LOG_LEVELS: tuple[str, ...] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved configuration for a single run."""

    manifest_name: str = DEFAULT_MANIFEST_NAME
    """File name looked up in each ancestor directory."""

    bin_subdir: str = DEFAULT_BIN_SUBDIR
    """Relative path of the executables directory appended to ``PATH``."""

    log_level: str = DEFAULT_LOG_LEVEL
    """Name of the level applied to the ``pkgrun`` logger."""

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    def with_verbose(self, verbose: bool) -> Settings:
        """Return a copy with DEBUG logging when *verbose* is set."""
        if not verbose:
            return self
        return replace(self, log_level="DEBUG")


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``PKGRUN_*`` environment variables.

    Raises
    ------
    ConfigError
        If ``PKGRUN_LOG_LEVEL`` is not a known level name, or a path
        setting is empty.
    """
    env = os.environ if environ is None else environ

    manifest_name = env.get("PKGRUN_MANIFEST", DEFAULT_MANIFEST_NAME).strip()
    if not manifest_name:
        raise ConfigError("PKGRUN_MANIFEST must not be empty.")

    bin_subdir = env.get("PKGRUN_BIN_DIR", DEFAULT_BIN_SUBDIR).strip()
    if not bin_subdir:
        raise ConfigError("PKGRUN_BIN_DIR must not be empty.")

    log_level = env.get("PKGRUN_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if log_level not in _VALID_LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level: {log_level}",
            hint=f"PKGRUN_LOG_LEVEL must be one of: {', '.join(_VALID_LOG_LEVELS)}",
        )

    return Settings(
        manifest_name=manifest_name,
        bin_subdir=bin_subdir,
        log_level=log_level,
    )
