"""Logging setup for the ``pkgrun`` logger namespace.

Modules log through ``logging.getLogger(__name__)``; only this module
attaches handlers.  Output goes to stderr so it never mixes with the
script listing or the child's stdout.
"""

from __future__ import annotations

import logging

_HANDLER_NAME = "pkgrun-cli"
_PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_handler() -> logging.Handler:
    """Return a RichHandler when Rich is installed, else a StreamHandler."""
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
        return handler

    from pkgrun.cli.console import get_rich_console

    return RichHandler(console=get_rich_console(stderr=True), show_path=False)


def configure_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a single handler to the ``pkgrun`` logger and set *level*.

    Safe to call repeatedly; the handler is only added once.
    """
    root = logging.getLogger("pkgrun")
    root.setLevel(level)

    if not any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        handler = _build_handler()
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)

    return root
