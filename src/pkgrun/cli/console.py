"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Text taken from manifests or exceptions goes through
:meth:`_ConsoleProxy.print_styled`, which never parses markup.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from pkgrun.exceptions import DependencyMissingError

_MARKUP_TAG = re.compile(r"\[/?[a-z][a-z0-9 ]*\]")

Segment = str | tuple[str, str]
"""Plain text, or a ``(text, style)`` pair."""


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``DependencyMissingError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise DependencyMissingError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr, highlight=False)


def strip_markup(text: str) -> str:
	"""Remove markup tags from a literal markup string for plain output."""
	return _MARKUP_TAG.sub("", text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool) -> None:
		self._stderr = stderr

	def _plain(self, *objects: object) -> None:
		stream = sys.stderr if self._stderr else sys.stdout
		print(*objects, file=stream)

	def print(self, *objects: object) -> None:
		"""Render markup with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except DependencyMissingError:
			self._plain(*(strip_markup(obj) if isinstance(obj, str) else obj for obj in objects))
			return
		rich_console.print(*objects)

	def print_styled(self, *segments: Segment) -> None:
		"""Print *segments* as a single unwrapped line, text kept verbatim."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except DependencyMissingError:
			self._plain("".join(seg if isinstance(seg, str) else seg[0] for seg in segments))
			return

		from rich.text import Text

		rich_console.print(Text.assemble(*segments), soft_wrap=True)


console = _ConsoleProxy(stderr=True)
stdout = _ConsoleProxy(stderr=False)
