"""Shell command-line assembly (pure transforms — no I/O)."""

from __future__ import annotations

from collections.abc import Sequence

# Characters that keep their special meaning inside POSIX double quotes.
_DOUBLE_QUOTE_SPECIALS: tuple[str, ...] = ("\\", '"', "$", "`")


def quote_argument(arg: str) -> str:
    """Wrap *arg* in double quotes so embedded whitespace survives the shell.

    >>> quote_argument("--watch")
    '"--watch"'
    >>> quote_argument('say "hi"')
    '"say \\\\"hi\\\\""'
    """
    escaped = arg
    for char in _DOUBLE_QUOTE_SPECIALS:
        escaped = escaped.replace(char, "\\" + char)
    return f'"{escaped}"'


def build_command_line(command: str, args: Sequence[str]) -> str:
    """Append each of *args*, individually quoted, to *command*."""
    if not args:
        return command
    return " ".join([command, *(quote_argument(arg) for arg in args)])
