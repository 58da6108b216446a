"""Core / service layer — pure resolution and lookup logic.

Rules
-----
* No ``print()`` calls.
* No filesystem access or process spawning.
* No imports from ``cli`` or ``infra``.
"""

from pkgrun.core.command import build_command_line, quote_argument
from pkgrun.core.models import Invocation, Package
from pkgrun.core.protocols import ProcessRunner, WorkspaceSource
from pkgrun.core.resolver import InvocationResolver
from pkgrun.core.script_service import ScriptService

__all__: list[str] = [
    "Invocation",
    "InvocationResolver",
    "Package",
    "ProcessRunner",
    "ScriptService",
    "WorkspaceSource",
    "build_command_line",
    "quote_argument",
]
