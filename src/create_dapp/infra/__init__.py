"""Infrastructure layer — filesystem, subprocess and tool integration.

This layer performs every side effect of a scaffolding run.  Raw
``OSError`` and subprocess failures are caught here and re-raised as
:class:`~create_dapp.exceptions.CreateDappError` subclasses.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from create_dapp.infra.process import run_command
from create_dapp.infra.steps import build_default_steps, create_project
from create_dapp.infra.templates import list_templates, locate_template
from create_dapp.infra.tool_detector import ToolStatus, detect_tool

__all__: list[str] = [
    "ToolStatus",
    "build_default_steps",
    "create_project",
    "detect_tool",
    "list_templates",
    "locate_template",
    "run_command",
]
