"""Core layer — domain models, option resolution and step orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem, subprocess or terminal access.
* No imports from ``cli`` or ``infra``.
"""

from create_dapp.core.models import (
    CliArguments,
    Configuration,
    ProjectOptions,
    RunReport,
    Step,
    StepResult,
    StepStatus,
)
from create_dapp.core.options import DEFAULT_TEMPLATE, resolve_options
from create_dapp.core.pipeline import NullReporter, TaskPipeline
from create_dapp.core.protocols import AnswerProvider, CommandResult, CommandRunner, StepReporter

__all__: list[str] = [
    "DEFAULT_TEMPLATE",
    "AnswerProvider",
    "CliArguments",
    "CommandResult",
    "CommandRunner",
    "Configuration",
    "NullReporter",
    "ProjectOptions",
    "RunReport",
    "Step",
    "StepReporter",
    "StepResult",
    "StepStatus",
    "TaskPipeline",
    "resolve_options",
]
