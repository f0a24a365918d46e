"""Custom exception hierarchy for create-dapp.

Every error that crosses a layer boundary inherits from
:class:`CreateDappError`.  Raw ``OSError`` / subprocess failures must
never reach the CLI boundary unwrapped: infrastructure code re-raises
them as one of the typed subclasses defined here.

Hierarchy
---------
CreateDappError
├── TemplateNotFoundError
├── StepError
├── CommandNotFoundError
├── PromptCancelledError
└── MissingDependencyError
"""

from __future__ import annotations

from pathlib import Path


class CreateDappError(Exception):
    """Base exception for all create-dapp errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Template lookup -------------------------------------------------------

class TemplateNotFoundError(CreateDappError):
    """Raised when a template directory is missing or unreadable.

    This is the only fatal configuration error: it is raised before any
    scaffolding step runs, so nothing has been written yet.
    """

    def __init__(self, path: Path, *, hint: str | None = None) -> None:
        super().__init__(f"Invalid template name: {path.name}", hint=hint)
        self.path: Path = path
        """The candidate directory that was looked up."""


# --- Scaffolding steps -----------------------------------------------------

class StepError(CreateDappError):
    """Raised by a step action when its external effect could not be made."""


# --- Processes -------------------------------------------------------------

class CommandNotFoundError(CreateDappError):
    """Raised when an executable cannot be located on the system PATH."""

    def __init__(self, command: str, *, hint: str | None = None) -> None:
        super().__init__(f"Command not found: {command}", hint=hint)
        self.command: str = command


# --- Interactive prompts ---------------------------------------------------

class PromptCancelledError(CreateDappError):
    """Raised when the user dismisses an interactive question."""


# --- Environment / tooling -------------------------------------------------

class MissingDependencyError(CreateDappError):
    """Raised when an optional UI dependency is required but not installed."""
