"""Protocols (interfaces) consumed by the core layer.

These define the contracts that CLI and infrastructure adapters must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from create_dapp.core.models import RunReport, StepResult


class AnswerProvider(Protocol):
    """Contract for interactive question backends.

    Implementations suspend until the user answers.  A dismissed
    question must raise
    :class:`~create_dapp.exceptions.PromptCancelledError` instead of
    returning a placeholder value.
    """

    async def select(
        self,
        message: str,
        choices: Sequence[str],
        *,
        default: str | None = None,
    ) -> str:
        """Ask the user to pick one entry of *choices*."""
        ...  # pragma: no cover

    async def confirm(self, message: str, *, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...  # pragma: no cover


class StepReporter(Protocol):
    """Observer notified as the pipeline progresses.

    Reporters never influence orchestration: any value they return is
    ignored.
    """

    def run_started(self, titles: Sequence[str]) -> None:
        """Called once with the titles of every enabled step, in order."""
        ...  # pragma: no cover

    def step_started(self, title: str) -> None:
        ...  # pragma: no cover

    def step_finished(self, result: StepResult) -> None:
        ...  # pragma: no cover

    def run_finished(self, report: RunReport) -> None:
        """Called once after the last step with the complete report."""
        ...  # pragma: no cover


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Exit status and captured output of a finished process."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Contract for subprocess execution.

    Implementations raise
    :class:`~create_dapp.exceptions.CommandNotFoundError` when the
    executable is missing, :class:`~create_dapp.exceptions.StepError`
    when *cwd* is not a directory, and otherwise always return a
    :class:`CommandResult`, whatever the exit status.
    """

    async def __call__(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        ...  # pragma: no cover
