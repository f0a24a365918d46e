"""Domain models for create-dapp.

All models are **frozen** dataclasses — immutable value objects.  They
carry no I/O and depend on nothing outside the standard library.
"""

from __future__ import annotations

import enum
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Option resolution
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CliArguments:
    """Raw values supplied on the command line.

    ``None`` means "not given" and leaves the field open for the
    interactive resolver.
    """

    template: str | None = None
    git: bool | None = None
    skip_prompts: bool = False
    run_install: bool = True
    target_directory: Path | None = None
    author_name: str | None = None
    author_email: str | None = None


@dataclass(frozen=True, slots=True)
class ProjectOptions:
    """Fully-resolved user choices, before the template path is known."""

    template: str
    git: bool
    skip_prompts: bool
    run_install: bool
    target_directory: Path
    author_name: str
    author_email: str

    def to_configuration(self, template_directory: Path) -> Configuration:
        """Bind the options to a validated *template_directory*."""
        return Configuration(
            target_directory=self.target_directory,
            template_directory=template_directory,
            template=self.template,
            git=self.git,
            run_install=self.run_install,
            skip_prompts=self.skip_prompts,
            author_name=self.author_name,
            author_email=self.author_email,
        )


@dataclass(frozen=True, slots=True)
class Configuration:
    """Read-only input shared by every scaffolding step.

    Only built once the template directory has been located and found
    readable.
    """

    target_directory: Path
    """Directory the project is materialized into."""

    template_directory: Path
    """Validated source template directory."""

    template: str
    """Template identifier as chosen by the user."""

    git: bool
    """Whether ``git init`` runs in the target directory."""

    run_install: bool
    """Whether project dependencies are installed."""

    skip_prompts: bool

    author_name: str
    author_email: str

    @property
    def copyright_holder(self) -> str:
        """Render the license holder as ``"Name (email)"`` or ``"Name"``."""
        if self.author_email:
            return f"{self.author_name} ({self.author_email})"
        return self.author_name


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------

StepAction = Callable[[Configuration], Awaitable[None]]
EnabledPredicate = Callable[[Configuration], bool]
SkipPredicate = Callable[[Configuration], str | None]


@dataclass(frozen=True, slots=True)
class Step:
    """A named unit of scaffolding work.

    The *action* performs one externally visible effect and raises on
    failure.  *enabled* decides whether the step is part of the run at
    all; *skip* returns a non-empty reason to bypass the action while
    still reporting the step.
    """

    title: str
    action: StepAction
    enabled: EnabledPredicate | None = None
    skip: SkipPredicate | None = None

    def is_enabled(self, config: Configuration) -> bool:
        return True if self.enabled is None else bool(self.enabled(config))

    def skip_reason(self, config: Configuration) -> str | None:
        if self.skip is None:
            return None
        return self.skip(config) or None


class StepStatus(enum.Enum):
    """Terminal state of a step."""

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of one step.

    Use the :meth:`succeeded`, :meth:`skipped` and :meth:`failed`
    constructors rather than filling the fields by hand.
    """

    title: str
    status: StepStatus
    reason: str | None = None
    """Why the step was skipped.  Set for ``SKIPPED`` only."""

    error: str | None = None
    """Failure message.  Set for ``FAILED`` only."""

    hint: str | None = None

    @classmethod
    def succeeded(cls, title: str) -> StepResult:
        return cls(title=title, status=StepStatus.SUCCEEDED)

    @classmethod
    def skipped(cls, title: str, reason: str) -> StepResult:
        return cls(title=title, status=StepStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, title: str, error: str, *, hint: str | None = None) -> StepResult:
        return cls(title=title, status=StepStatus.FAILED, error=error, hint=hint)

    @property
    def ok(self) -> bool:
        """``True`` for succeeded and skipped results."""
        return self.status is not StepStatus.FAILED


@dataclass(frozen=True, slots=True)
class RunReport:
    """Ordered results of one pipeline execution.

    One entry per enabled step, in declaration order.
    """

    results: tuple[StepResult, ...]

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[StepResult]:
        return iter(self.results)

    @property
    def titles(self) -> tuple[str, ...]:
        return tuple(result.title for result in self.results)

    @property
    def failures(self) -> tuple[StepResult, ...]:
        return tuple(r for r in self.results if r.status is StepStatus.FAILED)

    @property
    def skipped(self) -> tuple[StepResult, ...]:
        return tuple(r for r in self.results if r.status is StepStatus.SKIPPED)

    @property
    def succeeded(self) -> tuple[StepResult, ...]:
        return tuple(r for r in self.results if r.status is StepStatus.SUCCEEDED)

    @property
    def ok(self) -> bool:
        """``True`` when no recorded step failed."""
        return not self.failures
