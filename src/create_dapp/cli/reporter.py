"""Step status display for the scaffolding pipeline.

Two :class:`~create_dapp.core.protocols.StepReporter` implementations:

* :class:`RichStepReporter` keeps a live block with one line per step
  (pending → running spinner → done / skipped / failed).
* :class:`PlainStepReporter` writes the same information line by line
  to stderr, for piped output or environments without Rich.

Both finish with a single summary line and, when steps failed, the list
of failures.  Reporters only observe: nothing they do affects the run.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Any

from create_dapp.cli.console import console, get_rich_console, rich_available
from create_dapp.core.models import RunReport, StepResult, StepStatus
from create_dapp.exceptions import MissingDependencyError

SUCCESS_MESSAGE: str = "Project ready"
FAILURE_MESSAGE: str = "Project created with errors"

_PENDING: str = "pending"
_RUNNING: str = "running"


# ---------------------------------------------------------------------------
# Rich
# ---------------------------------------------------------------------------

class RichStepReporter:
    """Live, in-place step list rendered with Rich.

    Usage::

        reporter = RichStepReporter()
        report = await TaskPipeline(reporter).run(steps, config)
    """

    def __init__(self) -> None:
        try:
            from rich.live import Live
            from rich.markup import escape
            from rich.spinner import Spinner
            from rich.table import Table
        except ModuleNotFoundError as exc:
            raise MissingDependencyError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._escape: Any = escape
        self._table_class: Any = Table
        self._spinner: Any = Spinner("dots", style="cyan")
        # title -> pending / running / StepResult
        self._states: dict[str, str | StepResult] = {}
        self._started: bool = False
        self._live: Any = Live(
            console=get_rich_console(),
            get_renderable=self._render,
            refresh_per_second=12,
            transient=False,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if not self._started:
            self._live.start()
            self._started = True

    def stop(self) -> None:
        """Stop the live display (idempotent)."""
        if self._started:
            self._live.stop()
            self._started = False

    # ------------------------------------------------------------------
    # StepReporter
    # ------------------------------------------------------------------

    def run_started(self, titles: Sequence[str]) -> None:
        self._states = {title: _PENDING for title in titles}
        self.start()

    def step_started(self, title: str) -> None:
        self._states[title] = _RUNNING
        self._refresh()

    def step_finished(self, result: StepResult) -> None:
        self._states[result.title] = result
        self._refresh()

    def run_finished(self, report: RunReport) -> None:
        self.stop()
        if report.ok:
            console.print(f"[bold green]DONE[/bold green] {SUCCESS_MESSAGE}")
            return
        console.print(f"[bold red]ERROR[/bold red] {FAILURE_MESSAGE}")
        for failure in report.failures:
            console.print(
                f"  [red]✖[/red] {self._escape(failure.title)}: {self._escape(failure.error or '')}"
            )
            if failure.hint:
                console.print(f"    [yellow]Hint:[/yellow] {self._escape(failure.hint)}")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        if self._started:
            self._live.refresh()

    def _render(self) -> Any:
        grid = self._table_class.grid(padding=(0, 1))
        grid.add_column(width=2)
        grid.add_column()
        for title, state in self._states.items():
            if state == _PENDING:
                grid.add_row("[dim]·[/dim]", f"[dim]{self._escape(title)}[/dim]")
            elif state == _RUNNING:
                grid.add_row(self._spinner, self._escape(title))
            elif isinstance(state, StepResult):
                grid.add_row(*_rich_row(state, self._escape))
        return grid


def _rich_row(result: StepResult, escape: Any) -> tuple[str, str]:
    title = escape(result.title)
    if result.status is StepStatus.SUCCEEDED:
        return "[green]✔[/green]", title
    if result.status is StepStatus.SKIPPED:
        return "[yellow]↓[/yellow]", f"{title} [dim]{escape(f'[skipped: {result.reason}]')}[/dim]"
    return "[red]✖[/red]", f"{title} [red]→ {escape(result.error or '')}[/red]"


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------

def _plain_line(result: StepResult) -> str:
    if result.status is StepStatus.SUCCEEDED:
        return f"[done]    {result.title}"
    if result.status is StepStatus.SKIPPED:
        return f"[skipped] {result.title}: {result.reason}"
    return f"[failed]  {result.title}: {result.error}"


class PlainStepReporter:
    """Line-oriented reporter writing to stderr without Rich."""

    def run_started(self, titles: Sequence[str]) -> None:
        for title in titles:
            print(f"[pending] {title}", file=sys.stderr)

    def step_started(self, title: str) -> None:
        print(f"[running] {title}", file=sys.stderr)

    def step_finished(self, result: StepResult) -> None:
        print(_plain_line(result), file=sys.stderr)

    def run_finished(self, report: RunReport) -> None:
        if report.ok:
            print(f"DONE {SUCCESS_MESSAGE}", file=sys.stderr)
            return
        print(f"ERROR {FAILURE_MESSAGE}", file=sys.stderr)
        for failure in report.failures:
            print(f"  - {failure.title}: {failure.error}", file=sys.stderr)
            if failure.hint:
                print(f"    Hint: {failure.hint}", file=sys.stderr)


def _stderr_is_terminal() -> bool:
    return get_rich_console().is_terminal


def make_reporter() -> RichStepReporter | PlainStepReporter:
    """Return the live Rich reporter on a terminal, else the plain one.

    Piped and CI output get plain lines, as does a missing Rich install.
    """
    if rich_available() and _stderr_is_terminal():
        return RichStepReporter()
    return PlainStepReporter()
