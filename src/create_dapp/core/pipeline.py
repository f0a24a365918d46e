"""Task pipeline orchestrator.

Runs an ordered sequence of :class:`~create_dapp.core.models.Step`
entries against one :class:`~create_dapp.core.models.Configuration` and
returns a :class:`~create_dapp.core.models.RunReport`.

Per step, in declaration order:

1. ``enabled`` false → the step is left out of the run and the report.
2. ``skip`` returns a reason → recorded as skipped, action not awaited.
3. Otherwise the action is awaited → succeeded, or failed on exception.

Failure policy
--------------
Best effort by default: a failed step is recorded and the next step
still runs, so a partially scaffolded project is left behind rather
than an aborted one.  With ``halt_on_failure=True`` every enabled step
after the first failure is recorded as skipped instead.

Guarantees
----------
* Exceptions raised by step actions never escape :meth:`TaskPipeline.run`.
* ``len(report) == number of enabled steps``, in declaration order.
* No state is kept between runs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from create_dapp.core.models import Configuration, RunReport, Step, StepResult
from create_dapp.core.protocols import StepReporter
from create_dapp.exceptions import CreateDappError

logger = logging.getLogger(__name__)

HALTED_REASON: str = "Skipped after an earlier step failed"


class NullReporter:
    """Reporter that ignores every event."""

    def run_started(self, titles: Sequence[str]) -> None:
        pass

    def step_started(self, title: str) -> None:
        pass

    def step_finished(self, result: StepResult) -> None:
        pass

    def run_finished(self, report: RunReport) -> None:
        pass


class TaskPipeline:
    """Sequential, best-effort step runner.

    Parameters
    ----------
    reporter:
        Observer notified of progress.  Defaults to :class:`NullReporter`.
    halt_on_failure:
        Stop executing actions after the first failed step.
    """

    def __init__(
        self,
        reporter: StepReporter | None = None,
        *,
        halt_on_failure: bool = False,
    ) -> None:
        self._reporter: StepReporter = reporter if reporter is not None else NullReporter()
        self._halt_on_failure: bool = halt_on_failure

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(self, steps: Sequence[Step], config: Configuration) -> RunReport:
        """Run *steps* in order and return the complete report."""
        enabled = [step for step in steps if step.is_enabled(config)]
        excluded = len(steps) - len(enabled)
        if excluded:
            logger.debug("%d step(s) disabled for this run", excluded)

        self._reporter.run_started([step.title for step in enabled])

        results: list[StepResult] = []
        halted = False
        for step in enabled:
            if halted:
                result = StepResult.skipped(step.title, HALTED_REASON)
            else:
                result = await self._run_step(step, config)
                halted = self._halt_on_failure and not result.ok
            results.append(result)
            self._reporter.step_finished(result)

        report = RunReport(results=tuple(results))
        self._reporter.run_finished(report)
        logger.debug(
            "Pipeline finished: %d succeeded, %d skipped, %d failed",
            len(report.succeeded),
            len(report.skipped),
            len(report.failures),
        )
        return report

    # ------------------------------------------------------------------
    # Single step
    # ------------------------------------------------------------------

    async def _run_step(self, step: Step, config: Configuration) -> StepResult:
        """Evaluate the skip predicate, then await the action."""
        reason = step.skip_reason(config)
        if reason:
            logger.debug("Skipping %r: %s", step.title, reason)
            return StepResult.skipped(step.title, reason)

        self._reporter.step_started(step.title)
        logger.debug("Running %r", step.title)
        try:
            await step.action(config)
        except CreateDappError as exc:
            logger.warning("Step %r failed: %s", step.title, exc)
            return StepResult.failed(step.title, str(exc), hint=exc.hint)
        except Exception as exc:
            logger.warning("Step %r raised unexpectedly", step.title, exc_info=True)
            return StepResult.failed(step.title, f"{type(exc).__name__}: {exc}")

        logger.debug("Step %r succeeded", step.title)
        return StepResult.succeeded(step.title)
