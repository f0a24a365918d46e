"""Tests for the task pipeline orchestrator (core/pipeline.py).

Steps are plain coroutines built in the tests — no filesystem, no
subprocess.

Coverage:
* Declaration order and report length.
* ``enabled`` exclusion versus ``skip`` reporting.
* Best-effort continuation after failures.
* ``halt_on_failure`` policy.
* Reporter event sequence.
"""

from __future__ import annotations

from typing import Any

import pytest

from create_dapp.core.models import Configuration, Step, StepStatus
from create_dapp.core.pipeline import HALTED_REASON, NullReporter, TaskPipeline
from create_dapp.exceptions import StepError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _recording_step(title: str, calls: list[str], **kwargs: Any) -> Step:
    async def action(config: Configuration) -> None:
        calls.append(title)

    return Step(title=title, action=action, **kwargs)


def _failing_step(title: str, calls: list[str], exc: Exception, **kwargs: Any) -> Step:
    async def action(config: Configuration) -> None:
        calls.append(title)
        raise exc

    return Step(title=title, action=action, **kwargs)


# ---------------------------------------------------------------------------
# Ordering and report shape
# ---------------------------------------------------------------------------

class TestOrdering:
    @pytest.mark.asyncio
    async def test_runs_in_declaration_order(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [_recording_step(t, calls) for t in ("a", "b", "c")]

        report = await TaskPipeline().run(steps, make_config())

        assert calls == ["a", "b", "c"]
        assert report.titles == ("a", "b", "c")
        assert all(r.status is StepStatus.SUCCEEDED for r in report)

    @pytest.mark.asyncio
    async def test_report_length_equals_enabled_steps(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [
            _recording_step("a", calls),
            _recording_step("b", calls, enabled=lambda c: False),
            _recording_step("c", calls, skip=lambda c: "not today"),
            _recording_step("d", calls),
        ]

        report = await TaskPipeline().run(steps, make_config())

        assert len(report) == 3
        assert report.titles == ("a", "c", "d")

    @pytest.mark.asyncio
    async def test_empty_step_list(self, make_config: Any) -> None:
        report = await TaskPipeline().run([], make_config())
        assert len(report) == 0
        assert report.ok


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

class TestPredicates:
    @pytest.mark.asyncio
    async def test_disabled_step_is_absent_and_not_run(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [_recording_step("git", calls, enabled=lambda c: c.git)]

        report = await TaskPipeline().run(steps, make_config(git=False))

        assert calls == []
        assert "git" not in report.titles
        assert report.skipped == ()

    @pytest.mark.asyncio
    async def test_enabled_predicate_sees_configuration(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [_recording_step("git", calls, enabled=lambda c: c.git)]

        report = await TaskPipeline().run(steps, make_config(git=True))

        assert calls == ["git"]
        assert report.titles == ("git",)

    @pytest.mark.asyncio
    async def test_skip_reason_recorded_without_running(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [_recording_step("install", calls, skip=lambda c: "disabled")]

        report = await TaskPipeline().run(steps, make_config())

        assert calls == []
        (result,) = report.results
        assert result.status is StepStatus.SKIPPED
        assert result.reason == "disabled"

    @pytest.mark.asyncio
    async def test_empty_skip_reason_runs_step(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [_recording_step("install", calls, skip=lambda c: "")]

        report = await TaskPipeline().run(steps, make_config())

        assert calls == ["install"]
        assert report.results[0].status is StepStatus.SUCCEEDED


# ---------------------------------------------------------------------------
# Failure policy
# ---------------------------------------------------------------------------

class TestFailurePolicy:
    @pytest.mark.asyncio
    async def test_failure_does_not_stop_later_steps(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [
            _failing_step("git", calls, StepError("Failed to initialize git")),
            _recording_step("install", calls),
        ]

        report = await TaskPipeline().run(steps, make_config())

        assert calls == ["git", "install"]
        git, install = report.results
        assert git.status is StepStatus.FAILED
        assert git.error == "Failed to initialize git"
        assert install.status is StepStatus.SUCCEEDED
        assert not report.ok

    @pytest.mark.asyncio
    async def test_hint_is_carried_into_result(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [_failing_step("x", calls, StepError("boom", hint="try this"))]

        report = await TaskPipeline().run(steps, make_config())

        assert report.failures[0].hint == "try this"

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_captured(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [
            _failing_step("x", calls, RuntimeError("kaboom")),
            _recording_step("y", calls),
        ]

        report = await TaskPipeline().run(steps, make_config())

        assert report.failures[0].error == "RuntimeError: kaboom"
        assert calls == ["x", "y"]

    @pytest.mark.asyncio
    async def test_keyboard_interrupt_propagates(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [_failing_step("x", calls, KeyboardInterrupt())]  # type: ignore[arg-type]

        with pytest.raises(KeyboardInterrupt):
            await TaskPipeline().run(steps, make_config())

    @pytest.mark.asyncio
    async def test_halt_on_failure_skips_remaining(self, make_config: Any) -> None:
        calls: list[str] = []
        steps = [
            _recording_step("a", calls),
            _failing_step("b", calls, StepError("nope")),
            _recording_step("c", calls),
            _recording_step("d", calls, enabled=lambda c: False),
        ]

        report = await TaskPipeline(halt_on_failure=True).run(steps, make_config())

        assert calls == ["a", "b"]
        assert report.titles == ("a", "b", "c")
        assert report.results[2].status is StepStatus.SKIPPED
        assert report.results[2].reason == HALTED_REASON


# ---------------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------------

class TestReporterEvents:
    @pytest.mark.asyncio
    async def test_event_sequence(self, make_config: Any, recording_reporter: Any) -> None:
        calls: list[str] = []
        steps = [
            _recording_step("a", calls),
            _recording_step("hidden", calls, enabled=lambda c: False),
            _recording_step("b", calls, skip=lambda c: "later"),
        ]

        report = await TaskPipeline(recording_reporter).run(steps, make_config())

        names = [name for name, _ in recording_reporter.events]
        assert names == [
            "run_started",
            "step_started",
            "step_finished",
            "step_finished",
            "run_finished",
        ]
        assert recording_reporter.events[0][1] == ["a", "b"]
        assert recording_reporter.events[-1][1] is report

    def test_null_reporter_accepts_everything(self) -> None:
        reporter = NullReporter()
        reporter.run_started(["a"])
        reporter.step_started("a")
