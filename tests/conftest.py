"""Shared pytest fixtures and configuration for the create-dapp test suite.

Guidelines
----------
* No internet access in any test.
* Subprocesses are faked through the injectable command runner.
* Filesystem effects happen only below ``tmp_path``.
* Tests must not depend on the user's git / node installation.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from create_dapp.config import ENV_AUTHOR_EMAIL, ENV_AUTHOR_NAME, ENV_TEMPLATES_DIR
from create_dapp.core.models import Configuration, RunReport, StepResult
from create_dapp.core.protocols import CommandResult


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

class FakeRunner:
    """Command runner returning canned results and recording every call."""

    def __init__(
        self,
        results: dict[str, CommandResult] | None = None,
        *,
        missing: Sequence[str] = (),
    ) -> None:
        self.results: dict[str, CommandResult] = results or {}
        self.missing: set[str] = set(missing)
        self.calls: list[tuple[list[str], Path | None]] = []

    async def __call__(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        from create_dapp.exceptions import CommandNotFoundError

        self.calls.append((list(command), cwd))
        if command[0] in self.missing:
            raise CommandNotFoundError(command[0])
        return self.results.get(command[0], CommandResult(returncode=0))

    @property
    def executables(self) -> list[str]:
        return [command[0] for command, _ in self.calls]


class RecordingReporter:
    """Reporter that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def run_started(self, titles: Sequence[str]) -> None:
        self.events.append(("run_started", list(titles)))

    def step_started(self, title: str) -> None:
        self.events.append(("step_started", title))

    def step_finished(self, result: StepResult) -> None:
        self.events.append(("step_finished", result))

    def run_finished(self, report: RunReport) -> None:
        self.events.append(("run_finished", report))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of every test."""
    for name in (ENV_TEMPLATES_DIR, ENV_AUTHOR_NAME, ENV_AUTHOR_EMAIL):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """A search root holding a small ``basic`` template and an empty ``react-hardhat``."""
    root = tmp_path / "templates"
    basic = root / "basic"
    (basic / "contracts").mkdir(parents=True)
    (basic / "package.json").write_text('{"name": "basic-dapp"}\n', encoding="utf-8")
    (basic / "README.md").write_text("# Basic\n", encoding="utf-8")
    (basic / "contracts" / "Greeter.sol").write_text("contract Greeter {}\n", encoding="utf-8")
    (root / "react-hardhat").mkdir()
    return root


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    target = tmp_path / "project"
    target.mkdir()
    return target


@pytest.fixture
def make_config(templates_root: Path, target_dir: Path) -> Any:
    """Factory building a :class:`Configuration` with sensible test defaults."""

    def _make(**overrides: Any) -> Configuration:
        defaults: dict[str, Any] = {
            "target_directory": target_dir,
            "template_directory": templates_root / "basic",
            "template": "basic",
            "git": False,
            "run_install": False,
            "skip_prompts": True,
            "author_name": "Ada Lovelace",
            "author_email": "ada@example.com",
        }
        defaults.update(overrides)
        return Configuration(**defaults)

    return _make


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()
