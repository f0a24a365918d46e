"""Step library — the scaffolding steps, in their mandatory order.

1. Copy project files      (non-clobbering)
2. Create gitignore        (append)
3. Create License
4. Initialize git          (enabled only with ``git``)
5. Install dependencies    (skipped without ``run_install``)

The subprocess runner is injectable so tests never shell out.
"""

from __future__ import annotations

import logging
from functools import partial

from create_dapp.core.models import Configuration, RunReport, Step
from create_dapp.core.pipeline import TaskPipeline
from create_dapp.core.protocols import CommandRunner, StepReporter
from create_dapp.exceptions import CommandNotFoundError, StepError
from create_dapp.infra.files import copy_template, write_gitignore, write_license
from create_dapp.infra.installer import install_dependencies
from create_dapp.infra.process import run_command
from create_dapp.infra.tool_detector import install_hint

logger = logging.getLogger(__name__)

COPY_TITLE: str = "Copy project files"
GITIGNORE_TITLE: str = "Create gitignore"
LICENSE_TITLE: str = "Create License"
GIT_TITLE: str = "Initialize git"
INSTALL_TITLE: str = "Install dependencies"

GIT_FAILED_MESSAGE: str = "Failed to initialize git"
INSTALL_DISABLED_REASON: str = "Dependency installation disabled (pass --install to enable)"


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

async def copy_project_files(config: Configuration) -> None:
    await copy_template(config.template_directory, config.target_directory)


async def create_gitignore(config: Configuration) -> None:
    await write_gitignore(config.target_directory)


async def create_license(config: Configuration) -> None:
    await write_license(config.target_directory, config.copyright_holder)


async def init_git(config: Configuration, *, runner: CommandRunner = run_command) -> None:
    """Run ``git init`` in the target directory."""
    try:
        result = await runner(["git", "init"], cwd=config.target_directory)
    except CommandNotFoundError as exc:
        raise StepError(GIT_FAILED_MESSAGE, hint=install_hint("git")) from exc

    if not result.ok:
        logger.debug("git init stderr: %s", result.stderr.strip())
        raise StepError(
            GIT_FAILED_MESSAGE,
            hint=result.stderr.strip() or None,
        )


async def install_project_dependencies(
    config: Configuration,
    *,
    runner: CommandRunner = run_command,
) -> None:
    await install_dependencies(config.target_directory, runner=runner)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def git_enabled(config: Configuration) -> bool:
    return config.git


def install_skip_reason(config: Configuration) -> str | None:
    if not config.run_install:
        return INSTALL_DISABLED_REASON
    return None


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def build_default_steps(runner: CommandRunner = run_command) -> tuple[Step, ...]:
    """Return the five scaffolding steps bound to *runner*."""
    return (
        Step(title=COPY_TITLE, action=copy_project_files),
        Step(title=GITIGNORE_TITLE, action=create_gitignore),
        Step(title=LICENSE_TITLE, action=create_license),
        Step(
            title=GIT_TITLE,
            action=partial(init_git, runner=runner),
            enabled=git_enabled,
        ),
        Step(
            title=INSTALL_TITLE,
            action=partial(install_project_dependencies, runner=runner),
            skip=install_skip_reason,
        ),
    )


async def create_project(
    config: Configuration,
    reporter: StepReporter | None = None,
    *,
    runner: CommandRunner = run_command,
    halt_on_failure: bool = False,
) -> RunReport:
    """Scaffold the project described by *config* with the default steps."""
    pipeline = TaskPipeline(reporter, halt_on_failure=halt_on_failure)
    return await pipeline.run(build_default_steps(runner), config)
