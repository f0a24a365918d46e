"""Dependency installation through the project's package manager.

The manager is picked from the lock file the template ships with:
``yarn.lock`` → yarn, ``pnpm-lock.yaml`` → pnpm, anything else → npm.
A lock-file manager that is not on PATH falls back to npm.
"""

from __future__ import annotations

import logging
from pathlib import Path

from create_dapp.core.protocols import CommandRunner
from create_dapp.exceptions import CommandNotFoundError, StepError
from create_dapp.infra.process import run_command
from create_dapp.infra.tool_detector import detect_tool, install_hint

logger = logging.getLogger(__name__)

DEFAULT_MANAGER: str = "npm"

_LOCK_FILES: tuple[tuple[str, str], ...] = (
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
    ("package-lock.json", "npm"),
)

# Lines of stderr shown in the failure hint.
_STDERR_TAIL: int = 5


def detect_package_manager(project_dir: Path) -> str:
    """Return the package manager executable to use in *project_dir*."""
    for lock_file, manager in _LOCK_FILES:
        if (project_dir / lock_file).exists():
            if manager == DEFAULT_MANAGER or detect_tool(manager).found:
                return manager
            logger.debug("%s found but %s is not installed", lock_file, manager)
            break
    return DEFAULT_MANAGER


async def install_dependencies(
    project_dir: Path,
    *,
    runner: CommandRunner = run_command,
) -> None:
    """Run ``<manager> install`` in *project_dir*.

    Raises
    ------
    StepError
        If the manager is missing or exits with a non-zero status.
    """
    manager = detect_package_manager(project_dir)
    try:
        result = await runner([manager, "install"], cwd=project_dir)
    except CommandNotFoundError as exc:
        raise StepError(
            "Failed to install dependencies",
            hint=install_hint(manager),
        ) from exc

    if not result.ok:
        tail = "\n".join(result.stderr.strip().splitlines()[-_STDERR_TAIL:])
        raise StepError(
            "Failed to install dependencies",
            hint=f"{manager} install exited with {result.returncode}"
            + (f":\n{tail}" if tail else ""),
        )
