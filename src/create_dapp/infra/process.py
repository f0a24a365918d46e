"""Asynchronous subprocess runner.

Satisfies :class:`~create_dapp.core.protocols.CommandRunner`.  Commands
are always executed as argument lists (never through a shell) and their
output is captured.

Rules
-----
* A missing executable raises :class:`CommandNotFoundError`.
* A missing working directory raises :class:`StepError`.
* A non-zero exit status is returned, not raised — callers decide what
  a failure means.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from create_dapp.core.protocols import CommandResult
from create_dapp.exceptions import CommandNotFoundError, StepError

logger = logging.getLogger(__name__)


async def run_command(
    command: Sequence[str],
    *,
    cwd: Path | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run *command* in *cwd* and wait for it to exit.

    Args:
        command: Executable followed by its arguments.
        cwd: Working directory for the child process.
        timeout: Seconds before the process is killed.  ``None`` waits
            indefinitely.

    Returns:
        The exit status with decoded stdout / stderr.  A process killed
        on timeout reports return code ``-1``.
    """
    if not command:
        raise ValueError("command must not be empty")
    if cwd is not None and not cwd.is_dir():
        raise StepError(
            f"Working directory does not exist: {cwd}",
            hint="An earlier step may have failed to create it.",
        )

    logger.debug("Running %s (cwd=%s)", " ".join(command), cwd)
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        raise CommandNotFoundError(command[0]) from exc

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        logger.debug("%s timed out after %ss", command[0], timeout)
        return CommandResult(
            returncode=-1,
            stderr=f"Command timed out after {timeout}s",
        )

    returncode = process.returncode if process.returncode is not None else -1
    logger.debug("%s exited with %d", command[0], returncode)
    return CommandResult(
        returncode=returncode,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )
