"""Filesystem actions used by the scaffolding steps.

Each public coroutine performs one write into the target directory and
raises :class:`~create_dapp.exceptions.StepError` when it cannot.
Blocking work runs in a worker thread so the event loop stays free.
"""

from __future__ import annotations

import asyncio
import datetime
import logging
import os
import shutil
from importlib import resources
from pathlib import Path

from create_dapp.exceptions import StepError

logger = logging.getLogger(__name__)

GITIGNORE_NAME: str = ".gitignore"
LICENSE_NAME: str = "LICENSE"

YEAR_PLACEHOLDER: str = "<year>"
HOLDER_PLACEHOLDER: str = "<copyright holders>"


def read_resource(name: str) -> str:
    """Return the text of a file bundled under ``create_dapp/resources``."""
    return (resources.files("create_dapp") / "resources" / name).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Copy
# ---------------------------------------------------------------------------

_IGNORED_DIRS: frozenset[str] = frozenset({"__pycache__"})


def copy_tree_no_clobber(source: Path, target: Path) -> None:
    """Recursively copy *source* into *target*, keeping existing entries.

    *target* and any missing sub-directories are created.  A file that
    already exists at the same relative path is left untouched, and so
    are the mode and timestamps of directories that already existed.
    """
    if not source.is_dir():
        raise FileNotFoundError(f"Template directory not found: {source}")

    for current, dirnames, filenames in os.walk(source):
        dirnames[:] = [name for name in dirnames if name not in _IGNORED_DIRS]
        relative = Path(current).relative_to(source)
        destination = target / relative

        if not destination.exists():
            destination.mkdir(parents=True)

        for name in filenames:
            dst = destination / name
            if os.path.lexists(dst):
                logger.debug("Keeping existing %s", dst)
                continue
            shutil.copy2(Path(current) / name, dst)


async def copy_template(source: Path, target: Path) -> None:
    try:
        await asyncio.to_thread(copy_tree_no_clobber, source, target)
    except OSError as exc:
        raise StepError(f"Failed to copy project files: {exc}") from exc


# ---------------------------------------------------------------------------
# Ignore file
# ---------------------------------------------------------------------------

def append_text(path: Path, content: str) -> None:
    """Append *content* to *path*, creating the file when absent.

    A newline is inserted first when the existing content does not end
    with one, so the previous last line is never merged with new text.
    """
    prefix = ""
    if path.exists() and path.stat().st_size > 0:
        with path.open("rb") as existing:
            existing.seek(-1, os.SEEK_END)
            if existing.read(1) != b"\n":
                prefix = "\n"
    with path.open("a", encoding="utf-8") as handle:
        handle.write(prefix + content)


async def write_gitignore(target: Path, ecosystem: str = "Node") -> None:
    """Append the ignore patterns for *ecosystem* to ``target/.gitignore``."""
    try:
        patterns = read_resource(f"{ecosystem}.gitignore")
    except FileNotFoundError as exc:
        raise StepError(f"No ignore patterns bundled for {ecosystem}") from exc

    try:
        await asyncio.to_thread(append_text, target / GITIGNORE_NAME, patterns)
    except OSError as exc:
        raise StepError(f"Failed to write {GITIGNORE_NAME}: {exc}") from exc


# ---------------------------------------------------------------------------
# License
# ---------------------------------------------------------------------------

def render_license(template: str, holder: str, year: int | None = None) -> str:
    """Substitute the year and copyright-holder placeholders in *template*."""
    if year is None:
        year = datetime.date.today().year
    return template.replace(YEAR_PLACEHOLDER, str(year)).replace(HOLDER_PLACEHOLDER, holder)


async def write_license(target: Path, holder: str, license_id: str = "MIT") -> None:
    """Write ``target/LICENSE`` for *holder* using the bundled *license_id* text."""
    content = render_license(read_resource(f"{license_id}.txt"), holder)
    try:
        await asyncio.to_thread((target / LICENSE_NAME).write_text, content, encoding="utf-8")
    except OSError as exc:
        raise StepError(f"Failed to write {LICENSE_NAME}: {exc}") from exc
