"""Template locator.

Templates are plain directories below a search root; the directory name
is the lower-cased template identifier (``React-hardhat`` →
``react-hardhat``).  Validation happens here, before any scaffolding
step touches the target directory.
"""

from __future__ import annotations

import os
from pathlib import Path

from create_dapp.exceptions import TemplateNotFoundError


def is_template_name(template_id: str) -> bool:
    """Return ``True`` when *template_id* names a single directory entry."""
    if template_id in ("", ".", "..") or "\\" in template_id:
        return False
    return Path(template_id).name == template_id


def template_path(template_id: str, search_root: Path) -> Path:
    """Return the candidate directory for *template_id* (not validated)."""
    return search_root / template_id.lower()


def locate_template(template_id: str, search_root: Path) -> Path:
    """Resolve *template_id* to a readable template directory.

    Raises
    ------
    TemplateNotFoundError
        If *template_id* is not a plain name (``..``, ``a/b``) or the
        directory is missing, not a directory, or unreadable.
    """
    candidate = template_path(template_id, search_root)
    if (
        not is_template_name(template_id)
        or not candidate.is_dir()
        or not os.access(candidate, os.R_OK | os.X_OK)
    ):
        available = list_templates(search_root)
        hint = f"Available templates: {', '.join(available)}" if available else None
        raise TemplateNotFoundError(candidate, hint=hint)
    return candidate.resolve()


def list_templates(search_root: Path) -> list[str]:
    """Return the sorted template identifiers found under *search_root*.

    Hidden directories and ``__pycache__`` are ignored.  A missing root
    yields an empty list.
    """
    if not search_root.is_dir():
        return []
    return sorted(
        entry.name
        for entry in search_root.iterdir()
        if entry.is_dir() and not entry.name.startswith((".", "__"))
    )
