"""Infrastructure: external tool detection and platform guidance.

Locates command-line tools the scaffolder shells out to (``git`` and
the JavaScript package managers) and suggests how to install the ones
that are missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of detecting one tool.

    Attributes
    ----------
    name : str
        Executable name that was looked up.
    found : bool
        Whether the executable was located on PATH.
    path : Path | None
        Absolute path to the executable, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool on the current
        platform.  Empty when the tool is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_INSTALL_COMMANDS: dict[str, dict[str, tuple[str, ...]]] = {
    "git": {
        "windows": ("winget install Git.Git", "choco install git"),
        "linux": ("sudo apt install git", "sudo dnf install git", "sudo pacman -S git"),
        "darwin": ("brew install git", "xcode-select --install"),
    },
    "node": {
        "windows": ("winget install OpenJS.NodeJS.LTS", "choco install nodejs-lts"),
        "linux": ("sudo apt install nodejs npm", "sudo dnf install nodejs", "sudo pacman -S nodejs npm"),
        "darwin": ("brew install node",),
    },
    "yarn": {
        "windows": ("corepack enable", "npm install --global yarn"),
        "linux": ("corepack enable", "npm install --global yarn"),
        "darwin": ("corepack enable", "brew install yarn"),
    },
    "pnpm": {
        "windows": ("corepack enable", "npm install --global pnpm"),
        "linux": ("corepack enable", "npm install --global pnpm"),
        "darwin": ("corepack enable", "brew install pnpm"),
    },
}
# npm ships with node.
_INSTALL_COMMANDS["npm"] = _INSTALL_COMMANDS["node"]

_DOWNLOAD_PAGES: dict[str, str] = {
    "git": "https://git-scm.com/downloads",
    "node": "https://nodejs.org/en/download",
    "npm": "https://nodejs.org/en/download",
    "yarn": "https://yarnpkg.com/getting-started/install",
    "pnpm": "https://pnpm.io/installation",
}


def install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    system = platform.system().lower()
    by_system = _INSTALL_COMMANDS.get(name, {})
    if system in by_system:
        return by_system[system]
    page = _DOWNLOAD_PAGES.get(name)
    if page is None:
        return ()
    return (f"Please install {name} from {page}",)


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Look up the executable *name* on the system PATH.

    Returns a :class:`ToolStatus` regardless of whether the tool is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=install_commands(name),
    )


def install_hint(name: str) -> str | None:
    """Build a multi-line hint telling the user how to install *name*."""
    commands = install_commands(name)
    if not commands:
        return None
    lines = [f"Install {name} using one of:"]
    lines.extend(f"  {cmd}" for cmd in commands)
    return "\n".join(lines)
