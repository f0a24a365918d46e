"""``create-dapp doctor`` — can this machine scaffold and bootstrap a project?

Each check yields a ``(component, value, status)`` row.  Statuses are
``OK``, ``WARN`` (the matching step will fail, the rest still runs),
``OPTIONAL`` (a fallback exists) and ``FAIL`` (scaffolding cannot work).
Rows are shown as a Rich table, or as aligned text when Rich is not
installed.
"""

from __future__ import annotations

import platform
import sys
from collections.abc import Sequence

from create_dapp.cli import exit_codes
from create_dapp.cli.console import console, rich_available
from create_dapp.config import Settings
from create_dapp.infra.templates import list_templates
from create_dapp.infra.tool_detector import ToolStatus, detect_tool
from create_dapp.version import __version__

Check = tuple[str, str, str]

OK = "OK"
WARN = "WARN"
OPTIONAL = "OPTIONAL"
FAIL = "FAIL"

_STATUS_STYLE: dict[str, str] = {
    OK: "green",
    WARN: "yellow",
    OPTIONAL: "dim",
    FAIL: "red",
}

_TOOLS: tuple[str, ...] = ("git", "node", "npm", "yarn", "pnpm")
# The installer falls back to npm when these are missing.
_OPTIONAL_TOOLS: frozenset[str] = frozenset({"yarn", "pnpm"})

_OS_NAMES: dict[str, str] = {"Darwin": "macOS"}


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Python 3.10 or newer is required."""
    supported = sys.version_info[:2] >= (3, 10)
    return "Python", platform.python_version(), OK if supported else FAIL


def _createdapp_version_check() -> Check:
    return "create-dapp", __version__, OK


def _tool_check(tool: ToolStatus) -> Check:
    if tool.found:
        return tool.name, str(tool.path) if tool.path else "found", OK
    return tool.name, "not found", OPTIONAL if tool.name in _OPTIONAL_TOOLS else WARN


def _templates_check(settings: Settings) -> Check:
    names = list_templates(settings.templates_dir)
    if not names:
        return "templates", f"none in {settings.templates_dir}", FAIL
    return "templates", ", ".join(names), OK


def _os_check() -> Check:
    system = platform.system()
    name = _OS_NAMES.get(system, system)
    return "OS", f"{name} {platform.release()} ({platform.machine()})", OK


def collect_checks(settings: Settings) -> tuple[list[Check], list[ToolStatus]]:
    """Run every check; also return the required tools that are missing."""
    tools = [detect_tool(name) for name in _TOOLS]
    checks = [
        _createdapp_version_check(),
        _python_version_check(),
        *(_tool_check(tool) for tool in tools),
        _templates_check(settings),
        _os_check(),
    ]
    missing = [
        tool
        for tool in tools
        if not tool.found and tool.name not in _OPTIONAL_TOOLS and tool.install_commands
    ]
    return checks, missing


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_rich(checks: Sequence[Check], missing: Sequence[ToolStatus]) -> None:
    from rich.table import Table

    table = Table(title="create-dapp doctor", header_style="bold cyan", border_style="dim")
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for component, value, status in checks:
        style = _STATUS_STYLE.get(status, "white")
        table.add_row(component, value, f"[{style}]{status}[/{style}]")
    console.print(table)

    for tool in missing:
        console.print(f"\n[yellow]{tool.name} was not found on PATH.[/yellow] Try one of:")
        for command in tool.install_commands:
            console.print(f"  [bold]{command}[/bold]")


def _render_plain(checks: Sequence[Check], missing: Sequence[ToolStatus]) -> None:
    out = sys.stderr
    print("create-dapp doctor", file=out)
    print(f"{'Component':<12} {'Value':<40} Status", file=out)
    for component, value, status in checks:
        print(f"{component:<12} {value:<40} {status}", file=out)

    for tool in missing:
        print(f"\n{tool.name} was not found on PATH. Try one of:", file=out)
        for command in tool.install_commands:
            print(f"  {command}", file=out)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings | None = None) -> int:
    """Print the diagnostics and return the process exit code.

    Returns :data:`exit_codes.GENERAL_ERROR` when any row is ``FAIL``,
    otherwise :data:`exit_codes.SUCCESS`.  Missing tools only warn.
    """
    checks, missing = collect_checks(settings or Settings.from_env())

    if rich_available():
        _render_rich(checks, missing)
    else:
        _render_plain(checks, missing)

    if any(status == FAIL for _, _, status in checks):
        console.print("\nSome checks failed.")
        return exit_codes.GENERAL_ERROR
    console.print("\nAll checks passed.")
    return exit_codes.SUCCESS
