"""Command-line entry point: argument parsing, routing and exit codes.

``create-dapp [template] [options]`` resolves the project options, checks
the template and runs the scaffolding steps; ``create-dapp doctor`` prints
environment diagnostics.

:func:`cli` is the only place where exceptions become exit statuses.
Option resolution, template lookup and the steps themselves live in the
core and infrastructure layers.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from create_dapp.cli import exit_codes
from create_dapp.cli.console import configure_logging, console
from create_dapp.exceptions import CreateDappError, TemplateNotFoundError
from create_dapp.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Build the ``create-dapp`` parser.

    Forms:
    * ``create-dapp [template] [options]`` — scaffold a project
    * ``create-dapp doctor``               — environment diagnostics
    * ``create-dapp --version``
    """
    parser = argparse.ArgumentParser(
        prog="create-dapp",
        description="Scaffold a new Dapp project from a bundled template.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "template",
        nargs="?",
        default=None,
        help="Template to use (asked interactively when omitted), or 'doctor'.",
    )
    parser.add_argument(
        "-g",
        "--git",
        action="store_true",
        default=None,
        help="Initialize a git repository in the new project.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        dest="skip_prompts",
        help="Skip all questions and use defaults.",
    )
    parser.add_argument(
        "-i",
        "--install",
        action=argparse.BooleanOptionalAction,
        default=True,
        dest="run_install",
        help="Install dependencies after scaffolding.",
    )
    parser.add_argument(
        "-t",
        "--target",
        type=Path,
        default=None,
        dest="target_directory",
        metavar="DIR",
        help="Directory to create the project in (default: current directory).",
    )
    parser.add_argument("--name", dest="author_name", help="Copyright holder name for LICENSE.")
    parser.add_argument("--email", dest="author_email", help="Copyright holder email for LICENSE.")
    parser.add_argument(
        "--halt-on-error",
        action="store_true",
        help="Stop running steps after the first failure.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

async def _handle_create(args: argparse.Namespace) -> int:
    """Resolve options, validate the template, then run the step pipeline.

    Flow:
    1. Merge flags with interactive answers.
    2. Locate the template — the only fatal error, raised before any write.
    3. Run every scaffolding step and report progress.
    """
    from create_dapp.cli.prompts import QuestionaryAnswerProvider
    from create_dapp.cli.reporter import make_reporter
    from create_dapp.config import Settings
    from create_dapp.core.models import CliArguments
    from create_dapp.core.options import resolve_options
    from create_dapp.infra.steps import create_project
    from create_dapp.infra.templates import list_templates, locate_template

    settings = Settings.from_env()
    target = args.target_directory
    cli_args = CliArguments(
        template=args.template,
        git=args.git,
        skip_prompts=args.skip_prompts,
        run_install=args.run_install,
        target_directory=target.expanduser().resolve() if target is not None else None,
        author_name=args.author_name,
        author_email=args.author_email,
    )

    console.print("[bold magenta]Create Dapp[/bold magenta]  Welcome to Full-Stack Dapp Creator.\n")

    options = await resolve_options(
        cli_args,
        QuestionaryAnswerProvider(),
        template_choices=list_templates(settings.templates_dir),
        settings=settings,
    )

    try:
        template_dir = locate_template(options.template, settings.templates_dir)
    except TemplateNotFoundError as exc:
        _print_error(exc, "Invalid template name")
        return exit_codes.GENERAL_ERROR

    config = options.to_configuration(template_dir)
    await create_project(config, make_reporter(), halt_on_failure=args.halt_on_error)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from create_dapp.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Parse *argv* (``sys.argv[1:]`` when ``None``) and run the command.

    Returns
    -------
    int
        OS process exit code.  Step failures inside the pipeline still
        return :data:`exit_codes.SUCCESS`.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.template is not None and args.template.lower() == "doctor":
        return _handle_doctor()

    return asyncio.run(_handle_create(args))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _print_error(exc: CreateDappError, headline: str | None = None) -> None:
    console.print(f"[bold red]ERROR[/bold red] {headline or exc}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {exc.hint}")


def cli() -> None:
    """Console-script entry point; maps every outcome to an exit status."""
    try:
        code = main()
    except CreateDappError as exc:
        _print_error(exc)
        code = exit_codes.GENERAL_ERROR
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        code = exit_codes.KEYBOARD_INTERRUPT
    except Exception as exc:  # noqa: BLE001
        console.print(
            f"[bold red]Internal error[/bold red] {type(exc).__name__}: {exc}\n"
            "Run again with --verbose and include the output when reporting it."
        )
        code = exit_codes.UNEXPECTED_ERROR
    sys.exit(code)
