"""Option resolver — merges command-line flags with interactive answers.

Command-line values always win: a flag that was given suppresses the
matching question.  With ``--yes`` no question is asked at all and
every open field receives its default.

Guarantees
----------
* No I/O of its own — questions go through the injected
  :class:`~create_dapp.core.protocols.AnswerProvider`.
* Never fails: every optional field ends up with a value.
"""

from __future__ import annotations

import getpass
import logging
from collections.abc import Sequence
from pathlib import Path

from create_dapp.config import Settings
from create_dapp.core.models import CliArguments, ProjectOptions
from create_dapp.core.protocols import AnswerProvider

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE: str = "basic"

TEMPLATE_QUESTION: str = "Please choose which Dapp template to use"
GIT_QUESTION: str = "Should a git repository be initialized?"


def _default_author_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # No passwd entry and no USER/LOGNAME variable.
        return "The project authors"


def _template_default(choices: Sequence[str]) -> str | None:
    """Return the choice matching :data:`DEFAULT_TEMPLATE`, if any."""
    for choice in choices:
        if choice.lower() == DEFAULT_TEMPLATE:
            return choice
    return None


async def resolve_options(
    cli_args: CliArguments,
    answers: AnswerProvider,
    *,
    template_choices: Sequence[str] = (DEFAULT_TEMPLATE,),
    settings: Settings | None = None,
) -> ProjectOptions:
    """Produce fully-populated :class:`ProjectOptions`.

    Parameters
    ----------
    cli_args:
        Values parsed from the command line; any of them may be missing.
    answers:
        Interactive backend, only consulted when ``skip_prompts`` is false
        and a field is still open.
    template_choices:
        Template identifiers offered by the template question.
    settings:
        Source of the default author identity.
    """
    template = cli_args.template
    git = cli_args.git

    if cli_args.skip_prompts:
        template = template or DEFAULT_TEMPLATE
        git = bool(git)
    else:
        if not template:
            choices = list(template_choices) or [DEFAULT_TEMPLATE]
            template = await answers.select(
                TEMPLATE_QUESTION,
                choices,
                default=_template_default(choices),
            )
        if not git:
            git = await answers.confirm(GIT_QUESTION, default=False)

    author_name = cli_args.author_name or (settings.author_name if settings else None)
    author_email = cli_args.author_email or (settings.author_email if settings else None)

    options = ProjectOptions(
        template=template,
        git=bool(git),
        skip_prompts=cli_args.skip_prompts,
        run_install=cli_args.run_install,
        target_directory=cli_args.target_directory or Path.cwd(),
        author_name=author_name or _default_author_name(),
        author_email=author_email or "",
    )
    logger.debug("Resolved options: %s", options)
    return options
