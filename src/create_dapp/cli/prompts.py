"""Interactive questions for the CLI layer.

:class:`QuestionaryAnswerProvider` satisfies
:class:`~create_dapp.core.protocols.AnswerProvider` with questionary's
arrow-key prompts.  Questions are awaited with ``ask_async`` so they run
on the same event loop as the scaffolding pipeline.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from create_dapp.exceptions import MissingDependencyError, PromptCancelledError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "questionary is not installed. Install with: pip install questionary",
            hint="Or pass the template name and --yes to skip all questions.",
        ) from exc
    return questionary


class QuestionaryAnswerProvider:
    """Ask questions in the terminal with questionary.

    questionary is imported on the first question, so runs that never ask
    anything (``--yes`` or every flag given) do not need it installed.
    """

    def __init__(self) -> None:
        self._module: Any = None

    @property
    def _questionary(self) -> Any:
        if self._module is None:
            self._module = _import_questionary()
        return self._module

    async def select(
        self,
        message: str,
        choices: Sequence[str],
        *,
        default: str | None = None,
    ) -> str:
        """Single-choice list question.

        Raises
        ------
        PromptCancelledError
            If the user cancels the prompt (Esc / Ctrl+C).
        """
        answer: str | None = await self._questionary.select(
            message,
            choices=list(choices),
            default=default,
            use_arrow_keys=True,
            use_shortcuts=False,
        ).ask_async()  # Returns None on Ctrl+C / Esc

        if answer is None:
            raise PromptCancelledError(
                "No template selected.",
                hint="Use arrow keys to pick a template, then press Enter.",
            )
        return answer

    async def confirm(self, message: str, *, default: bool = False) -> bool:
        """Yes/no question.

        Raises
        ------
        PromptCancelledError
            If the user cancels the prompt.
        """
        answer: bool | None = await self._questionary.confirm(
            message,
            default=default,
        ).ask_async()

        if answer is None:
            raise PromptCancelledError("Question cancelled.")
        return bool(answer)
