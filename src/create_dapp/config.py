"""Runtime settings for create-dapp.

Settings are read once from the environment by the CLI layer and then
passed explicitly to the option resolver and the template locator.
Nothing in the package reads the environment on its own.

Environment variables
---------------------
``CREATE_DAPP_TEMPLATES_DIR``
    Directory containing template folders.  Defaults to the templates
    shipped inside the package.
``CREATE_DAPP_AUTHOR_NAME`` / ``CREATE_DAPP_AUTHOR_EMAIL``
    Default copyright holder written into the generated LICENSE when
    ``--name`` / ``--email`` are not given.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

ENV_TEMPLATES_DIR: str = "CREATE_DAPP_TEMPLATES_DIR"
ENV_AUTHOR_NAME: str = "CREATE_DAPP_AUTHOR_NAME"
ENV_AUTHOR_EMAIL: str = "CREATE_DAPP_AUTHOR_EMAIL"


def packaged_templates_dir() -> Path:
    """Return the directory holding the templates bundled with the package."""
    return Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable runtime settings."""

    templates_dir: Path
    """Search root for :func:`~create_dapp.infra.templates.locate_template`."""

    author_name: str | None = None
    author_email: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (``os.environ`` by default).

        Empty values are treated as unset.
        """
        env = os.environ if environ is None else environ

        templates_raw = env.get(ENV_TEMPLATES_DIR, "").strip()
        templates_dir = (
            Path(templates_raw).expanduser() if templates_raw else packaged_templates_dir()
        )

        return cls(
            templates_dir=templates_dir,
            author_name=env.get(ENV_AUTHOR_NAME, "").strip() or None,
            author_email=env.get(ENV_AUTHOR_EMAIL, "").strip() or None,
        )
