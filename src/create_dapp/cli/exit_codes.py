"""Process exit statuses returned by ``create-dapp``."""

from __future__ import annotations

SUCCESS: int = 0
"""The pipeline ran to the end.  Individual step failures do not change this."""

GENERAL_ERROR: int = 1
"""A :class:`~create_dapp.exceptions.CreateDappError` stopped the run, e.g. an invalid template name."""

UNEXPECTED_ERROR: int = 2
"""Any other exception reached :func:`create_dapp.cli.app.cli`."""

KEYBOARD_INTERRUPT: int = 130
"""Ctrl+C (128 + SIGINT)."""
