"""Allow ``python -m create_dapp`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m create_dapp`` behaves identically to the ``create-dapp``
console script.
"""

from __future__ import annotations

from create_dapp.cli.app import cli

if __name__ == "__main__":
    cli()
