"""create-dapp — interactive scaffolding for new decentralized-app projects.

Copies a bundled project template, writes the ignore and license files,
and optionally initializes git and installs dependencies.
"""

from create_dapp.version import __version__

__all__: list[str] = ["__version__"]
