"""mentionkit CLI."""

from mentionkit.interface.cli.main import cli_entrypoint, main

__all__ = ["cli_entrypoint", "main"]
