"""Allow ``python -m mentionkit``."""

from mentionkit.interface.cli import cli_entrypoint

if __name__ == "__main__":
    cli_entrypoint()
