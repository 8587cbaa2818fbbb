"""User-visible notices.

``LoggingNotifier`` is the default for embedding; the CLI uses
``ConsoleNotifier`` so resolution warnings show up next to its output.
"""

import logging

from rich.console import Console

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Sends notices to the ``mentionkit.notify`` logger."""

    def warn(self, message: str) -> None:
        logger.warning(message)


class ConsoleNotifier:
    """Prints notices to stderr with rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/] {message}", highlight=False)
