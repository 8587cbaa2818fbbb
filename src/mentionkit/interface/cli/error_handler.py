"""CLI Error Handler.

Provides unified error handling for the CLI with support for:
- Human-readable output (default)
- JSON output for machine consumption (``--json``)
"""

import json
import sys
from typing import NoReturn

from rich.console import Console
from rich.text import Text

from mentionkit.foundation.errors import ErrorCode, MentionError

_ICONS = {
    "search": "🔍",
    "resolution": "📄",
    "provider": "🔌",
    "config": "⚙️",
    "io": "📁",
    "runtime": "⚡",
}


def as_mention_error(error: BaseException) -> MentionError:
    """Wrap anything that is not already a MentionError."""
    if isinstance(error, MentionError):
        return error
    return MentionError(
        code=ErrorCode.UNEXPECTED,
        context={"detail": str(error) or type(error).__name__},
        cause=error if isinstance(error, Exception) else None,
    )


def handle_error(
    error: MentionError | Exception,
    json_output: bool = False,
) -> NoReturn:
    """Report an error and exit.

    Args:
        error: The error to handle (MentionError or generic Exception)
        json_output: If True, output JSON to stderr for programmatic use

    Raises:
        SystemExit: Always exits with code 1
    """
    error = as_mention_error(error)

    if json_output:
        print(format_error_for_json(error), file=sys.stderr)
        sys.exit(1)

    _print_human_error(error)
    sys.exit(1)


def _print_human_error(error: MentionError) -> None:
    console = Console(stderr=True)

    header = Text()
    header.append(f"{_ICONS.get(error.category, '❌')} ", style="bold")
    header.append(error.error_id, style="bold red")
    header.append(f" {error.message}")
    console.print(header)

    if error.recovery_hints:
        console.print("\n[bold]What you can do:[/]")
        for i, hint in enumerate(error.recovery_hints, 1):
            console.print(f"  {i}. {hint}", highlight=False)


def format_error_for_json(error: MentionError | Exception) -> str:
    """Format an error as a JSON string."""
    error = as_mention_error(error)
    error_dict = error.to_dict()
    if error.cause:
        error_dict["cause"] = str(error.cause)
    return json.dumps(error_dict)
