"""mentionkit - @-mention context for language-model prompts.

Ranks workspace files and symbols against a typed query, coalesces the
expensive lookups behind it, and resolves the chosen items into content
with exact token sizes.
"""

from mentionkit.context.types import (
    ContextItem,
    ContextItemFile,
    ContextItemOpenCtx,
    ContextItemSource,
    ContextItemSymbol,
    ContextItemWithContent,
    Position,
    Range,
)
from mentionkit.foundation.errors import ErrorCode, MentionError
from mentionkit.notify import ConsoleNotifier, LoggingNotifier
from mentionkit.resolve import ContextResolver
from mentionkit.search.service import ContextSearch
from mentionkit.tokens import TiktokenCounter
from mentionkit.workspace import GlobIgnorePolicy, LocalWorkspace

__version__ = "0.1.0"

__all__ = [
    # Data model
    "ContextItem",
    "ContextItemFile",
    "ContextItemOpenCtx",
    "ContextItemSource",
    "ContextItemSymbol",
    "ContextItemWithContent",
    "Position",
    "Range",
    # Errors
    "ErrorCode",
    "MentionError",
    # Pipeline
    "ContextSearch",
    "ContextResolver",
    # Reference collaborators
    "ConsoleNotifier",
    "GlobIgnorePolicy",
    "LocalWorkspace",
    "LoggingNotifier",
    "TiktokenCounter",
]
