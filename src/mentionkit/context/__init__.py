"""Context items: data model, normalization and the eligibility gate.

Example:
    >>> from mentionkit.context import ContextItemFile, Range
    >>> item = ContextItemFile(uri="file:///repo/app.py", range=Range.lines(0, 10))
    >>> item.type
    'file'
"""

from mentionkit.context.eligibility import (
    MAX_FILE_BYTES,
    estimate_tokens_from_bytes,
    filter_context_item_files,
)
from mentionkit.context.normalize import new_file_item, new_symbol_item
from mentionkit.context.types import (
    ContextItem,
    ContextItemFile,
    ContextItemOpenCtx,
    ContextItemSource,
    ContextItemSymbol,
    ContextItemWithContent,
    Position,
    Range,
    SymbolKind,
)
from mentionkit.context.uri import file_uri, split_remote_path, uri_fs_path, uri_path

__all__ = [
    "MAX_FILE_BYTES",
    "ContextItem",
    "ContextItemFile",
    "ContextItemOpenCtx",
    "ContextItemSource",
    "ContextItemSymbol",
    "ContextItemWithContent",
    "Position",
    "Range",
    "SymbolKind",
    "estimate_tokens_from_bytes",
    "file_uri",
    "filter_context_item_files",
    "new_file_item",
    "new_symbol_item",
    "split_remote_path",
    "uri_fs_path",
    "uri_path",
]
