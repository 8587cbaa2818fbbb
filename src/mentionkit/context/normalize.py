"""Turn raw file/symbol hits into typed context items.

Two named constructors, ``new_file_item`` and ``new_symbol_item``, share one
builder. Both return a list: empty when the path is ignored (a silent drop),
otherwise a single item.
"""

from __future__ import annotations

import logging
from typing import Any

from mentionkit.context.types import (
    ContextItem,
    ContextItemFile,
    ContextItemSource,
    ContextItemSymbol,
    Range,
    SymbolKind,
)
from mentionkit.protocols import IgnorePolicy

logger = logging.getLogger(__name__)


async def _create_items(
    uri: str,
    source: ContextItemSource,
    ignore: IgnorePolicy,
    selection_range: Any,
    symbol: tuple[SymbolKind, str] | None,
) -> list[ContextItem]:
    if ignore.is_path_ignored(uri):
        logger.debug("Dropping ignored path %s", uri)
        return []

    range = Range.from_native(selection_range)

    if symbol is not None:
        kind, symbol_name = symbol
        return [
            ContextItemSymbol(
                uri=uri,
                range=range,
                source=source,
                symbol_name=symbol_name,
                kind=kind,
            )
        ]

    return [
        ContextItemFile(
            uri=uri,
            range=range,
            source=source,
            is_ignored=bool(await ignore.is_uri_ignored(uri)),
        )
    ]


async def new_file_item(
    uri: str,
    source: ContextItemSource,
    ignore: IgnorePolicy,
    selection_range: Any = None,
) -> list[ContextItemFile]:
    """Build a file item, or nothing if the path is ignored.

    Args:
        uri: File URI
        source: Provenance tag
        ignore: Ignore policy; the path check drops the item, the content
            filter check only flags it (``is_ignored``)
        selection_range: Optional editor-native or canonical range
    """
    return await _create_items(uri, source, ignore, selection_range, None)  # type: ignore[return-value]


async def new_symbol_item(
    uri: str,
    source: ContextItemSource,
    ignore: IgnorePolicy,
    selection_range: Any,
    kind: SymbolKind,
    symbol_name: str,
) -> list[ContextItemSymbol]:
    """Build a symbol item, or nothing if the path is ignored."""
    return await _create_items(  # type: ignore[return-value]
        uri, source, ignore, selection_range, (kind, symbol_name)
    )
