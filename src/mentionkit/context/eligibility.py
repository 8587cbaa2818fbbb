"""Size and type gate for file items.

Remote search only indexes files up to 1MB, so local results use the same
ceiling. Surviving items get a rough token estimate from their byte size;
the exact count is only computed when an item is resolved.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Sequence
from dataclasses import replace

from mentionkit.context.types import ContextItem, ContextItemFile
from mentionkit.context.uri import uri_fs_path
from mentionkit.protocols import FileStat, FileStatProvider, FileType

logger = logging.getLogger(__name__)

MAX_FILE_BYTES = 1_000_000
MARKDOWN_BYTES_PER_TOKEN = 3.5
DEFAULT_BYTES_PER_TOKEN = 4.5


def estimate_tokens_from_bytes(
    path: str,
    byte_size: int,
    *,
    markdown_extensions: Sequence[str] = (".md",),
    markdown_divisor: float = MARKDOWN_BYTES_PER_TOKEN,
    default_divisor: float = DEFAULT_BYTES_PER_TOKEN,
) -> int:
    """Approximate token count from a byte size.

    Markdown is mostly prose with little whitespace, so it packs more tokens
    per byte than code.

    Example:
        >>> estimate_tokens_from_bytes("README.md", 35)
        10
        >>> estimate_tokens_from_bytes("main.py", 45)
        10
    """
    divisor = markdown_divisor if path.endswith(tuple(markdown_extensions)) else default_divisor
    return math.floor(byte_size / divisor)


async def _safe_stat(stat: FileStatProvider, uri: str) -> FileStat | None:
    try:
        return await stat.stat(uri)
    except Exception as e:
        logger.debug("Stat failed for %s: %s", uri, e)
        return None


async def filter_context_item_files(
    items: Sequence[ContextItem],
    stat: FileStatProvider,
    *,
    max_bytes: int = MAX_FILE_BYTES,
    markdown_extensions: Sequence[str] = (".md",),
    markdown_divisor: float = MARKDOWN_BYTES_PER_TOKEN,
    default_divisor: float = DEFAULT_BYTES_PER_TOKEN,
) -> list[ContextItemFile]:
    """Drop non-files, unstattable and oversized files; estimate sizes.

    Items are stat'ed concurrently; the output keeps the input order. Every
    surviving item's ``size`` is overwritten with the byte-based estimate.
    """
    files = [item for item in items if isinstance(item, ContextItemFile)]
    stats = await asyncio.gather(*(_safe_stat(stat, item.uri) for item in files))

    filtered: list[ContextItemFile] = []
    for item, file_stat in zip(files, stats, strict=True):
        if file_stat is None or file_stat.type is not FileType.FILE:
            continue
        if file_stat.size > max_bytes:
            logger.debug("Dropping %s: %d bytes", item.uri, file_stat.size)
            continue
        size = estimate_tokens_from_bytes(
            uri_fs_path(item.uri),
            file_stat.size,
            markdown_extensions=markdown_extensions,
            markdown_divisor=markdown_divisor,
            default_divisor=default_divisor,
        )
        filtered.append(replace(item, size=size))
    return filtered
