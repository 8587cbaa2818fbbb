"""Remote search adapter.

When repository names are given, ranking is entirely the backend's job.
This module only maps its answers onto context items, and maps every kind
of failure onto "no results".
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from mentionkit.coalesce import SKIPPED
from mentionkit.context.types import ContextItemFile, ContextItemSource, ContextItemSymbol
from mentionkit.context.uri import file_uri
from mentionkit.foundation.errors import ErrorCode, MentionError, is_error_like
from mentionkit.protocols import IgnorePolicy, RemoteFileMatch, RemoteSymbolMatch

logger = logging.getLogger(__name__)


def remote_uri(repository_name: str, path: str) -> str:
    """Self-describing URI whose path is ``/<repository_name><path>``."""
    return file_uri(repository_name + path)


async def _call_remote(
    search: Callable[[list[str], str], Awaitable[Any]],
    repository_names: Sequence[str],
    query: str,
) -> list[Any]:
    try:
        result = await search(list(repository_names), query)
    except Exception as e:
        result = e

    if result == SKIPPED:
        logger.debug("%s", MentionError(ErrorCode.SEARCH_SKIPPED, {"query": query}))
        return []
    if is_error_like(result):
        logger.warning(
            "%s",
            MentionError(
                ErrorCode.SEARCH_BACKEND_FAILED,
                {"repositories": ", ".join(repository_names), "detail": str(result)},
                cause=result if isinstance(result, Exception) else None,
            ),
        )
        return []
    return list(result or [])


async def search_remote_files(
    search: Callable[[list[str], str], Awaitable[Any]],
    repository_names: Sequence[str],
    query: str,
    ignore: IgnorePolicy,
) -> list[ContextItemFile]:
    """Run a (debounced) remote file search and map hits to file items."""
    matches: list[RemoteFileMatch] = await _call_remote(search, repository_names, query)
    return [
        ContextItemFile(
            uri=remote_uri(match.repository.name, match.file.path),
            size=match.file.byte_size,
            source=ContextItemSource.USER,
            remote_repository_name=match.repository.name,
            is_ignored=ignore.is_repo_name_ignored(match.repository.name),
        )
        for match in matches
    ]


async def search_remote_symbols(
    search: Callable[[list[str], str], Awaitable[Any]],
    repository_names: Sequence[str],
    query: str,
    ignore: IgnorePolicy,
) -> list[ContextItemSymbol]:
    """Run a (debounced) remote symbol search and map hits to symbol items.

    The backend does not report symbol kinds yet; every symbol is a
    ``function``.
    """
    matches: list[RemoteSymbolMatch] = await _call_remote(search, repository_names, query)
    return [
        ContextItemSymbol(
            uri=remote_uri(match.repository.name, symbol.path),
            remote_repository_name=match.repository.name,
            is_ignored=ignore.is_repo_name_ignored(match.repository.name),
            source=ContextItemSource.USER,
            symbol_name=symbol.name,
            kind="function",
        )
        for match in matches
        for symbol in match.symbols
    ]
