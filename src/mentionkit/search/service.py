"""Mention search facade.

``ContextSearch`` wires the collaborators, the configuration and the
coalescers together. Build one per workspace session and share it: the
throttled file scan and the debounced remote searches only coalesce calls
made through the same instance.
"""

import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from mentionkit.coalesce import Debounce, Throttle, run_detached
from mentionkit.context.eligibility import filter_context_item_files
from mentionkit.context.normalize import new_file_item, new_symbol_item
from mentionkit.context.types import ContextItemFile, ContextItemSource, ContextItemSymbol
from mentionkit.foundation.types.config import EligibilityConfig, SearchConfig
from mentionkit.protocols import (
    Editor,
    FileFinder,
    FileStatProvider,
    IgnorePolicy,
    RemoteSearchClient,
    WorkspaceSymbolProvider,
)
from mentionkit.ranking.files import rank_files
from mentionkit.ranking.symbols import (
    filter_workspace_symbols,
    normalize_symbol_query,
    rank_symbols,
    symbol_item_kind,
)
from mentionkit.search.remote import search_remote_files, search_remote_symbols

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ContextSearch:
    """Finds file and symbol context items for @-mention queries.

    Local queries rank the workspace with fuzzy matching; queries scoped to
    remote repositories are delegated to the remote backend.

    Example:
        >>> search = ContextSearch(finder=ws, stat=ws, ignore=policy)
        >>> items = await search.get_file_context_items("ctx types", max_results=10)
    """

    finder: FileFinder
    stat: FileStatProvider
    ignore: IgnorePolicy
    symbols: WorkspaceSymbolProvider | None = None
    editor: Editor | None = None
    remote: RemoteSearchClient | None = None

    search_config: SearchConfig = field(default_factory=SearchConfig)
    eligibility_config: EligibilityConfig = field(default_factory=EligibilityConfig)

    windows: bool = field(default_factory=lambda: sys.platform == "win32")
    """Whether workspace paths use backslash separators."""

    _find_files: Throttle[list[str]] = field(init=False)
    _remote_files: Debounce | None = field(default=None, init=False)
    _remote_symbols: Debounce | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self._find_files = Throttle(
            self.finder.find_files,
            window=self.search_config.find_files_throttle_seconds,
        )
        if self.remote is not None:
            wait = self.search_config.remote_debounce_seconds
            self._remote_files = Debounce(self.remote.get_remote_files, wait=wait)
            self._remote_symbols = Debounce(self.remote.get_remote_symbols, wait=wait)

    @property
    def find_files(self) -> Throttle[list[str]]:
        """The shared, throttled workspace scan."""
        return self._find_files

    @property
    def remote_symbol_search(self) -> Debounce | None:
        return self._remote_symbols

    @property
    def remote_file_search(self) -> Debounce | None:
        return self._remote_files

    async def get_file_context_items(
        self,
        query: str,
        max_results: int | None = None,
        repository_names: Sequence[str] | None = None,
    ) -> list[ContextItemFile]:
        """Files matching ``query``, best first.

        Args:
            query: Free text; a blank query returns nothing
            max_results: Result cap (default from config)
            repository_names: Search these remote repositories instead of
                the local workspace

        Returns:
            Eligible file items. Remote failures yield an empty list.
        """
        if not query.strip():
            return []
        if max_results is None:
            max_results = self.search_config.max_file_results

        if repository_names is not None:
            if self._remote_files is None:
                logger.warning("Remote repositories given but no remote client is configured")
                return []
            return await search_remote_files(
                self._remote_files, repository_names, query, self.ignore
            )

        uris = await self._find_files()
        if not uris:
            return []

        ranked = rank_files(
            query,
            uris,
            max_results,
            display_path=self.finder.display_path,
            threshold=self.search_config.fuzzy_threshold,
            low_scoring_segments=self.search_config.low_scoring_segments,
            penalty=self.search_config.low_score_penalty,
            windows=self.windows,
        )

        groups = await asyncio.gather(
            *(new_file_item(c.obj, ContextItemSource.USER, self.ignore) for c in ranked)
        )
        return await self._filter([item for group in groups for item in group])

    async def get_symbol_context_items(
        self,
        query: str,
        max_results: int | None = None,
        repository_names: Sequence[str] | None = None,
    ) -> list[ContextItemSymbol]:
        """Symbols matching ``query`` (a leading ``#`` is ignored), best first."""
        query = normalize_symbol_query(query, self.search_config.symbol_trigger)
        if max_results is None:
            max_results = self.search_config.max_symbol_results

        if repository_names is not None:
            if self._remote_symbols is None:
                logger.warning("Remote repositories given but no remote client is configured")
                return []
            return await search_remote_symbols(
                self._remote_symbols, repository_names, query, self.ignore
            )

        if self.symbols is None:
            return []

        # The editor cannot cancel this lookup; only our wait is cancellable
        found = await run_detached(
            self.symbols.workspace_symbols(query), name="mentionkit-workspace-symbols"
        )
        relevant = filter_workspace_symbols(found, self.search_config.vendor_path_markers)
        ranked = rank_symbols(query, relevant, max_results)
        if not ranked:
            return []

        groups = await asyncio.gather(
            *(
                new_symbol_item(
                    c.obj.uri,
                    ContextItemSource.USER,
                    self.ignore,
                    c.obj.range,
                    symbol_item_kind(c.obj.kind),
                    c.obj.name,
                )
                for c in ranked
            )
        )
        return [item for group in groups for item in group]

    async def get_open_tabs_context_items(self) -> list[ContextItemFile]:
        """File items for every open editor tab, size-gated."""
        if self.editor is None:
            return []
        uris = [uri for uri in self.editor.open_tab_uris() if not self.ignore.is_path_ignored(uri)]
        groups = await asyncio.gather(
            *(new_file_item(uri, ContextItemSource.USER, self.ignore) for uri in uris)
        )
        return await self._filter([item for group in groups for item in group])

    async def _filter(self, items: list[ContextItemFile]) -> list[ContextItemFile]:
        config = self.eligibility_config
        return await filter_context_item_files(
            items,
            self.stat,
            max_bytes=config.max_file_bytes,
            markdown_extensions=config.markdown_extensions,
            markdown_divisor=config.markdown_bytes_per_token,
            default_divisor=config.default_bytes_per_token,
        )
