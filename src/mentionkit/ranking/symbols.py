"""Local fuzzy ranking of workspace symbols."""

from collections.abc import Iterable, Sequence

from mentionkit.context.types import SymbolKind
from mentionkit.context.uri import uri_fs_path
from mentionkit.protocols import EditorSymbolKind, WorkspaceSymbol
from mentionkit.ranking.collation import natural_sort_key
from mentionkit.ranking.fuzzy import score
from mentionkit.ranking.types import RankedCandidate

RELEVANT_SYMBOL_KINDS: frozenset[EditorSymbolKind] = frozenset({
    EditorSymbolKind.FUNCTION,
    EditorSymbolKind.METHOD,
    EditorSymbolKind.CLASS,
    EditorSymbolKind.INTERFACE,
    EditorSymbolKind.ENUM,
    EditorSymbolKind.STRUCT,
    EditorSymbolKind.CONSTANT,
    # TS reports `export const` as a variable
    EditorSymbolKind.VARIABLE,
})


def normalize_symbol_query(query: str, trigger: str = "#") -> str:
    """Trim the query and strip one leading trigger character."""
    query = query.strip()
    if trigger and query.startswith(trigger):
        query = query[len(trigger):]
    return query


def is_vendored(uri: str, markers: Sequence[str]) -> bool:
    path = uri_fs_path(uri).replace("\\", "/")
    return any(marker in path for marker in markers)


def filter_workspace_symbols(
    symbols: Iterable[WorkspaceSymbol] | None,
    vendor_markers: Sequence[str] = ("node_modules/",),
) -> list[WorkspaceSymbol]:
    """Keep relevant symbol kinds declared outside vendored code."""
    if not symbols:
        return []
    return [
        symbol
        for symbol in symbols
        if symbol.kind in RELEVANT_SYMBOL_KINDS and not is_vendored(symbol.uri, vendor_markers)
    ]


def rank_symbols(
    query: str,
    symbols: Sequence[WorkspaceSymbol],
    max_results: int,
) -> list[RankedCandidate[WorkspaceSymbol]]:
    """Rank symbols by name.

    Unlike files there is no score floor: every match is kept. An empty
    query matches every symbol with score 0, in provider order.
    """
    ranked: list[tuple[float, tuple, int, WorkspaceSymbol]] = []
    for index, symbol in enumerate(symbols):
        s = score(query, symbol.name)
        if s is None:
            continue
        ranked.append((s, natural_sort_key(symbol.name) if query else ((), ""), index, symbol))

    ranked.sort(key=lambda entry: (-entry[0], entry[1], entry[2]))
    return [
        RankedCandidate(obj=symbol, score=s, key=symbol.name)
        for s, _, _, symbol in ranked[:max_results]
    ]


def symbol_item_kind(kind: EditorSymbolKind) -> SymbolKind:
    """Map an editor symbol kind onto the kinds context items support."""
    return "class" if kind == EditorSymbolKind.CLASS else "function"
