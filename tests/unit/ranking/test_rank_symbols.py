"""Tests for workspace symbol filtering and ranking."""

from mentionkit.context.types import Range
from mentionkit.protocols import EditorSymbolKind, WorkspaceSymbol
from mentionkit.ranking.collation import natural_sort_key
from mentionkit.ranking.symbols import (
    filter_workspace_symbols,
    normalize_symbol_query,
    rank_symbols,
    symbol_item_kind,
)


def symbol(name: str, kind: EditorSymbolKind = EditorSymbolKind.FUNCTION, path: str = "src/a.ts"):
    return WorkspaceSymbol(
        name=name,
        kind=kind,
        uri=f"file:///repo/{path}",
        range=Range.lines(0, 1),
    )


class TestNormalizeSymbolQuery:
    def test_strips_whitespace_and_one_trigger(self) -> None:
        assert normalize_symbol_query("  #parse ") == "parse"
        assert normalize_symbol_query("##parse") == "#parse"
        assert normalize_symbol_query("parse") == "parse"

    def test_custom_trigger(self) -> None:
        assert normalize_symbol_query("@parse", trigger="@") == "parse"


class TestFilterWorkspaceSymbols:
    def test_keeps_relevant_kinds(self) -> None:
        symbols = [
            symbol("Parser", EditorSymbolKind.CLASS),
            symbol("parse", EditorSymbolKind.FUNCTION),
            symbol("MAX", EditorSymbolKind.VARIABLE),
            symbol("name", EditorSymbolKind.PROPERTY),
            symbol("ns", EditorSymbolKind.NAMESPACE),
        ]
        kept = filter_workspace_symbols(symbols)
        assert [s.name for s in kept] == ["Parser", "parse", "MAX"]

    def test_drops_vendored_symbols(self) -> None:
        symbols = [
            symbol("parse", path="src/parse.ts"),
            symbol("parse", path="node_modules/lib/parse.ts"),
        ]
        kept = filter_workspace_symbols(symbols)
        assert [s.uri for s in kept] == ["file:///repo/src/parse.ts"]

    def test_missing_result_is_empty(self) -> None:
        assert filter_workspace_symbols(None) == []


class TestRankSymbols:
    def test_best_match_first_and_capped(self) -> None:
        symbols = [symbol("parseConfigFile"), symbol("parse"), symbol("parser"), symbol("render")]
        ranked = rank_symbols("parse", symbols, 2)
        assert [c.key for c in ranked] == ["parse", "parser"]

    def test_no_score_floor(self) -> None:
        long_name = "p" + "x" * 500 + "arse"
        ranked = rank_symbols("parse", [symbol(long_name)], 10)
        assert len(ranked) == 1
        assert ranked[0].score < 0

    def test_empty_query_keeps_provider_order(self) -> None:
        symbols = [symbol("zeta"), symbol("alpha"), symbol("beta")]
        ranked = rank_symbols("", symbols, 10)
        assert [c.key for c in ranked] == ["zeta", "alpha", "beta"]

    def test_kind_mapping(self) -> None:
        assert symbol_item_kind(EditorSymbolKind.CLASS) == "class"
        assert symbol_item_kind(EditorSymbolKind.METHOD) == "function"
        assert symbol_item_kind(EditorSymbolKind.INTERFACE) == "function"


class TestNaturalSortKey:
    def test_numbers_compare_by_value(self) -> None:
        assert sorted(["a10.py", "a2.py", "A1.py"], key=natural_sort_key) == [
            "A1.py",
            "a2.py",
            "a10.py",
        ]

    def test_case_only_differences_are_still_ordered(self) -> None:
        assert sorted(["b.py", "B.py"], key=natural_sort_key) == ["B.py", "b.py"]
