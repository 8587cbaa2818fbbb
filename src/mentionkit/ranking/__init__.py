"""Fuzzy ranking of files and symbols.

Scoring is approximate; ordering is not. Every ranker sorts by score and
then by a natural-order key, so repeated calls with the same input give the
same output.
"""

from mentionkit.ranking.collation import natural_sort_key
from mentionkit.ranking.files import path_segments, rank_files
from mentionkit.ranking.fuzzy import FuzzyResult, fuzzy_filter, score
from mentionkit.ranking.symbols import (
    RELEVANT_SYMBOL_KINDS,
    filter_workspace_symbols,
    normalize_symbol_query,
    rank_symbols,
    symbol_item_kind,
)
from mentionkit.ranking.types import RankedCandidate

__all__ = [
    "FuzzyResult",
    "RELEVANT_SYMBOL_KINDS",
    "RankedCandidate",
    "filter_workspace_symbols",
    "fuzzy_filter",
    "natural_sort_key",
    "normalize_symbol_query",
    "path_segments",
    "rank_files",
    "rank_symbols",
    "score",
    "symbol_item_kind",
]
