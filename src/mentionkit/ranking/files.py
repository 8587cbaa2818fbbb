"""Local fuzzy ranking of workspace files.

Editors only offer exact glob search, so fuzzy file search is rebuilt here
on top of the full list of workspace files.
"""

import logging
import re
from collections.abc import Callable, Iterable, Sequence

from mentionkit.ranking.collation import natural_sort_key
from mentionkit.ranking.fuzzy import fuzzy_filter
from mentionkit.ranking.types import RankedCandidate

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = -100_000
"""Score floor. Set for performance only; long deep paths must still pass."""

DEFAULT_LOW_SCORING_SEGMENTS: tuple[str, ...] = ("bin",)
"""Segments that may be real code (Dart's ``bin/``) or build output (.NET's)."""

DEFAULT_PENALTY = 100_000

_SEPARATORS = re.compile(r"[/\\]")


def path_segments(path: str) -> list[str]:
    """Split a path on either separator, dropping empty segments."""
    return [segment for segment in _SEPARATORS.split(path) if segment]


def low_scoring_penalty(
    relative_path: str,
    query: str,
    low_scoring_segments: Sequence[str],
    penalty: float,
) -> float:
    """Penalty for a path containing a low-scoring segment the query lacks."""
    segments = path_segments(relative_path)
    for segment in low_scoring_segments:
        if segment in segments and segment not in query:
            return penalty
    return 0.0


def rank_files(
    query: str,
    uris: Iterable[str],
    max_results: int,
    *,
    display_path: Callable[[str], str],
    threshold: float = DEFAULT_THRESHOLD,
    low_scoring_segments: Sequence[str] = DEFAULT_LOW_SCORING_SEGMENTS,
    penalty: float = DEFAULT_PENALTY,
    windows: bool = False,
) -> list[RankedCandidate[str]]:
    """Rank file URIs against a query.

    Args:
        query: User query; blank queries return no results
        uris: Every candidate file URI
        max_results: Result cap, applied after sorting
        display_path: Renders a URI relative to its workspace root; this is
            what the query is matched against
        threshold: Matches scoring at or below this are discarded
        low_scoring_segments: Segments penalized unless the query names them
        penalty: Score subtracted for a low-scoring segment
        windows: Map ``/`` in the query to ``\\`` to match native paths

    Returns:
        Candidates ordered by score (desc), then relative path in natural
        order, then URI. The order is total, so identical inputs always
        give identical output.
    """
    query = query.strip()
    if not query:
        return []

    if windows:
        query = query.replace("/", "\\")

    relative = {uri: display_path(uri) for uri in uris}
    matches = fuzzy_filter(query, relative, key=relative.__getitem__, threshold=threshold)

    ranked = [
        RankedCandidate(
            obj=match.obj,
            score=match.score
            - low_scoring_penalty(relative[match.obj], query, low_scoring_segments, penalty),
            key=relative[match.obj],
        )
        for match in matches
    ]
    ranked.sort(key=lambda c: (-c.score, natural_sort_key(c.key), c.obj))

    logger.debug(
        "Ranked %d of %d files for %r (cap %d)", len(ranked), len(relative), query, max_results
    )
    return ranked[:max_results]
