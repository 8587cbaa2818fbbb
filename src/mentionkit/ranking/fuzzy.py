"""Approximate subsequence scoring.

Scores are <= 0: an exact (case-insensitive) match scores 0 and every
deviation costs something. A target that does not contain the query's
characters in order is not a match at all (``None``).
Whitespace separates independent words; every word must match and the
word scores add up.

Three alignments of the query in the target are tried and the best kept:

- greedy: each query character at its earliest position after the last one
- word starts: runs that begin at the start of a word (after a separator, or
  at a camelCase hump)
- substring: the first contiguous occurrence

Costs:
- every target character skipped between the first and last match
- every extra run of consecutive matches (cheaper when the run starts a word)
- a late first match
- target characters left unmatched overall (so shorter targets win ties)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

_GAP_COST = 1.0
_RUN_COST = 5.0
_WORD_RUN_COST = 2.0
_LATE_START_COST = 0.5
_UNMATCHED_COST = 0.1


@dataclass(frozen=True, slots=True)
class FuzzyResult(Generic[T]):
    """A matched object and its score."""

    obj: T
    score: float


def _word_starts(target: str) -> frozenset[int]:
    starts = set()
    for i, ch in enumerate(target):
        if not ch.isalnum():
            continue
        if i == 0:
            starts.add(i)
            continue
        prev = target[i - 1]
        if not prev.isalnum():
            starts.add(i)
        elif prev.islower() and ch.isupper():
            starts.add(i)
        elif prev.isalpha() != ch.isalpha():
            starts.add(i)
    return frozenset(starts)


def _greedy(query: str, target: str) -> list[int] | None:
    indexes = []
    pos = 0
    for ch in query:
        found = target.find(ch, pos)
        if found < 0:
            return None
        indexes.append(found)
        pos = found + 1
    return indexes


def _at_word_starts(query: str, target: str, starts: frozenset[int]) -> list[int] | None:
    ordered = sorted(starts)
    indexes: list[int] = []
    for ch in query:
        if indexes and indexes[-1] + 1 < len(target) and target[indexes[-1] + 1] == ch:
            indexes.append(indexes[-1] + 1)
            continue
        after = indexes[-1] + 1 if indexes else 0
        nxt = next(
            (i for i in ordered if i >= after and target[i] == ch),
            None,
        )
        if nxt is None:
            return None
        indexes.append(nxt)
    return indexes


def _cost(indexes: list[int], target_len: int, starts: frozenset[int]) -> float:
    cost = 0.0
    span = indexes[-1] - indexes[0] + 1
    cost += (span - len(indexes)) * _GAP_COST

    for i, idx in enumerate(indexes):
        if i == 0 or idx != indexes[i - 1] + 1:
            if i > 0:
                cost += _WORD_RUN_COST if idx in starts else _RUN_COST

    if indexes[0] not in starts:
        cost += indexes[0] * _LATE_START_COST
    else:
        cost += indexes[0] * _LATE_START_COST / 4

    cost += (target_len - len(indexes)) * _UNMATCHED_COST
    return cost


def score(query: str, target: str) -> float | None:
    """Score ``target`` against ``query``; ``None`` when it does not match.

    A query with several whitespace-separated words matches only when every
    word matches; its score is the sum of the word scores. The empty query
    matches everything with score 0.

    Example:
        >>> score("abc", "abc")
        0.0
        >>> score("ctx", "src/context.py") < 0
        True
        >>> score("zz", "src/context.py") is None
        True
        >>> score("ctx types", "src/context/types.py") < 0
        True
    """
    total = 0.0
    for word in query.split():
        word_score = _score_word(word, target)
        if word_score is None:
            return None
        total += word_score
    return total


def _score_word(word: str, target: str) -> float | None:
    q = word.lower()
    t = target.lower()
    if q == t:
        return 0.0

    greedy = _greedy(q, t)
    if greedy is None:
        return None

    # Lowercasing can change the length of some non-ASCII strings
    starts = _word_starts(target if len(target) == len(t) else t)
    alignments = [greedy]
    words = _at_word_starts(q, t, starts)
    if words is not None:
        alignments.append(words)
    first = t.find(q)
    if first >= 0:
        alignments.append(list(range(first, first + len(q))))

    best = min(_cost(a, len(t), starts) for a in alignments)
    return -best


def fuzzy_filter(
    query: str,
    objects: Iterable[T],
    key: Callable[[T], str],
    *,
    threshold: float | None = None,
) -> list[FuzzyResult[T]]:
    """Score every object by ``key(obj)``; keep matches above ``threshold``.

    Results keep the input order; ranking is the caller's job.
    """
    results = []
    for obj in objects:
        s = score(query, key(obj))
        if s is None:
            continue
        if threshold is not None and s <= threshold:
            continue
        results.append(FuzzyResult(obj=obj, score=s))
    return results
