"""Ranking types."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RankedCandidate(Generic[T]):
    """A search hit with its final score and tie-break key.

    Only lives inside a ranking pass; discarded after truncation.
    """

    obj: T
    score: float
    key: str
    """Relative path (files) or symbol name (symbols)."""
