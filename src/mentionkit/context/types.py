"""Context item data model.

A context item is a typed reference that may end up in a prompt. The union
is closed: ``ContextItemFile``, ``ContextItemSymbol`` and
``ContextItemOpenCtx``. Common fields live on ``_ContextItemBase``; branch on
``item.type`` (or ``match`` on the class) wherever behavior differs.

Items are frozen. Stages that refine an item (the ignore check, the size
estimate, remote resolution) use ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal

from mentionkit.openctx import Mention

SymbolKind = Literal["class", "function", "method"]
OpenCtxKind = Literal["item", "annotation"]


class ContextItemSource(StrEnum):
    """Where a context item came from."""

    USER = "user"
    EDITOR = "editor"
    SEARCH = "search"
    INITIAL = "initial"
    UNIFIED = "unified"
    SELECTION = "selection"
    TERMINAL = "terminal"
    HISTORY = "history"
    URI = "uri"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based line/character position."""

    line: int
    character: int = 0


@dataclass(frozen=True, slots=True)
class Range:
    """Canonical half-open span between two positions."""

    start: Position
    end: Position

    @classmethod
    def lines(cls, start_line: int, end_line: int) -> Range:
        """Range from the start of ``start_line`` to the start of ``end_line``."""
        return cls(Position(start_line, 0), Position(end_line, 0))

    @classmethod
    def from_native(cls, value: Any) -> Range | None:
        """Normalize an editor-native range.

        Accepts ``None``, a ``Range``, an object with ``start``/``end``
        attributes carrying ``line``/``character``, a mapping with the same
        shape, or a pair of ``(line, character)`` tuples.

        Raises:
            TypeError: If the value has none of those shapes, or a position
                inside it is missing or not numeric.
        """
        if value is None or isinstance(value, Range):
            return value
        try:
            if isinstance(value, dict):
                return cls(_position_from(value["start"]), _position_from(value["end"]))
            if isinstance(value, (tuple, list)) and len(value) == 2:
                return cls(_position_from(value[0]), _position_from(value[1]))
            if hasattr(value, "start") and hasattr(value, "end"):
                return cls(_position_from(value.start), _position_from(value.end))
        except (KeyError, IndexError, AttributeError, ValueError) as e:
            raise TypeError(f"Malformed range {value!r}: {e!r}") from e
        raise TypeError(f"Cannot convert {type(value).__name__} to a Range")

    def contains_lines(self, other: Range) -> bool:
        """Whether ``other`` lies within this range, compared by line only."""
        return other.start.line >= self.start.line and other.end.line <= self.end.line

    def to_json(self) -> dict[str, dict[str, int]]:
        return {
            "start": {"line": self.start.line, "character": self.start.character},
            "end": {"line": self.end.line, "character": self.end.character},
        }


def _position_from(value: Any) -> Position:
    if isinstance(value, Position):
        return value
    if isinstance(value, dict):
        return Position(int(value["line"]), int(value.get("character", 0)))
    if isinstance(value, (tuple, list)):
        return Position(int(value[0]), int(value[1]) if len(value) > 1 else 0)
    return Position(int(value.line), int(getattr(value, "character", 0)))


@dataclass(frozen=True, slots=True, kw_only=True)
class _ContextItemBase:
    """Fields shared by every context item variant."""

    uri: str
    """Resource identifier (``file://`` for local and remote files)."""

    source: ContextItemSource = ContextItemSource.USER
    """Provenance tag."""

    range: Range | None = None
    """Optional span inside the resource."""

    is_ignored: bool = False
    """Set by the ignore/content filter."""

    size: int | None = None
    """Estimated (bytes based) or exact (token count) size."""

    content: str | None = None
    """Inline content supplied by the caller; reused instead of re-reading."""

    title: str | None = None

    provider: str | None = None
    """Set when a mention provider owns the item."""

    remote_repository_name: str | None = None
    """Remote repository the item was found in; its name prefixes the URI path."""

    repo_name: str | None = None
    """Repository name attached by remote content resolution."""

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type,  # type: ignore[attr-defined]
            "uri": self.uri,
            "source": self.source.value,
            "isIgnored": self.is_ignored,
        }
        if self.range is not None:
            data["range"] = self.range.to_json()
        if self.size is not None:
            data["size"] = self.size
        if self.title is not None:
            data["title"] = self.title
        if self.remote_repository_name is not None:
            data["remoteRepositoryName"] = self.remote_repository_name
        return data


@dataclass(frozen=True, slots=True, kw_only=True)
class ContextItemFile(_ContextItemBase):
    """A whole file or a range of one."""

    type: Literal["file"] = field(default="file", init=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class ContextItemSymbol(_ContextItemBase):
    """A named symbol located in a file."""

    symbol_name: str
    kind: SymbolKind
    type: Literal["symbol"] = field(default="symbol", init=False)

    def to_json(self) -> dict[str, Any]:
        data = _ContextItemBase.to_json(self)
        data["symbolName"] = self.symbol_name
        data["kind"] = self.kind
        return data


@dataclass(frozen=True, slots=True, kw_only=True)
class ContextItemOpenCtx(_ContextItemBase):
    """An item or annotation supplied by an external context provider."""

    provider_uri: str
    kind: OpenCtxKind = "item"
    mention: Mention | None = None
    type: Literal["openctx"] = field(default="openctx", init=False)

    def to_json(self) -> dict[str, Any]:
        data = _ContextItemBase.to_json(self)
        data["providerUri"] = self.provider_uri
        data["kind"] = self.kind
        return data


ContextItem = ContextItemFile | ContextItemSymbol | ContextItemOpenCtx


@dataclass(frozen=True, slots=True)
class ContextItemWithContent:
    """A context item with resolved text and its exact size.

    Only the resolver creates these; they live for one prompt build.
    """

    item: ContextItem
    content: str
    size: int

    @property
    def type(self) -> str:
        return self.item.type

    @property
    def uri(self) -> str:
        return self.item.uri

    @property
    def range(self) -> Range | None:
        return self.item.range

    def to_json(self) -> dict[str, Any]:
        data = self.item.to_json()
        data["content"] = self.content
        data["size"] = self.size
        return data
