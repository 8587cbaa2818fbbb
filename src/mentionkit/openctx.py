"""Mention/annotation provider contract.

Providers follow the OpenCtx shape: ``items()`` answers a mention with
provider items, ``annotations()`` attaches items to line ranges of a file.
Only items carrying AI-ready content are ever turned into context.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mentionkit.context.types import Range

OPENCTX_PROVIDER = "openctx"
"""Value of ``ContextItem.provider`` for provider-owned items."""


@dataclass(frozen=True, slots=True)
class Mention:
    """Provider-specific pointer carried by a provider item."""

    uri: str
    title: str | None = None
    description: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AIContent:
    """Content meant for the model rather than for display."""

    content: str | None = None


@dataclass(frozen=True, slots=True)
class ProviderItem:
    """A single item returned by a provider."""

    title: str
    url: str | None = None
    ai: AIContent | None = None
    provider_uri: str = ""
    """Filled in by the client with the answering provider."""

    @property
    def ai_content(self) -> str | None:
        return self.ai.content if self.ai is not None else None


@dataclass(frozen=True, slots=True)
class ItemsRequest:
    """Query sent to ``OpenCtxClient.items``."""

    message: str
    mention: Mention


@dataclass(frozen=True, slots=True)
class Annotation:
    """A provider item attached to a span of a file."""

    uri: str
    provider_uri: str
    item: ProviderItem
    range: Range | Any | None = None
    """Canonical or editor-native range; normalized by the resolver."""


@runtime_checkable
class OpenCtxClient(Protocol):
    """Client for external mention/annotation providers."""

    async def items(self, request: ItemsRequest, provider_uri: str) -> list[ProviderItem]:
        """Resolve a mention into provider items."""
        ...

    async def annotations(self, uri: str, get_text: Callable[[], str]) -> list[Annotation]:
        """Return annotations for a file.

        ``get_text`` returns the (possibly range-limited) text that was
        resolved for the file, so providers do not read it again.
        """
        ...
