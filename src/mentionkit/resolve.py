"""Resolve context items into content.

Every item is resolved on its own and concurrently. A failure is reported
to the user, names the item, and removes only that item from the result;
the rest of the batch is unaffected. Output order follows input order, with
any annotations placed right after the file they annotate.

Resolution paths:
- provider items: answered by the mention provider (OpenCtx)
- remote file/symbol items: fetched from the remote backend, falling back
  to local resolution when the fetch fails
- local file/symbol items: inline content, else the editor's text
- file items additionally collect annotations from the provider

Every resolved item ends up with an exact token size unless it already
carried one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from mentionkit.context.types import (
    ContextItem,
    ContextItemFile,
    ContextItemOpenCtx,
    ContextItemSource,
    ContextItemSymbol,
    ContextItemWithContent,
    Range,
)
from mentionkit.context.uri import split_remote_path
from mentionkit.foundation.errors import (
    ErrorCode,
    MentionError,
    is_error_like,
    resolution_error,
)
from mentionkit.notify import LoggingNotifier
from mentionkit.openctx import OPENCTX_PROVIDER, ItemsRequest, OpenCtxClient
from mentionkit.protocols import Editor, Notifier, RemoteSearchClient, TokenCounter

logger = logging.getLogger(__name__)

# (item, content) before sizes are finalized
_Resolved = tuple[ContextItem, str]


@dataclass(slots=True)
class ContextResolver:
    """Turns selected context items into content-bearing items.

    Example:
        >>> resolver = ContextResolver(editor=editor, token_counter=TiktokenCounter())
        >>> resolved = await resolver.resolve_context_items(items, "explain this")
    """

    editor: Editor
    token_counter: TokenCounter
    notifier: Notifier = field(default_factory=LoggingNotifier)
    remote: RemoteSearchClient | None = None
    openctx: OpenCtxClient | None = None

    async def resolve_context_items(
        self,
        items: Sequence[ContextItem],
        input_text: str,
    ) -> list[ContextItemWithContent]:
        """Resolve a batch; failed items are reported and left out.

        Args:
            items: Items in prompt order
            input_text: The user's message, forwarded to mention providers

        Returns:
            Resolved items in input order, annotations after their file.
        """

        async def resolve_one(item: ContextItem) -> list[ContextItemWithContent] | None:
            try:
                return await self.resolve_context_item(item, input_text)
            except Exception as e:
                error = resolution_error(item.uri, e)
                logger.warning("%s", error, exc_info=logger.isEnabledFor(logging.DEBUG))
                self.notifier.warn(error.message)
                return None

        results = await asyncio.gather(*(resolve_one(item) for item in items))
        return [resolved for group in results if group is not None for resolved in group]

    async def resolve_context_item(
        self,
        item: ContextItem,
        input_text: str,
    ) -> list[ContextItemWithContent]:
        """Resolve one item. Raises on failure; batch callers isolate it."""
        resolved: list[_Resolved]
        if item.provider:
            resolved = await self._resolve_provider_item(item, input_text)
        else:
            match item:
                case ContextItemFile() | ContextItemSymbol():
                    resolved = await self._resolve_file_or_symbol(item)
                case _:
                    resolved = []
        return [self._finalize(resolved_item, content) for resolved_item, content in resolved]

    def _finalize(self, item: ContextItem, content: str) -> ContextItemWithContent:
        size = item.size if item.size is not None else self.token_counter.count_tokens(content)
        return ContextItemWithContent(item=replace(item, size=size), content=content, size=size)

    async def _resolve_provider_item(
        self,
        item: ContextItem,
        input_text: str,
    ) -> list[_Resolved]:
        if not isinstance(item, ContextItemOpenCtx):
            return []

        if self.openctx is None:
            logger.debug(
                "%s Skipping %s.", MentionError(ErrorCode.PROVIDER_NOT_CONFIGURED), item.uri
            )
            return []

        if item.mention is None:
            logger.error("%s", MentionError(ErrorCode.PROVIDER_MENTION_MISSING, {"uri": item.uri}))
            return []

        mention = replace(item.mention, title=item.title)
        provider_items = await self.openctx.items(
            ItemsRequest(message=input_text, mention=mention),
            item.provider_uri,
        )

        resolved: list[_Resolved] = []
        for provider_item in provider_items:
            content = provider_item.ai_content
            if not content:
                continue
            provider_uri = provider_item.provider_uri or item.provider_uri
            resolved.append((
                ContextItemOpenCtx(
                    title=provider_item.title,
                    uri=provider_item.url or provider_uri,
                    provider_uri=provider_uri,
                    provider=OPENCTX_PROVIDER,
                    kind="item",
                    content=content,
                ),
                content,
            ))
        return resolved

    async def _resolve_file_or_symbol(
        self,
        item: ContextItemFile | ContextItemSymbol,
    ) -> list[_Resolved]:
        if item.remote_repository_name:
            remote = await self._fetch_remote(item, item.remote_repository_name)
            if remote is not None:
                return [remote]

        if item.content is not None:
            content = item.content
        else:
            content = await self.editor.get_text_for_file(item.uri, item.range)

        resolved: list[_Resolved] = [(item, content)]
        if isinstance(item, ContextItemSymbol):
            return resolved

        return resolved + await self._annotations(item, content)

    async def _fetch_remote(
        self,
        item: ContextItemFile | ContextItemSymbol,
        repository: str,
    ) -> _Resolved | None:
        if self.remote is None:
            return None

        path = split_remote_path(item.uri, repository)
        try:
            result = await self.remote.get_file_content(repository, path)
        except Exception as e:
            result = e
        if is_error_like(result):
            logger.warning(
                "%s; falling back to local content",
                MentionError(
                    ErrorCode.REMOTE_CONTENT_FAILED,
                    {"path": path, "repository": repository, "detail": str(result)},
                ),
            )
            return None

        content = str(result)
        return (
            replace(
                item,
                title=path,
                uri=f"{self.remote.endpoint}{repository}/-/blob/{path}",
                repo_name=repository,
                source=ContextItemSource.UNIFIED,
            ),
            content,
        )

    async def _annotations(self, item: ContextItemFile, content: str) -> list[_Resolved]:
        if self.openctx is None:
            return []

        try:
            annotations = await self.openctx.annotations(item.uri, lambda: content)
        except Exception as e:
            logger.error(
                "%s",
                MentionError(
                    ErrorCode.PROVIDER_ANNOTATIONS_FAILED,
                    {"uri": item.uri, "detail": str(e)},
                    cause=e,
                ),
            )
            return []

        resolved: list[_Resolved] = []
        for annotation in annotations:
            ai_content = annotation.item.ai_content
            if not ai_content:
                continue

            try:
                annotation_range = Range.from_native(annotation.range)
            except TypeError:
                logger.debug("Dropping annotation with unreadable range from %s", annotation.uri)
                continue

            # Providers only saw the range-limited text; check again anyway
            if item.range is not None:
                if annotation_range is None or not item.range.contains_lines(annotation_range):
                    continue

            resolved.append((
                ContextItemOpenCtx(
                    provider=OPENCTX_PROVIDER,
                    kind="annotation",
                    provider_uri=annotation.provider_uri,
                    uri=annotation.uri,
                    title=annotation.item.title,
                    content=ai_content,
                    range=annotation_range,
                ),
                ai_content,
            ))
        return resolved
