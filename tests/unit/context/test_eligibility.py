"""Tests for the size/type gate."""

import pytest
from conftest import FakeWorkspace, repo_uri

from mentionkit.context.eligibility import (
    MAX_FILE_BYTES,
    estimate_tokens_from_bytes,
    filter_context_item_files,
)
from mentionkit.context.types import ContextItemFile, ContextItemSymbol


def file_item(path: str) -> ContextItemFile:
    return ContextItemFile(uri=repo_uri(path))


class TestEstimateTokens:
    def test_markdown_uses_smaller_divisor(self) -> None:
        assert estimate_tokens_from_bytes("README.md", 35) == 10
        assert estimate_tokens_from_bytes("main.py", 45) == 10

    def test_rounds_down(self) -> None:
        assert estimate_tokens_from_bytes("main.py", 44) == 9


class TestFilterContextItemFiles:
    @pytest.mark.asyncio
    async def test_size_boundary(self, workspace: FakeWorkspace) -> None:
        workspace.sizes = {"limit.py": MAX_FILE_BYTES, "over.py": MAX_FILE_BYTES + 1}

        kept = await filter_context_item_files(
            [file_item("limit.py"), file_item("over.py")], workspace
        )

        assert [item.uri for item in kept] == [repo_uri("limit.py")]
        assert kept[0].size == int(MAX_FILE_BYTES / 4.5)

    @pytest.mark.asyncio
    async def test_directories_and_missing_files_dropped(self, workspace: FakeWorkspace) -> None:
        workspace.directories = {"src"}
        workspace.files = {"a.py": "x = 1\n"}

        kept = await filter_context_item_files(
            [file_item("src"), file_item("gone.py"), file_item("a.py")], workspace
        )

        assert [item.uri for item in kept] == [repo_uri("a.py")]

    @pytest.mark.asyncio
    async def test_non_file_items_dropped(self, workspace: FakeWorkspace) -> None:
        workspace.files = {"a.py": "x"}
        symbol = ContextItemSymbol(uri=repo_uri("a.py"), symbol_name="x", kind="function")

        assert await filter_context_item_files([symbol], workspace) == []

    @pytest.mark.asyncio
    async def test_preserves_order_and_replaces_size(self, workspace: FakeWorkspace) -> None:
        workspace.sizes = {"b.md": 70, "a.py": 90}
        items = [
            ContextItemFile(uri=repo_uri("b.md"), size=999),
            ContextItemFile(uri=repo_uri("a.py")),
        ]

        kept = await filter_context_item_files(items, workspace)

        assert [(item.uri, item.size) for item in kept] == [
            (repo_uri("b.md"), 20),
            (repo_uri("a.py"), 20),
        ]
