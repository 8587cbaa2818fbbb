"""Pytest fixtures for mentionkit tests.

Every collaborator protocol has an in-memory fake here. Fakes record the
calls they receive so tests can assert on coalescing and reuse.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from mentionkit.context.types import Range
from mentionkit.foundation.config import reset_config
from mentionkit.openctx import Annotation, ItemsRequest, ProviderItem
from mentionkit.protocols import (
    FileStat,
    FileType,
    RemoteFileMatch,
    RemoteSymbolMatch,
    WorkspaceSymbol,
)

ROOT_URI = "file:///repo/"


def repo_uri(path: str) -> str:
    """URI of ``path`` inside the fake workspace root."""
    return ROOT_URI + path


@dataclass
class FakeWorkspace:
    """FileFinder, FileStatProvider and Editor over in-memory files."""

    files: dict[str, str] = field(default_factory=dict)
    """Relative path -> content."""

    sizes: dict[str, int] = field(default_factory=dict)
    """Relative path -> byte size override."""

    directories: set[str] = field(default_factory=set)
    open_tabs: list[str] = field(default_factory=list)
    fail_reads: set[str] = field(default_factory=set)

    find_calls: int = 0
    read_calls: list[tuple[str, Range | None]] = field(default_factory=list)

    async def find_files(self) -> list[str]:
        self.find_calls += 1
        return [repo_uri(path) for path in self.files]

    def display_path(self, uri: str) -> str:
        return uri.removeprefix(ROOT_URI)

    async def stat(self, uri: str) -> FileStat:
        path = self.display_path(uri)
        if path in self.directories:
            return FileStat(type=FileType.DIRECTORY, size=0)
        if path not in self.files and path not in self.sizes:
            raise FileNotFoundError(path)
        size = self.sizes.get(path, len(self.files.get(path, "").encode()))
        return FileStat(type=FileType.FILE, size=size)

    async def get_text_for_file(self, uri: str, range: Range | None = None) -> str:
        self.read_calls.append((uri, range))
        path = self.display_path(uri)
        if path in self.fail_reads or path not in self.files:
            raise FileNotFoundError(f"no such file: {path}")
        text = self.files[path]
        if range is None:
            return text
        lines = text.splitlines(keepends=True)
        return "".join(lines[range.start.line:range.end.line])

    def open_tab_uris(self) -> list[str]:
        return list(self.open_tabs)


@dataclass
class FakeIgnorePolicy:
    ignored_paths: set[str] = field(default_factory=set)
    flagged: dict[str, str] = field(default_factory=dict)
    ignored_repositories: set[str] = field(default_factory=set)

    def is_path_ignored(self, uri: str) -> bool:
        return uri.removeprefix(ROOT_URI) in self.ignored_paths

    async def is_uri_ignored(self, uri: str) -> bool | str:
        return self.flagged.get(uri.removeprefix(ROOT_URI), False)

    def is_repo_name_ignored(self, repository_name: str) -> bool:
        return repository_name in self.ignored_repositories


@dataclass
class FakeSymbolProvider:
    symbols: list[WorkspaceSymbol] = field(default_factory=list)
    queries: list[str] = field(default_factory=list)

    async def workspace_symbols(self, query: str) -> list[WorkspaceSymbol]:
        self.queries.append(query)
        return list(self.symbols)


@dataclass
class FakeRemoteClient:
    endpoint: str = "https://code.example.com/"
    file_matches: list[RemoteFileMatch] | Exception | str = field(default_factory=list)
    symbol_matches: list[RemoteSymbolMatch] | Exception | str = field(default_factory=list)
    contents: dict[tuple[str, str], str | Exception] = field(default_factory=dict)

    file_queries: list[tuple[list[str], str]] = field(default_factory=list)
    symbol_queries: list[tuple[list[str], str]] = field(default_factory=list)
    content_requests: list[tuple[str, str]] = field(default_factory=list)

    async def get_remote_files(self, repository_names: list[str], query: str):
        self.file_queries.append((repository_names, query))
        return self.file_matches

    async def get_remote_symbols(self, repository_names: list[str], query: str):
        self.symbol_queries.append((repository_names, query))
        return self.symbol_matches

    async def get_file_content(self, repository_name: str, path: str) -> str | Exception:
        self.content_requests.append((repository_name, path))
        result = self.contents.get((repository_name, path))
        if result is None:
            return RuntimeError(f"{repository_name}/{path} not found")
        return result


@dataclass
class FakeOpenCtxClient:
    items_by_provider: dict[str, list[ProviderItem]] = field(default_factory=dict)
    annotations_by_uri: dict[str, list[Annotation]] = field(default_factory=dict)
    annotations_error: Exception | None = None

    item_requests: list[tuple[ItemsRequest, str]] = field(default_factory=list)
    annotation_texts: list[str] = field(default_factory=list)

    async def items(self, request: ItemsRequest, provider_uri: str) -> list[ProviderItem]:
        self.item_requests.append((request, provider_uri))
        return list(self.items_by_provider.get(provider_uri, []))

    async def annotations(self, uri: str, get_text: Callable[[], str]) -> list[Annotation]:
        if self.annotations_error is not None:
            raise self.annotations_error
        self.annotation_texts.append(get_text())
        return list(self.annotations_by_uri.get(uri, []))


class WordCounter:
    """Token counter that counts whitespace-separated words."""

    def count_tokens(self, text: str) -> int:
        return len(text.split())


@dataclass
class RecordingNotifier:
    messages: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep user/project config files and MENTIONKIT_* env out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("MENTIONKIT_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def workspace() -> FakeWorkspace:
    return FakeWorkspace()


@pytest.fixture
def ignore() -> FakeIgnorePolicy:
    return FakeIgnorePolicy()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def token_counter() -> WordCounter:
    return WordCounter()


@pytest.fixture
def remote() -> FakeRemoteClient:
    return FakeRemoteClient()


@pytest.fixture
def openctx() -> FakeOpenCtxClient:
    return FakeOpenCtxClient()
