"""Collaborator protocols.

The core never talks to an editor, a filesystem or a network directly; it is
handed objects satisfying these protocols. ``mentionkit.workspace`` has
filesystem-backed implementations of the local ones.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from mentionkit.context.types import Range

Skipped = Literal["skipped"]


class FileType(Enum):
    """Kind of filesystem entry reported by ``FileStatProvider``."""

    UNKNOWN = "unknown"
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True, slots=True)
class FileStat:
    """Result of a stat call."""

    type: FileType
    size: int


class EditorSymbolKind(IntEnum):
    """Editor symbol kinds (LSP numbering)."""

    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26


@dataclass(frozen=True, slots=True)
class WorkspaceSymbol:
    """A symbol reported by the editor's workspace symbol index."""

    name: str
    kind: EditorSymbolKind
    uri: str
    range: Range | Any | None = None
    """Editor-native or canonical; normalized when the item is built."""


# --- Remote backend payloads ---


@dataclass(frozen=True, slots=True)
class RemoteRepository:
    name: str


@dataclass(frozen=True, slots=True)
class RemoteFile:
    path: str
    byte_size: int | None = None


@dataclass(frozen=True, slots=True)
class RemoteFileMatch:
    """One file hit from a remote search."""

    repository: RemoteRepository
    file: RemoteFile


@dataclass(frozen=True, slots=True)
class RemoteSymbol:
    name: str
    path: str
    """In-repository path of the file declaring the symbol."""


@dataclass(frozen=True, slots=True)
class RemoteSymbolMatch:
    """Symbols found in one repository by a remote search."""

    repository: RemoteRepository
    symbols: Sequence[RemoteSymbol] = field(default_factory=tuple)


# --- Protocols ---


@runtime_checkable
class FileFinder(Protocol):
    """Enumerates every file of every workspace root."""

    async def find_files(self) -> list[str]:
        """Return the URIs of all files. Expensive; callers throttle it."""
        ...

    def display_path(self, uri: str) -> str:
        """Render a URI relative to its owning workspace root."""
        ...


@runtime_checkable
class FileStatProvider(Protocol):
    async def stat(self, uri: str) -> FileStat:
        """Stat a resource. Raises on missing or unreadable entries."""
        ...


@runtime_checkable
class WorkspaceSymbolProvider(Protocol):
    async def workspace_symbols(self, query: str) -> list[WorkspaceSymbol] | None:
        """Look up symbols across the workspace. Not cancellable."""
        ...


@runtime_checkable
class Editor(Protocol):
    async def get_text_for_file(self, uri: str, range: Range | None = None) -> str:
        """Return the text of a file, limited to ``range`` when given."""
        ...

    def open_tab_uris(self) -> list[str]:
        """URIs of the files open in editor tabs."""
        ...


@runtime_checkable
class IgnorePolicy(Protocol):
    def is_path_ignored(self, uri: str) -> bool:
        """Path-based ignore check (ignore files, deny globs)."""
        ...

    async def is_uri_ignored(self, uri: str) -> bool | str:
        """Content-filter check; may consult repository level policy.

        Returns False, True, or a truthy reason string.
        """
        ...

    def is_repo_name_ignored(self, repository_name: str) -> bool:
        """Repository-name based check for remote results."""
        ...


@runtime_checkable
class RemoteSearchClient(Protocol):
    """Remote code-search backend.

    Search methods may raise, return an exception instance, or return
    ``"skipped"``; every such outcome is treated as "no results".
    """

    @property
    def endpoint(self) -> str:
        """Base URL used to build blob links, ending with ``/``."""
        ...

    async def get_remote_files(
        self, repository_names: list[str], query: str
    ) -> list[RemoteFileMatch] | Exception | Skipped:
        ...

    async def get_remote_symbols(
        self, repository_names: list[str], query: str
    ) -> list[RemoteSymbolMatch] | Exception | Skipped:
        ...

    async def get_file_content(self, repository_name: str, path: str) -> str | Exception:
        ...


@runtime_checkable
class TokenCounter(Protocol):
    def count_tokens(self, text: str) -> int:
        ...


@runtime_checkable
class Notifier(Protocol):
    """User-visible, non-fatal notices."""

    def warn(self, message: str) -> None:
        ...
