"""Filesystem-backed workspace.

Implements the local collaborator protocols (``FileFinder``,
``FileStatProvider`` and ``Editor``) over one or more directories on disk.
Blocking filesystem work runs in a worker thread.
"""

import asyncio
import logging
import os
import stat as stat_module
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from mentionkit.context.types import Position, Range
from mentionkit.context.uri import file_uri, uri_fs_path
from mentionkit.foundation.errors import ErrorCode, io_error
from mentionkit.foundation.types.config import WorkspaceConfig
from mentionkit.protocols import FileStat, FileType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocalWorkspace:
    """A set of workspace roots on the local filesystem.

    Example:
        >>> ws = LocalWorkspace.from_config([Path(".")], WorkspaceConfig())
        >>> uris = await ws.find_files()
        >>> ws.display_path(uris[0])
        'src/app.py'
    """

    roots: tuple[Path, ...]
    """Workspace roots; display paths are relative to the owning root."""

    exclude: tuple[str, ...] = field(default_factory=lambda: WorkspaceConfig().exclude)
    """Directory names pruned while walking."""

    open_tabs: list[str] = field(default_factory=list)
    """URIs reported as open editor tabs."""

    def __post_init__(self) -> None:
        resolved = []
        for root in self.roots:
            path = Path(root).expanduser().resolve()
            if not path.is_dir():
                raise io_error(ErrorCode.WORKSPACE_NOT_FOUND, str(path))
            resolved.append(path)
        self.roots = tuple(resolved)

    @classmethod
    def from_config(
        cls,
        roots: Iterable[Path | str],
        config: WorkspaceConfig,
        open_tabs: Sequence[str] = (),
    ) -> "LocalWorkspace":
        return cls(
            roots=tuple(Path(r) for r in roots),
            exclude=config.exclude,
            open_tabs=list(open_tabs),
        )

    # --- FileFinder ---

    async def find_files(self) -> list[str]:
        """URIs of every file under every root, excluded directories pruned."""
        return await asyncio.to_thread(self._walk)

    def _walk(self) -> list[str]:
        excluded = set(self.exclude)
        uris: list[str] = []
        for root in self.roots:
            for dirpath, dirnames, filenames in os.walk(root, onerror=self._log_walk_error):
                dirnames[:] = sorted(d for d in dirnames if d not in excluded)
                for name in sorted(filenames):
                    uris.append(file_uri(Path(dirpath, name)))
        logger.debug("Enumerated %d files under %d root(s)", len(uris), len(self.roots))
        return uris

    @staticmethod
    def _log_walk_error(error: OSError) -> None:
        logger.warning("Error scanning %s: %s", error.filename, error)

    def owning_root(self, uri: str) -> Path | None:
        """The most specific root containing ``uri``, if any."""
        path = Path(uri_fs_path(uri))
        candidates = [root for root in self.roots if path.is_relative_to(root)]
        return max(candidates, key=lambda r: len(r.parts), default=None)

    def display_path(self, uri: str) -> str:
        """Path of ``uri`` relative to its root, with native separators."""
        path = Path(uri_fs_path(uri))
        root = self.owning_root(uri)
        if root is None:
            return str(path)
        return str(path.relative_to(root))

    # --- FileStatProvider ---

    async def stat(self, uri: str) -> FileStat:
        return await asyncio.to_thread(self._stat, uri_fs_path(uri))

    @staticmethod
    def _stat(path: str) -> FileStat:
        try:
            result = os.stat(path)
        except FileNotFoundError as e:
            raise io_error(ErrorCode.FILE_NOT_FOUND, path, cause=e) from e
        except OSError as e:
            raise io_error(ErrorCode.FILE_STAT_FAILED, path, str(e), cause=e) from e

        if stat_module.S_ISREG(result.st_mode):
            file_type = FileType.FILE
        elif stat_module.S_ISDIR(result.st_mode):
            file_type = FileType.DIRECTORY
        else:
            file_type = FileType.UNKNOWN
        return FileStat(type=file_type, size=result.st_size)

    # --- Editor ---

    async def get_text_for_file(self, uri: str, range: Range | None = None) -> str:
        """Read a file as UTF-8, limited to ``range`` when given."""
        path = uri_fs_path(uri)
        text = await asyncio.to_thread(self._read, path)
        if range is None:
            return text
        return slice_text(text, range)

    @staticmethod
    def _read(path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError as e:
            raise io_error(ErrorCode.FILE_NOT_FOUND, path, cause=e) from e
        except OSError as e:
            raise io_error(ErrorCode.FILE_READ_FAILED, path, str(e), cause=e) from e

    def open_tab_uris(self) -> list[str]:
        return list(self.open_tabs)


def slice_text(text: str, range: Range) -> str:
    """Text between two positions; out-of-bounds positions are clamped.

    Example:
        >>> slice_text("a\\nb\\nc\\n", Range.lines(1, 2))
        'b\\n'
    """
    lines = text.splitlines(keepends=True)

    def offset(position: Position) -> int:
        line = min(position.line, len(lines))
        base = sum(len(text_line) for text_line in lines[:line])
        if line == len(lines):
            return base
        content = lines[line].rstrip("\r\n")
        return base + min(position.character, len(content))

    start, end = offset(range.start), offset(range.end)
    return text[start:max(start, end)]
