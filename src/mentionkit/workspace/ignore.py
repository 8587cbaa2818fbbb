"""Glob-based ignore policy."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import PurePath

from mentionkit.context.uri import uri_fs_path
from mentionkit.foundation.types.config import WorkspaceConfig

logger = logging.getLogger(__name__)


def _matches(path: str, patterns: tuple[str, ...]) -> str | None:
    """First pattern matching the relative path or its file name."""
    posix = path.replace("\\", "/")
    name = PurePath(posix).name
    for pattern in patterns:
        if fnmatch(posix, pattern) or fnmatch(name, pattern):
            return pattern
    return None


@dataclass(frozen=True, slots=True)
class GlobIgnorePolicy:
    """``IgnorePolicy`` driven by glob patterns.

    ``ignore`` patterns drop items outright; ``flag`` patterns keep them
    but mark them ``is_ignored``; ``repositories`` patterns mark remote
    results from matching repositories.
    """

    ignore: tuple[str, ...] = ()
    flag: tuple[str, ...] = ()
    repositories: tuple[str, ...] = ()
    relative_path: Callable[[str], str] = uri_fs_path
    """Maps a URI to the path patterns are matched against."""

    @classmethod
    def from_config(
        cls,
        config: WorkspaceConfig,
        relative_path: Callable[[str], str] = uri_fs_path,
    ) -> "GlobIgnorePolicy":
        return cls(
            ignore=config.ignore,
            flag=config.flag,
            repositories=config.ignored_repositories,
            relative_path=relative_path,
        )

    def is_path_ignored(self, uri: str) -> bool:
        return _matches(self.relative_path(uri), self.ignore) is not None

    async def is_uri_ignored(self, uri: str) -> bool | str:
        pattern = _matches(self.relative_path(uri), self.flag)
        if pattern is None:
            return False
        return f"matches {pattern}"

    def is_repo_name_ignored(self, repository_name: str) -> bool:
        return any(fnmatch(repository_name, pattern) for pattern in self.repositories)
