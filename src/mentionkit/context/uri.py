"""Helpers for the string URIs carried by context items.

Items hold plain ``str`` URIs. Local files use the ``file`` scheme; remote
items use a synthetic ``file`` URI whose path is ``/<repoName><path>``.
"""

from pathlib import Path
from urllib.parse import quote, unquote, urlparse


def file_uri(path: str | Path) -> str:
    """Build a ``file://`` URI from a filesystem path.

    Relative or remote-style paths get a leading slash so that the URI path
    always starts with ``/``.
    """
    text = Path(path).as_posix() if isinstance(path, Path) else path.replace("\\", "/")
    if not text.startswith("/"):
        text = "/" + text
    return "file://" + quote(text, safe="/:@-._~!$&'()*+,;=")


def uri_path(uri: str) -> str:
    """Return the decoded path component of a URI."""
    return unquote(urlparse(uri).path)


def uri_fs_path(uri: str) -> str:
    """Return the native filesystem path for a ``file`` URI.

    Non-file URIs return their decoded path.
    """
    parsed = urlparse(uri)
    path = unquote(parsed.path)
    # file:///C:/x -> C:/x on Windows-style drive paths
    if len(path) >= 3 and path[0] == "/" and path[2] == ":":
        path = path[1:]
    return path


def split_remote_path(uri: str, repository_name: str) -> str:
    """Strip ``/<repositoryName>`` from a remote item's URI path.

    The split point is always ``len(repository_name) + 1``.
    """
    path = uri_path(uri)
    return path[len(repository_name) + 1:]
