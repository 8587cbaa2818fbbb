"""Mention search: local fuzzy ranking or remote delegation."""

from mentionkit.search.remote import remote_uri, search_remote_files, search_remote_symbols
from mentionkit.search.service import ContextSearch

__all__ = [
    "ContextSearch",
    "remote_uri",
    "search_remote_files",
    "search_remote_symbols",
]
