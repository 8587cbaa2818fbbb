"""Exact token counting with tiktoken."""

import logging
from functools import lru_cache

import tiktoken

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "cl100k_base"


@lru_cache(maxsize=8)
def _get_encoding(name: str) -> tiktoken.Encoding:
    logger.debug("Loading tiktoken encoding %s", name)
    return tiktoken.get_encoding(name)


class TiktokenCounter:
    """Counts tokens the way the model's tokenizer does.

    The encoding is loaded on first use and shared between instances.

    Example:
        >>> TiktokenCounter().count_tokens("hello world")
        2
    """

    def __init__(self, encoding: str = DEFAULT_ENCODING) -> None:
        self.encoding = encoding

    def count_tokens(self, text: str) -> int:
        if not text:
            return 0
        return len(_get_encoding(self.encoding).encode(text, disallowed_special=()))
