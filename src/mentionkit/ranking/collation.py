"""Natural ("numeric") ordering for paths and names.

``file2`` sorts before ``file10``; letters compare case-insensitively, and
the raw text breaks the remaining ties so the order is total.
"""

import re

_DIGITS = re.compile(r"(\d+)")


def natural_sort_key(text: str) -> tuple[tuple[str | int, ...], str]:
    """Sort key comparing digit runs by value and the rest case-insensitively.

    Example:
        >>> sorted(["a10.py", "a2.py", "A1.py"], key=natural_sort_key)
        ['A1.py', 'a2.py', 'a10.py']
    """
    parts = _DIGITS.split(text)
    # split() with a capture group alternates text/digits, starting with text
    chunks: list[str | int] = [
        int(part) if i % 2 else part.casefold() for i, part in enumerate(parts)
    ]
    return tuple(chunks), text
