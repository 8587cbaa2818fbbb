"""Logging setup for mentionkit entrypoints.

Library modules only call ``logging.getLogger(__name__)``. ``configure_logging``
is for the CLI, and for applications that want mentionkit's console format.

Console level, highest priority first:
    1. ``level`` argument
    2. MENTIONKIT_LOG_LEVEL (DEBUG, INFO, WARNING, ... or a number)
    3. MENTIONKIT_DEBUG=true
    4. ``debug=True`` (the ``--debug`` flag)
    5. ``debug: true`` in the config file
    6. WARNING
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

_CONSOLE_FORMAT = "%(name)s: %(message)s"
_DETAILED_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"

# asyncio reports slow callbacks and unretrieved task results at DEBUG
_QUIET_LOGGERS = ("asyncio",)

SESSION_LOG_DIR = Path(".mentionkit") / "logs"
_MAX_LOG_SESSIONS = 10


def resolve_level(level: int | str | None = None, *, debug: bool = False) -> int:
    """Console level for the given overrides, environment and config file."""
    if level is not None:
        return _parse_level(level)
    if env_level := os.environ.get("MENTIONKIT_LOG_LEVEL"):
        return _parse_level(env_level)
    if os.environ.get("MENTIONKIT_DEBUG", "").lower() in ("true", "1", "yes"):
        return logging.DEBUG
    if debug or _config_debug():
        return logging.DEBUG
    return logging.WARNING


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    if level.strip().isdigit():
        return int(level)
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.WARNING


def _config_debug() -> bool:
    # A broken config file is reported by the command that loads it
    from mentionkit.foundation.config import get_config
    from mentionkit.foundation.errors import MentionError

    try:
        return get_config().debug
    except MentionError:
        return False


def _cleanup_old_logs(log_dir: Path, max_sessions: int = _MAX_LOG_SESSIONS) -> None:
    """Delete all but the newest ``max_sessions`` session logs."""
    logs = sorted(log_dir.glob("session_*.log"), key=lambda p: p.stat().st_mtime, reverse=True)
    for old_log in logs[max_sessions:]:
        old_log.unlink(missing_ok=True)


def _open_session_log(log_dir: Path) -> logging.Handler | None:
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / datetime.now().strftime("session_%Y-%m-%d_%H-%M-%S.log")
        handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        _cleanup_old_logs(log_dir)
    except OSError as e:
        logging.getLogger(__name__).warning("Session log disabled: %s", e)
        return None

    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_DETAILED_FORMAT))
    return handler


def configure_logging(
    *,
    debug: bool = False,
    level: int | str | None = None,
    stream: TextIO | None = None,
    persist: bool = False,
) -> None:
    """Replace the root logger's handlers with mentionkit's.

    Args:
        debug: Enable DEBUG with timestamps (``--debug``)
        level: Explicit console level; beats every other source
        stream: Console stream (default: stderr)
        persist: Also record everything at DEBUG in a session log under
            ``.mentionkit/logs/``; the newest ten sessions are kept
    """
    console_level = resolve_level(level, debug=debug)
    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter(
            _DETAILED_FORMAT if console_level <= logging.DEBUG else _CONSOLE_FORMAT
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root.setLevel(console_level)

    if persist and (session_log := _open_session_log(Path.cwd() / SESSION_LOG_DIR)):
        root.addHandler(session_log)
        root.setLevel(logging.DEBUG)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured: console=%s, session log=%s",
        logging.getLevelName(console_level),
        persist,
    )
