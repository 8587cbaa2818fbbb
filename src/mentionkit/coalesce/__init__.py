"""Request coalescing.

- Throttle: one run of an expensive zero-argument call per window, shared.
- Debounce: one run per burst of calls, with the latest arguments.
- run_detached: await work that caller cancellation must not interrupt.

Instances hold their own timers and cached results; create them once and
pass them to whoever needs them (see ``mentionkit.search.ContextSearch``).
"""

from mentionkit.coalesce.debounce import SKIPPED, Debounce
from mentionkit.coalesce.detached import run_detached, spawn
from mentionkit.coalesce.throttle import Throttle

__all__ = [
    "SKIPPED",
    "Debounce",
    "Throttle",
    "run_detached",
    "spawn",
]
