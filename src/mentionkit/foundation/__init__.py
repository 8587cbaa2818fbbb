"""Foundation - base errors, config and logging.

Everything else in mentionkit imports from here; nothing here imports from
the rest of the package.
"""

from mentionkit.foundation.config import (
    MentionkitConfig,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)
from mentionkit.foundation.errors import (
    ErrorCode,
    MentionError,
    config_error,
    io_error,
    is_error_like,
    resolution_error,
)
from mentionkit.foundation.types import (
    EligibilityConfig,
    SearchConfig,
    TokenConfig,
    WorkspaceConfig,
)

__all__ = [
    # === Config ===
    "MentionkitConfig",
    "SearchConfig",
    "EligibilityConfig",
    "WorkspaceConfig",
    "TokenConfig",
    "get_config",
    "load_config",
    "reset_config",
    "save_default_config",
    # === Errors ===
    "ErrorCode",
    "MentionError",
    "config_error",
    "io_error",
    "is_error_like",
    "resolution_error",
]
