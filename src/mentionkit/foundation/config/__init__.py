"""Configuration management for mentionkit."""

from mentionkit.foundation.config.loader import (
    MentionkitConfig,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)

__all__ = [
    "MentionkitConfig",
    "get_config",
    "load_config",
    "reset_config",
    "save_default_config",
]
