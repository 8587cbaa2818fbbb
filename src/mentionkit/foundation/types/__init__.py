"""Shared type definitions for the foundation layer."""

from mentionkit.foundation.types.config import (
    EligibilityConfig,
    SearchConfig,
    TokenConfig,
    WorkspaceConfig,
)

__all__ = [
    "EligibilityConfig",
    "SearchConfig",
    "TokenConfig",
    "WorkspaceConfig",
]
