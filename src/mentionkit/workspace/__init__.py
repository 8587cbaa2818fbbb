"""Local reference collaborators: filesystem workspace and glob ignore policy."""

from mentionkit.workspace.ignore import GlobIgnorePolicy
from mentionkit.workspace.local import LocalWorkspace, slice_text

__all__ = [
    "GlobIgnorePolicy",
    "LocalWorkspace",
    "slice_text",
]
