"""Data models for submodule-hook."""

from .change import ChangeType, SubmoduleChange, SubmodulePointer
from .commit import ChangeBlock, CommitLogEntry
from .message import MessageSections

__all__ = [
    "ChangeType",
    "SubmoduleChange",
    "SubmodulePointer",
    "CommitLogEntry",
    "ChangeBlock",
    "MessageSections",
]
