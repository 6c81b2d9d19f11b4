"""Turn a submodule change into the lines shown under its header."""

from typing import List

from submodule_hook.config import HookConfig
from submodule_hook.core.gateway import GitGateway
from submodule_hook.models import ChangeBlock, ChangeType, CommitLogEntry, SubmoduleChange

INDENT = "    "


def format_commit_line(entry: CommitLogEntry, hash_length: int) -> str:
    if hash_length == 0:
        return f"{INDENT} {entry.subject}"
    return f"{INDENT}{entry.short_revision(hash_length)} {entry.subject}"


def format_commit_lines(entries: List[CommitLogEntry], config: HookConfig) -> List[str]:
    """Format newest-first ``entries``, truncated to ``config.max_commits_shown``."""
    limit = config.max_commits_shown
    shown = entries if limit is None else entries[:limit]

    lines = [format_commit_line(entry, config.hash_length) for entry in shown]
    hidden = len(entries) - len(shown)
    if hidden > 0:
        lines.append(f"{INDENT}... +{hidden} more")
    return lines


def format_submodule_change(
    gateway: GitGateway, change: SubmoduleChange, config: HookConfig
) -> ChangeBlock:
    """Build the display block for one changed submodule.

    Added and removed submodules get a single status line; modified ones list
    the commits the new pointer brings in.
    """
    if change.change_type is ChangeType.ADDED:
        return ChangeBlock(path=change.path, lines=[f"{INDENT}Added"])
    if change.change_type is ChangeType.REMOVED:
        return ChangeBlock(path=change.path, lines=[f"{INDENT}Removed"])

    entries = gateway.list_commits(change.path, change.old.revision, change.new.revision)
    return ChangeBlock(path=change.path, lines=format_commit_lines(entries, config))
