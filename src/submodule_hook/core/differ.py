"""Gitlink change detection between the parent commit and the staged index."""

from typing import List, Optional

from loguru import logger

from submodule_hook.core.gateway import GitGateway
from submodule_hook.models import SubmoduleChange, SubmodulePointer


def diff_gitlinks(gateway: GitGateway, parent: Optional[str]) -> List[SubmoduleChange]:
    """Find submodules whose pointer differs between ``parent`` and the index.

    Args:
        gateway: Gateway for the outer repository
        parent: Parent commit of the commit being authored, or None for a root commit

    Returns:
        Changes in declaration order: staged ``.gitmodules`` paths first, then
        paths only the parent still declares
    """
    staged_paths = gateway.declared_submodule_paths(None)
    parent_paths = gateway.declared_submodule_paths(parent) if parent else []

    paths = staged_paths + [path for path in parent_paths if path not in staged_paths]
    if not paths:
        logger.debug("No submodules declared, nothing to compare")
        return []

    new_pointers = gateway.gitlink_pointers(None, paths)
    old_pointers = gateway.gitlink_pointers(parent, paths) if parent else {}

    changes = []
    for path in paths:
        old_rev = old_pointers.get(path)
        new_rev = new_pointers.get(path)
        if old_rev == new_rev:
            continue
        changes.append(
            SubmoduleChange(
                path=path,
                old=SubmodulePointer(path=path, revision=old_rev) if old_rev else None,
                new=SubmodulePointer(path=path, revision=new_rev) if new_rev else None,
            )
        )

    logger.debug(f"{len(changes)} of {len(paths)} submodules changed since {parent[:8] if parent else 'root'}")
    return changes
