#!/usr/bin/env python3
"""Install the prepare-commit-msg hook into a git repository."""

import shlex
import sys
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from loguru import logger

from submodule_hook.errors import HookInstallError

HOOK_NAME = "prepare-commit-msg"
HOOK_MARKER = "# Installed by submodule-hook"


def get_hooks_dir(project_root: Path) -> Path:
    """Resolve the hooks directory git will actually run hooks from.

    Honours ``core.hooksPath`` and linked worktrees.
    """
    try:
        repo = Repo(project_root, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise HookInstallError(f"Not a git repository: {project_root}") from e

    try:
        hooks_path = Path(repo.git.rev_parse("--git-path", "hooks"))
    except GitCommandError as e:
        raise HookInstallError(f"Cannot locate hooks directory: {e.stderr.strip()}") from e
    finally:
        repo.close()

    if not hooks_path.is_absolute():
        base = Path(repo.working_tree_dir or repo.git_dir)
        hooks_path = base / hooks_path
    return hooks_path


def create_hook_script(python: str = sys.executable) -> str:
    """Shell script that runs the hook module under ``python``."""
    return (
        "#!/bin/sh\n"
        f"{HOOK_MARKER}\n"
        f'exec {shlex.quote(python)} -m submodule_hook.hooks.hook_script "$@"\n'
    )


def is_our_hook(hook_file: Path) -> bool:
    try:
        return HOOK_MARKER in hook_file.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def install_hook(project_root: Path, force: bool = False) -> Path:
    """Write the hook script and make it executable.

    Args:
        project_root: Any path inside the target repository
        force: Overwrite a prepare-commit-msg hook that was not installed by us

    Returns:
        Path of the installed hook
    """
    hooks_dir = get_hooks_dir(project_root)
    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_file = hooks_dir / HOOK_NAME

    if hook_file.exists() and not is_our_hook(hook_file) and not force:
        raise HookInstallError(
            f"{hook_file} already exists and was not installed by submodule-hook. "
            "Use --force to overwrite it."
        )

    hook_file.write_text(create_hook_script(), encoding="utf-8")
    hook_file.chmod(0o755)
    logger.info(f"Installed {HOOK_NAME} hook at {hook_file}")
    return hook_file


def uninstall_hook(project_root: Path) -> bool:
    """Remove our hook.

    Returns:
        True if a hook was removed, False if none was installed
    """
    hook_file = get_hooks_dir(project_root) / HOOK_NAME
    if not hook_file.exists():
        return False
    if not is_our_hook(hook_file):
        raise HookInstallError(f"{hook_file} was not installed by submodule-hook, leaving it alone")

    hook_file.unlink()
    logger.info(f"Removed {HOOK_NAME} hook from {hook_file.parent}")
    return True
