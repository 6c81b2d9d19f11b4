"""prepare-commit-msg handler that adds submodule changes to the message.

Git calls the hook as ``prepare-commit-msg <file> [<source> [<sha>]]``. The
handler compares the staged gitlinks against the parent commit, formats the
submodule history that the commit brings in and splices it into ``<file>``.
"""

import os
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from loguru import logger

from submodule_hook.config import HookConfig
from submodule_hook.core.composer import BLOCK_HEADER, compose_block
from submodule_hook.core.differ import diff_gitlinks
from submodule_hook.core.formatter import format_submodule_change
from submodule_hook.core.gateway import GitGateway
from submodule_hook.core.splicer import splice_message
from submodule_hook.errors import GatewayError
from submodule_hook.logging_setup import configure_logging


AUTHOR_DATE_VAR = "GIT_AUTHOR_DATE"


def parent_command_line() -> List[str]:
    """Arguments of the process that ran the hook, or [] where /proc is unavailable."""
    try:
        raw = Path(f"/proc/{os.getppid()}/cmdline").read_bytes()
    except OSError:
        return []
    return [arg.decode("utf-8", "replace") for arg in raw.split(b"\0") if arg]


def _author_timestamp(value: str) -> Optional[int]:
    """Epoch seconds from git's internal ``@<seconds> <tz>`` date format."""
    parts = value.strip().lstrip("@").split()
    if not parts:
        return None
    try:
        return int(parts[0])
    except ValueError:
        return None


def is_amend(
    gateway: GitGateway,
    source: Optional[str],
    sha: Optional[str],
    environ: Optional[Mapping[str, str]] = None,
    command_line: Optional[Sequence[str]] = None,
) -> bool:
    """Whether git is amending HEAD.

    ``git commit --amend`` passes ``commit HEAD`` as source and sha, but
    ``--amend -m``/``-F`` pass ``message`` instead. Git exports HEAD's author
    date as ``GIT_AUTHOR_DATE`` to the hook on every amend, and the committing
    process has ``--amend`` on its command line; either is taken as the signal.
    """
    head = gateway.head_revision()
    if head is None:
        return False
    if source == "commit" and sha and gateway.resolve_revision(sha) == head:
        return True

    environ = os.environ if environ is None else environ
    if AUTHOR_DATE_VAR in environ:
        timestamp = _author_timestamp(environ[AUTHOR_DATE_VAR])
        if timestamp is not None and timestamp == gateway.head_author_timestamp():
            logger.debug(f"{AUTHOR_DATE_VAR} matches HEAD, treating commit as an amend")
            return True

    command_line = parent_command_line() if command_line is None else command_line
    if "--amend" in command_line:
        logger.debug("Committing process was run with --amend")
        return True
    return False


def build_block(
    gateway: GitGateway, parent: Optional[str], config: HookConfig
) -> Optional[List[str]]:
    """Compute the fenced block for the staged changes, or None if nothing changed."""
    changes = diff_gitlinks(gateway, parent)
    blocks = [format_submodule_change(gateway, change, config) for change in changes]
    return compose_block(blocks)


def prepare_message(
    gateway: GitGateway, message: str, config: HookConfig, amend: bool = False
) -> str:
    """Return ``message`` with the submodule block for the staged changes."""
    parent = gateway.parent_revision(amend)
    block = build_block(gateway, parent, config)
    if block is None and BLOCK_HEADER not in message:
        return message

    trailers = gateway.parse_trailers(message) if message.strip() else []
    return splice_message(message, block, trailers, gateway.comment_char())


def run_hook(
    project_root: Path,
    message_file: Path,
    source: Optional[str] = None,
    sha: Optional[str] = None,
    config: Optional[HookConfig] = None,
) -> bool:
    """Rewrite ``message_file`` in place.

    The new text is computed fully before anything is written, and the file is
    only touched when the text changed.

    Returns:
        True if the message file was rewritten
    """
    if config is None:
        config = HookConfig.from_env()

    gateway = GitGateway(project_root)
    message_file = Path(message_file)
    message = message_file.read_text(encoding="utf-8") if message_file.exists() else ""

    amend = is_amend(gateway, source, sha)
    logger.debug(f"prepare-commit-msg: source={source} sha={sha} amend={amend}")

    final = prepare_message(gateway, message, config, amend=amend)
    if final == message:
        logger.debug("Commit message unchanged")
        return False

    message_file.write_text(final, encoding="utf-8")
    logger.info(f"Updated submodule changes in {message_file}")
    return True


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Hook entry point; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("usage: prepare-commit-msg <message-file> [<source> [<sha>]]", file=sys.stderr)
        return 2

    config = HookConfig.from_env()
    configure_logging(config)

    message_file = Path(args[0])
    source = args[1] if len(args) > 1 else None
    sha = args[2] if len(args) > 2 else None

    try:
        run_hook(Path.cwd(), message_file, source, sha, config)
    except GatewayError as e:
        logger.error(f"Aborting commit: {e}")
        return 1
    return 0
