"""Merge the fenced submodule section into a draft commit message.

The splice is a pure function of the draft text, the new block and the
trailer lines reported by git. It picks one of four transitions:

- no-op: no new block and no old block, the draft is returned as is
- insert: new block, no old block
- replace: new block, old block removed first
- remove: no new block, old block removed
"""

from typing import List, Optional, Sequence, Tuple

from loguru import logger

from submodule_hook.core.composer import BLOCK_FOOTER, BLOCK_HEADER
from submodule_hook.models import MessageSections

SCISSORS_MARK = "------------------------ >8 ------------------------"


def locate_block(lines: Sequence[str]) -> Optional[Tuple[int, int]]:
    """Find a previously generated block.

    Returns:
        (header index, footer index), both inclusive, or None if there is no
        header followed by a footer
    """
    start = None
    for index, line in enumerate(lines):
        stripped = line.rstrip()
        if start is None and stripped == BLOCK_HEADER:
            start = index
        elif start is not None and stripped == BLOCK_FOOTER:
            return start, index
    return None


def scissors_line(comment_char: str) -> str:
    """The cut line ``git commit -v`` writes above the diff."""
    return f"{comment_char} {SCISSORS_MARK}"


def _split_tail(lines: List[str], comment_char: str) -> int:
    """Index where the trailing run of blank and comment lines begins.

    Everything from git's scissors line down is discarded by git, so the run
    is measured back from there rather than from the end of the draft.
    """
    cut = scissors_line(comment_char)
    end = next((index for index, line in enumerate(lines) if line == cut), len(lines))
    while end > 0 and (not lines[end - 1].strip() or lines[end - 1].startswith(comment_char)):
        end -= 1
    return end


def _trailer_start(content: List[str], trailers: Sequence[str]) -> int:
    """Index of the first trailer line in ``content``, or ``len(content)`` if none.

    Git only treats the last paragraph as trailers, and never the subject
    paragraph, so the block starts after the last blank line.
    """
    if not trailers:
        return len(content)

    blank_lines = [index for index, line in enumerate(content) if not line.strip()]
    if not blank_lines:
        return len(content)
    start = blank_lines[-1] + 1

    key = trailers[0].split(":", 1)[0].strip()
    if not any(line.startswith(key) for line in content[start:]):
        logger.debug(f"Trailer {key!r} not found in last paragraph, treating message as prose")
        return len(content)
    return start


def decompose_message(
    message: str, trailers: Sequence[str], comment_char: str = "#"
) -> MessageSections:
    """Split ``message`` into prose, any old block, trailers and the comment tail.

    Args:
        message: Draft commit message text
        trailers: Trailer lines git's parser reported for ``message``
        comment_char: Git's comment character for message templates

    Returns:
        MessageSections whose trailers and tail are verbatim slices of ``message``
    """
    lines = message.splitlines()
    tail_start = _split_tail(lines, comment_char)
    content, tail = lines[:tail_start], lines[tail_start:]
    while tail and not tail[0].strip():
        tail.pop(0)
    while tail and not tail[-1].strip():
        tail.pop()

    trailer_start = _trailer_start(content, trailers)
    prose, trailer_lines = content[:trailer_start], content[trailer_start:]

    existing_block = None
    found = locate_block(prose)
    if found is not None:
        start, end = found
        existing_block = prose[start : end + 1]
        if end + 1 < len(prose) and not prose[end + 1].strip():
            end += 1
        prose = prose[:start] + prose[end + 1 :]

    return MessageSections(
        prose=prose,
        existing_block=existing_block,
        trailers=trailer_lines,
        tail=tail,
        trailing_newline=message.endswith("\n"),
    )


def splice_message(
    message: str,
    block: Optional[List[str]],
    trailers: Sequence[str],
    comment_char: str = "#",
) -> str:
    """Insert or replace the fenced block in ``message``.

    Args:
        message: Draft commit message text
        block: Lines from ``compose_block``, or None when nothing changed
        trailers: Trailer lines git's parser reported for ``message``
        comment_char: Git's comment character for message templates

    Returns:
        Final message text; ``message`` itself when there is nothing to do
    """
    sections = decompose_message(message, trailers, comment_char)
    if block is None and not sections.has_block:
        return message

    if sections.has_block:
        logger.debug("Replacing existing submodule block" if block else "Removing stale submodule block")
    return sections.render(block)
