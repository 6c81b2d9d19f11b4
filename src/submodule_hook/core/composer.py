"""Assemble per-submodule blocks into the fenced message section."""

from typing import List, Optional, Sequence

from submodule_hook.models import ChangeBlock

BLOCK_HEADER = "Submodule changes:"
BLOCK_FOOTER = "End of submodule changes:"


def compose_block(blocks: Sequence[ChangeBlock]) -> Optional[List[str]]:
    """Wrap ``blocks`` between the fixed header and footer lines.

    Returns None for an empty change set so the message is left alone.
    """
    if not blocks:
        return None

    lines = [BLOCK_HEADER]
    for block in blocks:
        lines.extend(block.render())
    lines.append(BLOCK_FOOTER)
    return lines
