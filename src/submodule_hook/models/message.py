"""Decomposed commit message model."""

from typing import List, Optional

from pydantic import BaseModel


class MessageSections(BaseModel):
    """A draft commit message split around the parts the hook owns.

    ``prose`` is everything before the trailers with any previously generated
    block removed, ``existing_block`` is that removed block (if there was one),
    ``trailers`` is the verbatim trailer paragraph and ``tail`` holds trailing
    blank and comment lines that git appends for the editor.
    """

    prose: List[str] = []
    existing_block: Optional[List[str]] = None
    trailers: List[str] = []
    tail: List[str] = []
    trailing_newline: bool = False

    @property
    def has_block(self) -> bool:
        return self.existing_block is not None

    def render(self, block: Optional[List[str]] = None) -> str:
        """Join the sections back together with ``block`` in front of the trailers.

        A draft with no prose but a comment tail is an editor template: the
        first line is kept blank so the subject the user types stays apart
        from the block.
        """
        lines = list(self.prose)
        while lines and not lines[-1].strip():
            lines.pop()
        leave_subject_line = not lines and bool(self.tail)

        for section in (block, self.trailers, self.tail):
            if not section:
                continue
            if lines:
                lines.append("")
            lines.extend(section)

        if leave_subject_line and (block or self.trailers):
            lines[:0] = ["", ""]

        text = "\n".join(lines)
        if self.trailing_newline and text:
            text += "\n"
        return text
