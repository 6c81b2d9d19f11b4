"""Commit log models for submodule history."""

from typing import List

from pydantic import BaseModel


class CommitLogEntry(BaseModel):
    """One submodule commit newly reachable from the staged pointer."""

    revision: str
    subject: str

    def short_revision(self, length: int) -> str:
        return self.revision[:length]


class ChangeBlock(BaseModel):
    """Formatted text for one submodule inside the fenced section."""

    path: str
    lines: List[str] = []

    def render(self) -> List[str]:
        """Header line, body lines, then one blank separator line."""
        return [f"{self.path}:", *self.lines, ""]
