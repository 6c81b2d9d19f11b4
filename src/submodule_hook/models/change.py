"""Change model for gitlink pointers recorded by the outer repository."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator


class ChangeType(str, Enum):
    """Type of change made to a submodule pointer."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


class SubmodulePointer(BaseModel):
    """A submodule path and the revision the outer tree records for it."""

    path: str
    revision: str

    model_config = {"frozen": True}


class SubmoduleChange(BaseModel):
    """Represents a single gitlink change between two tree snapshots."""

    path: str
    old: Optional[SubmodulePointer] = None  # Pointer in the parent commit
    new: Optional[SubmodulePointer] = None  # Pointer in the staged index

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_is_change(self) -> "SubmoduleChange":
        if self.old is None and self.new is None:
            raise ValueError(f"{self.path}: change needs an old or a new pointer")
        if (
            self.old is not None
            and self.new is not None
            and self.old.revision == self.new.revision
        ):
            raise ValueError(f"{self.path}: pointers are identical, nothing changed")
        return self

    @property
    def change_type(self) -> ChangeType:
        """Classify the change as added, removed or modified."""
        if self.old is None:
            return ChangeType.ADDED
        if self.new is None:
            return ChangeType.REMOVED
        return ChangeType.MODIFIED
