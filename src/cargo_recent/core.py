"""Core data models for cargo-recent."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class ChangedFile(BaseModel):
    """A file reported by the working-tree diff, with its modification time."""

    path: Path  # absolute
    mtime_ns: int

    @property
    def modified(self) -> datetime:
        """Local-time view of the modification timestamp."""
        return datetime.fromtimestamp(self.mtime_ns / 1_000_000_000).astimezone()

    def sort_key(self):
        """Newest first; equal timestamps fall back to the smaller path string."""
        return (-self.mtime_ns, str(self.path))


class CrateManifest(BaseModel):
    """The parts of a Cargo.toml that cargo-recent cares about."""

    path: Path
    name: Optional[str] = None
    is_workspace: bool = False
    members: List[str] = Field(default_factory=list)


class RecentCrate(BaseModel):
    """The crate owning the most recently changed file."""

    path: Path
    name: str
    changed_file: Optional[ChangedFile] = None
