"""Find the most recently changed crate in a git working tree."""

from .api import find_recent_crate, find_recent_crate_name, find_recent_crate_path
from .core import ChangedFile, CrateManifest, RecentCrate

__all__ = [
    "ChangedFile",
    "CrateManifest",
    "RecentCrate",
    "find_recent_crate",
    "find_recent_crate_name",
    "find_recent_crate_path",
]
