"""Gitignore-style pattern matching for changed paths and workspace walks."""

from typing import Iterable

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern


# Default patterns to always ignore
DEFAULTS = [
    # Version control
    ".git/",

    # Cargo build output
    "target/",
]


class IgnoreSpec:
    """Manages gitignore-style patterns for path exclusion."""

    def __init__(self, extra: Iterable[str] = ()):
        """Initialize ignore spec with default and custom patterns.

        Args:
            extra: Additional patterns, usually from the config's ``ignore`` list
        """
        patterns = list(DEFAULTS)
        for line in extra:
            line = line.strip()
            if line and not line.startswith("#"):
                patterns.append(line)

        self.spec = PathSpec.from_lines(GitWildMatchPattern, patterns)

    def is_ignored(self, relpath: str) -> bool:
        """Check if a repository-relative POSIX path should be ignored."""
        return self.spec.match_file(relpath)

    def should_traverse(self, dirpath: str) -> bool:
        """Check if a directory should be descended into during a walk.

        Args:
            dirpath: Relative directory path in POSIX format

        Returns:
            True if the directory should be traversed
        """
        if not dirpath.endswith("/"):
            dirpath = dirpath + "/"
        return not self.spec.match_file(dirpath)
