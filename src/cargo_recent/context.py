"""Repository context: root discovery plus the per-repository settings."""

import logging
from pathlib import Path
from typing import Optional

from .config import RecentConfig, load_config
from .constants import VCS_MARKER_DIR
from .errors import NotARepositoryError
from .ignore import IgnoreSpec

logger = logging.getLogger(__name__)


def locate_repo_root(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Walk up from start_dir to the first directory holding a .git directory.

    Returns:
        The repository root, or None if the filesystem root is reached first
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        if (current / VCS_MARKER_DIR).is_dir():
            return current
        if current == current.parent:
            return None
        current = current.parent


class RepoContext:
    """Repository root with its config and ignore patterns."""

    def __init__(self, start_path: Optional[Path] = None):
        """Find the repository root above start_path (default: cwd).

        Raises:
            NotARepositoryError: If no repository root exists above start_path
        """
        start = start_path or Path.cwd()
        root = locate_repo_root(start)
        if root is None:
            raise NotARepositoryError(start)
        self.root = root
        self._config: Optional[RecentConfig] = None
        self._ignore_spec: Optional[IgnoreSpec] = None
        logger.debug("Repository root: %s", self.root)

    @property
    def config(self) -> RecentConfig:
        """Repository config (memoized)."""
        if self._config is None:
            self._config = load_config(self.root)
        return self._config

    def get_ignore_spec(self) -> IgnoreSpec:
        """Get the ignore specification (memoized)."""
        if self._ignore_spec is None:
            self._ignore_spec = IgnoreSpec(self.config.ignore)
        return self._ignore_spec
