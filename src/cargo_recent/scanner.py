"""Change scanner: pick the most recently modified file from the working-tree diff."""

import logging
import subprocess
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Protocol

from .config import RecentConfig
from .core import ChangedFile
from .errors import DiffUnavailableError, NoValidChangeError
from .ignore import IgnoreSpec

logger = logging.getLogger(__name__)


class DiffSource(Protocol):
    """Anything that can list changed paths relative to a repository root."""

    def changed_paths(self, repo_root: Path) -> List[str]:
        ...


class GitDiffSource:
    """Working tree vs. index changes reported by ``git diff --name-only``.

    Untracked files are not reported.
    """

    def __init__(self, git: str = "git"):
        self.git = git

    def command(self) -> List[str]:
        return [self.git, "diff", "--name-only", "-z"]

    def changed_paths(self, repo_root: Path) -> List[str]:
        """Run git diff from repo_root and return the listed paths.

        Raises:
            DiffUnavailableError: If git can't be run, fails, or prints non-UTF-8
        """
        try:
            result = subprocess.run(
                self.command(),
                cwd=repo_root,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise DiffUnavailableError(f"Failed to execute git diff command: {e}")

        stderr = result.stderr.decode("utf-8", errors="replace")
        if result.returncode != 0:
            logger.debug("git diff exited with %s: %s", result.returncode, stderr)
            raise DiffUnavailableError(
                f"Git diff command failed with exit status {result.returncode}",
                stderr=stderr,
                returncode=result.returncode,
            )

        try:
            output = result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DiffUnavailableError(f"Failed to parse git diff output: {e}", stderr=stderr)

        logger.debug("Git diff output: %r", output)
        # NUL-separated, so names are neither quoted nor trimmed
        return [path for path in output.split("\0") if path]


def is_relevant(rel_path: str, config: RecentConfig, ignore_spec: IgnoreSpec) -> bool:
    """True for Rust sources and Cargo manifests that aren't ignored."""
    name = PurePosixPath(rel_path).name
    if name not in config.manifest_files and not any(
        rel_path.endswith(suffix) for suffix in config.suffixes
    ):
        return False
    return not ignore_spec.is_ignored(rel_path)


def stat_changed(repo_root: Path, rel_paths: Iterable[str]) -> List[ChangedFile]:
    """Stat each path under repo_root, skipping deleted or unreadable ones."""
    changed: List[ChangedFile] = []
    for rel_path in rel_paths:
        file_path = repo_root / rel_path
        try:
            st = file_path.stat()
        except FileNotFoundError:
            logger.debug("Skipping deleted file: %s", file_path)
            continue
        except OSError as e:
            logger.debug("Skipping %s, metadata unreadable: %s", file_path, e)
            continue
        logger.debug("File modified time: %s -> %s", file_path, st.st_mtime_ns)
        changed.append(ChangedFile(path=file_path, mtime_ns=st.st_mtime_ns))
    return changed


def select_latest(changed: Iterable[ChangedFile]) -> Optional[ChangedFile]:
    """Newest file wins; on an exact tie the lexicographically smaller path wins."""
    return min(changed, key=ChangedFile.sort_key, default=None)


def scan_latest_change(
    repo_root: Path,
    diff_source: Optional[DiffSource] = None,
    config: Optional[RecentConfig] = None,
    ignore_spec: Optional[IgnoreSpec] = None,
) -> Optional[ChangedFile]:
    """Find the most recently modified relevant file in the working-tree diff.

    Args:
        repo_root: Repository root; the diff is scoped to it
        diff_source: Where changed paths come from (default: git)
        config: Suffix/manifest filters (default: RecentConfig())
        ignore_spec: Paths to drop (default: built from config.ignore)

    Returns:
        The latest ChangedFile, or None if the diff is empty

    Raises:
        DiffUnavailableError: If the diff can't be obtained
        NoValidChangeError: If the diff listed paths but none could be used
    """
    diff_source = diff_source or GitDiffSource()
    config = config or RecentConfig()
    ignore_spec = ignore_spec or IgnoreSpec(config.ignore)

    rel_paths = diff_source.changed_paths(repo_root)
    if not rel_paths:
        logger.debug("No changes detected")
        return None

    relevant = []
    for rel_path in rel_paths:
        if is_relevant(rel_path, config, ignore_spec):
            relevant.append(rel_path)
        else:
            logger.debug("Skipping non-Rust/Cargo file: %s", rel_path)

    latest = select_latest(stat_changed(repo_root, relevant))
    if latest is None:
        raise NoValidChangeError(
            f"No valid changed files found ({len(rel_paths)} changed, {len(relevant)} relevant)"
        )

    logger.debug("Latest file: %s", latest.path)
    return latest
