"""Project resolver: map a changed file to the crate directory that owns it."""

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional

from .constants import MANIFEST_FILE, WORKSPACE_SEARCH_DEPTH
from .errors import NoProjectFoundError
from .ignore import IgnoreSpec
from .manifest import has_manifest, is_workspace_manifest

logger = logging.getLogger(__name__)


def _ancestors(start: Path, boundary: Optional[Path]) -> Iterator[Path]:
    """Yield start and its parents, stopping after boundary or the filesystem root."""
    current = start
    while True:
        yield current
        if boundary is not None and current.resolve() == boundary:
            return
        if current == current.parent:
            return
        current = current.parent


def find_member_manifests(
    workspace_root: Path,
    depth: int = WORKSPACE_SEARCH_DEPTH,
    ignore_spec: Optional[IgnoreSpec] = None,
    repo_root: Optional[Path] = None,
) -> List[Path]:
    """List directories below workspace_root that carry a Cargo.toml.

    Walks at most ``depth`` levels down, in sorted order, skipping hidden and
    ignored directories. The workspace root itself is not included. Ignore
    patterns are matched against paths relative to repo_root (default: the
    workspace root), the same paths the scanner matches.
    """
    ignore_spec = ignore_spec or IgnoreSpec()
    prefix = Path()
    if repo_root is not None:
        try:
            prefix = workspace_root.resolve().relative_to(repo_root.resolve())
        except ValueError:
            pass
    found: List[Path] = []

    for dirpath, dirnames, filenames in os.walk(workspace_root):
        current = Path(dirpath)
        rel = current.relative_to(workspace_root)
        level = len(rel.parts)

        if level > 0 and MANIFEST_FILE in filenames:
            found.append(current)

        if level >= depth:
            dirnames[:] = []
            continue
        dirnames[:] = sorted(
            d for d in dirnames
            if not d.startswith(".")
            and ignore_spec.should_traverse((prefix / rel / d).as_posix())
        )

    return found


def _innermost_member(
    file_path: Path,
    workspace_root: Path,
    depth: int,
    ignore_spec: Optional[IgnoreSpec],
    repo_root: Optional[Path] = None,
) -> Optional[Path]:
    real_file = file_path.resolve()
    best: Optional[Path] = None
    best_depth = -1

    for candidate in find_member_manifests(workspace_root, depth, ignore_spec, repo_root):
        real_candidate = candidate.resolve()
        if real_file == real_candidate or not real_file.is_relative_to(real_candidate):
            continue
        candidate_depth = len(candidate.relative_to(workspace_root).parts)
        if candidate_depth > best_depth:
            best, best_depth = candidate, candidate_depth

    return best


def resolve_project_dir(
    file_path: Path,
    repo_root: Optional[Path],
    cwd: Optional[Path] = None,
    depth: int = WORKSPACE_SEARCH_DEPTH,
    ignore_spec: Optional[IgnoreSpec] = None,
) -> Path:
    """Find the crate directory containing file_path.

    The nearest ancestor with a non-workspace Cargo.toml wins outright. If a
    workspace manifest is met first, the workspace tree is searched (``depth``
    levels) for the innermost member containing the file, and the workspace
    root is used when no member does.

    Args:
        file_path: The changed file; relative paths are taken from cwd
        repo_root: Upper bound of the ascent; None searches to the filesystem root
        cwd: Working directory (default: Path.cwd())
        depth: Member search depth below a workspace root
        ignore_spec: Directories to skip in the member search

    Raises:
        NoProjectFoundError: If no crate directory can be determined
        ManifestUnreadableError: If a manifest on the way can't be read
    """
    cwd = cwd or Path.cwd()
    abs_file = file_path if file_path.is_absolute() else cwd / file_path
    boundary = repo_root.resolve() if repo_root is not None else None
    logger.debug("Finding crate directory for file: %s", abs_file)

    workspace_root: Optional[Path] = None
    for directory in _ancestors(abs_file.parent, boundary):
        if not has_manifest(directory):
            continue
        logger.debug("Found manifest at: %s", directory / MANIFEST_FILE)
        if not is_workspace_manifest(directory):
            logger.debug("Found regular crate directory: %s", directory)
            return directory
        # Outermost workspace wins
        workspace_root = directory

    if workspace_root is not None:
        member = _innermost_member(abs_file, workspace_root, depth, ignore_spec, repo_root)
        if member is not None:
            logger.debug("Found workspace member: %s", member)
            return member
        logger.debug("No specific crate found, returning workspace root: %s", workspace_root)
        return workspace_root

    if repo_root is None and has_manifest(cwd):
        logger.debug("Using current directory as crate directory: %s", cwd)
        return cwd

    raise NoProjectFoundError(abs_file)
