"""Stable API for cargo-recent.

Lets other tools ask for the recently changed crate without going through
the CLI. Every call recomputes from the filesystem; nothing is cached
between calls.
"""

from pathlib import Path
from typing import Optional, Tuple

from .context import RepoContext
from .core import ChangedFile, RecentCrate
from .manifest import extract_project_name
from .resolver import resolve_project_dir
from .scanner import DiffSource, scan_latest_change


def _locate(
    ctx: RepoContext,
    cwd: Path,
    diff_source: Optional[DiffSource],
) -> Optional[Tuple[Path, ChangedFile]]:
    latest = scan_latest_change(
        ctx.root,
        diff_source=diff_source,
        config=ctx.config,
        ignore_spec=ctx.get_ignore_spec(),
    )
    if latest is None:
        return None

    crate_dir = resolve_project_dir(
        latest.path,
        ctx.root,
        cwd=cwd,
        depth=ctx.config.search_depth,
        ignore_spec=ctx.get_ignore_spec(),
    )
    return crate_dir, latest


def crate_dir_in(
    ctx: RepoContext,
    cwd: Optional[Path] = None,
    diff_source: Optional[DiffSource] = None,
) -> Optional[Path]:
    """Like find_recent_crate_path, for a caller that already has a RepoContext."""
    found = _locate(ctx, cwd or Path.cwd(), diff_source)
    return found[0] if found else None


def crate_in(
    ctx: RepoContext,
    cwd: Optional[Path] = None,
    diff_source: Optional[DiffSource] = None,
) -> Optional[RecentCrate]:
    """Like find_recent_crate, for a caller that already has a RepoContext."""
    found = _locate(ctx, cwd or Path.cwd(), diff_source)
    if found is None:
        return None
    crate_dir, latest = found
    return RecentCrate(path=crate_dir, name=extract_project_name(crate_dir), changed_file=latest)


def find_recent_crate_path(
    start_dir: Optional[Path] = None,
    diff_source: Optional[DiffSource] = None,
) -> Optional[Path]:
    """Directory of the recently changed crate, or None if nothing changed."""
    cwd = start_dir or Path.cwd()
    return crate_dir_in(RepoContext(cwd), cwd, diff_source)


def find_recent_crate(
    start_dir: Optional[Path] = None,
    diff_source: Optional[DiffSource] = None,
) -> Optional[RecentCrate]:
    """Find the crate owning the most recently modified changed file.

    Args:
        start_dir: Where to start looking for the repository (default: cwd)
        diff_source: Override the git diff, mostly for tests

    Returns:
        RecentCrate, or None when the working tree has no changes

    Raises:
        RecentError subclasses for every failure (see errors.py)

    Example:
        >>> from cargo_recent.api import find_recent_crate
        >>> crate = find_recent_crate()
        >>> if crate:
        ...     print(crate.name, crate.path)
    """
    cwd = start_dir or Path.cwd()
    return crate_in(RepoContext(cwd), cwd, diff_source)


def find_recent_crate_name(
    start_dir: Optional[Path] = None,
    diff_source: Optional[DiffSource] = None,
) -> Optional[str]:
    """Package name of the recently changed crate, or None if nothing changed."""
    crate = find_recent_crate(start_dir, diff_source)
    return crate.name if crate else None
