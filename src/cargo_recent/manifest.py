"""Cargo.toml reading.

Manifests are parsed with tomllib. A manifest that is not valid TOML is
still mined for a ``name = "..."`` line and a ``[workspace]`` header so a
half-edited Cargo.toml doesn't break resolution.
"""

import logging
import re
import tomllib
from pathlib import Path
from typing import Optional

from .constants import MANIFEST_FILE
from .core import CrateManifest
from .errors import ManifestUnreadableError

logger = logging.getLogger(__name__)

_NAME_LINE = re.compile(r'^\s*name\s*=\s*"([^"]+)"', re.MULTILINE)
_WORKSPACE_HEADER = re.compile(r"^\s*\[workspace\]", re.MULTILINE)


def manifest_path(project_dir: Path) -> Path:
    return project_dir / MANIFEST_FILE


def has_manifest(directory: Path) -> bool:
    return manifest_path(directory).is_file()


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestUnreadableError(path, str(e))


def parse_manifest(content: str, path: Path) -> CrateManifest:
    """Parse manifest text, falling back to line patterns for invalid TOML."""
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        logger.debug("%s is not valid TOML (%s), using line patterns", path, e)
        match = _NAME_LINE.search(content)
        return CrateManifest(
            path=path,
            name=match.group(1) if match else None,
            is_workspace=bool(_WORKSPACE_HEADER.search(content)),
        )

    package = data.get("package")
    name: Optional[str] = None
    if isinstance(package, dict) and isinstance(package.get("name"), str):
        name = package["name"]
    elif isinstance(data.get("name"), str):
        name = data["name"]

    workspace = data.get("workspace")
    members = []
    if isinstance(workspace, dict):
        raw_members = workspace.get("members")
        if isinstance(raw_members, list):
            members = [m for m in raw_members if isinstance(m, str)]

    return CrateManifest(
        path=path,
        name=name or None,
        is_workspace=isinstance(workspace, dict),
        members=members,
    )


def read_manifest(project_dir: Path) -> CrateManifest:
    """Read and parse the Cargo.toml in project_dir.

    Raises:
        ManifestUnreadableError: If the file is missing or can't be read
    """
    path = manifest_path(project_dir)
    return parse_manifest(_read_text(path), path)


def is_workspace_manifest(project_dir: Path) -> bool:
    return read_manifest(project_dir).is_workspace


def extract_project_name(project_dir: Path) -> str:
    """Get the crate name from project_dir's manifest.

    Falls back to the directory's final path segment when the manifest
    declares no usable name.

    Raises:
        ManifestUnreadableError: If the manifest can't be read
    """
    manifest = read_manifest(project_dir)
    if manifest.name:
        return manifest.name
    logger.debug("No package name in %s, using directory name", manifest.path)
    return project_dir.resolve().name
