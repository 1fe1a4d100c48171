"""Per-repository configuration helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from .constants import (
    CARGO_ENV,
    CONFIG_FILE,
    MANIFEST_FILES,
    SOURCE_SUFFIXES,
    WORKSPACE_SEARCH_DEPTH,
)
from .errors import ConfigError


@dataclass
class RecentConfig:
    """Configuration controlling change detection and dispatch."""

    suffixes: List[str] = field(default_factory=lambda: list(SOURCE_SUFFIXES))
    manifest_files: List[str] = field(default_factory=lambda: list(MANIFEST_FILES))
    ignore: List[str] = field(default_factory=list)
    search_depth: int = WORKSPACE_SEARCH_DEPTH
    cargo: str = "cargo"


def _string_list(data: dict, key: str, default: List[str]) -> List[str]:
    value = data.get(key, default)
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' in {CONFIG_FILE} must be a list of strings")
    return list(value)


def load_config(repo_root: Optional[Path]) -> RecentConfig:
    """Load configuration from <repo_root>/.cargo-recent.yaml if present.

    The CARGO environment variable, set by cargo for external subcommands,
    takes precedence over the configured cargo binary.
    """
    defaults = RecentConfig()
    data: dict = {}

    if repo_root is not None:
        cfg_path = repo_root / CONFIG_FILE
        if cfg_path.exists():
            try:
                data = yaml.safe_load(cfg_path.read_text()) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {cfg_path}: {e}")
            if not isinstance(data, dict):
                raise ConfigError(f"{cfg_path} must contain a mapping")

    depth = data.get("search_depth", defaults.search_depth)
    if not isinstance(depth, int) or isinstance(depth, bool) or depth < 0:
        raise ConfigError(f"'search_depth' must be a non-negative integer, got {depth!r}")

    cargo = os.environ.get(CARGO_ENV) or data.get("cargo", defaults.cargo)
    if not isinstance(cargo, str) or not cargo:
        raise ConfigError(f"'cargo' must be a non-empty string, got {cargo!r}")

    return RecentConfig(
        suffixes=_string_list(data, "suffixes", defaults.suffixes),
        manifest_files=_string_list(data, "manifest_files", defaults.manifest_files),
        ignore=_string_list(data, "ignore", defaults.ignore),
        search_depth=depth,
        cargo=cargo,
    )
