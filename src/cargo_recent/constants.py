"""Constants for cargo-recent."""

# Repository marker directory
VCS_MARKER_DIR = ".git"

# Cargo files
MANIFEST_FILE = "Cargo.toml"
LOCK_FILE = "Cargo.lock"
MANIFEST_FILES = (MANIFEST_FILE, LOCK_FILE)

# Source files that count as a crate change
SOURCE_SUFFIXES = (".rs",)

# How far below a workspace root to look for member manifests
WORKSPACE_SEARCH_DEPTH = 3

# Optional per-repository configuration (at the repository root)
CONFIG_FILE = ".cargo-recent.yaml"

# Environment variables
CARGO_ENV = "CARGO"
LOG_LEVEL_ENV = "CARGO_RECENT_LOG"

USAGE_HINT = "No command specified. Try 'cargo recent path' or 'cargo recent show'"
