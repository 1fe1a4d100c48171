"""Custom exceptions for cargo-recent.

Every failure the tool can report derives from RecentError so the CLI can
surface it with a single handler. "No recent change" is not an error and is
represented by None throughout.
"""

from pathlib import Path
from typing import List, Optional


class RecentError(RuntimeError):
    """Base class for all cargo-recent errors."""
    pass


# Diff Errors
class DiffUnavailableError(RecentError):
    """The diff tool could not be run or its output could not be decoded."""

    def __init__(self, message: str, stderr: str = "", returncode: Optional[int] = None):
        self.stderr = stderr
        self.returncode = returncode
        if stderr.strip():
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)


class NotARepositoryError(DiffUnavailableError):
    """No repository root above the starting directory."""

    def __init__(self, start_dir: Path):
        self.start_dir = start_dir
        super().__init__(f"Could not find git repository root from {start_dir}")


class NoValidChangeError(RecentError):
    """The diff listed files but none of them could be used."""
    pass


# Project Errors
class NoProjectFoundError(RecentError):
    """No manifest-bearing directory owns the changed file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        super().__init__(f"Could not find a crate directory for {file_path}")


class ManifestUnreadableError(RecentError):
    """A manifest exists but could not be read."""

    def __init__(self, manifest_path: Path, reason: str = ""):
        self.manifest_path = manifest_path
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to read {manifest_path}{detail}")


# Dispatch Errors
class DownstreamFailureError(RecentError):
    """The forwarded cargo command exited non-zero or could not start."""

    def __init__(self, command: List[str], returncode: Optional[int] = None, reason: str = ""):
        self.command = command
        self.returncode = returncode
        if returncode is not None:
            message = f"Command failed with exit status {returncode}: {' '.join(command)}"
        else:
            message = f"Failed to execute command: {' '.join(command)}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


# Configuration Errors
class ConfigError(RecentError):
    """Invalid .cargo-recent.yaml contents."""
    pass
