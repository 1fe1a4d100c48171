"""Shared test fixtures and utilities."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Optional

import pytest


def _write_manifest(
    directory: Path,
    name: Optional[str] = None,
    workspace: bool = False,
    members: Iterable[str] = (),
) -> Path:
    """Write a Cargo.toml into directory (created if needed)."""
    directory.mkdir(parents=True, exist_ok=True)
    lines = []
    if workspace:
        lines.append("[workspace]")
        quoted = ", ".join(f'"{m}"' for m in members)
        lines.append(f"members = [{quoted}]")
        lines.append("")
    if name is not None:
        lines.extend([
            "[package]",
            f'name = "{name}"',
            'version = "0.1.0"',
            'edition = "2021"',
        ])
    manifest = directory / "Cargo.toml"
    manifest.write_text("\n".join(lines) + "\n")
    return manifest


@pytest.fixture
def write_manifest():
    """Helper writing a Cargo.toml: write_manifest(dir, name=..., workspace=..., members=...)."""
    return _write_manifest


@pytest.fixture
def make_crate():
    """Factory fixture creating a crate with a src/lib.rs."""
    def _make(directory: Path, name: Optional[str] = None) -> Path:
        _write_manifest(directory, name=name if name is not None else directory.name)
        src = directory / "src"
        src.mkdir(parents=True, exist_ok=True)
        (src / "lib.rs").write_text("pub fn hello() {}\n")
        return directory
    return _make


@pytest.fixture
def make_workspace(make_crate):
    """Factory fixture creating a workspace root with member crates."""
    def _make(root: Path, *members: str) -> Path:
        _write_manifest(root, workspace=True, members=members)
        for member in members:
            make_crate(root / member, name=Path(member).name)
        return root
    return _make


@pytest.fixture
def set_mtime():
    """Factory fixture setting a file's mtime (seconds) exactly."""
    def _set(path: Path, seconds: int) -> Path:
        ns = seconds * 1_000_000_000
        os.utime(path, ns=(ns, ns))
        return path
    return _set


class GitRepo:
    """A throwaway git repository for tests."""

    def __init__(self, root: Path):
        self.root = root

    def git(self, *args: str) -> str:
        result = subprocess.run(
            [
                "git",
                "-c", "user.name=Test User",
                "-c", "user.email=test@example.com",
                "-c", "commit.gpgsign=false",
                *args,
            ],
            cwd=self.root,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    def commit_all(self, message: str = "commit") -> None:
        self.git("add", "-A")
        self.git("commit", "-q", "--allow-empty", "-m", message)

    def write(self, rel_path: str, content: str) -> Path:
        path = self.root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """Initialize an empty git repository in tmp_path/repo."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    # Keep the user's global git config out of the way
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)

    root = tmp_path / "repo"
    root.mkdir()
    repo = GitRepo(root.resolve())
    repo.git("init", "-q")
    return repo
