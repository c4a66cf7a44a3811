"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point HOME at an empty tmp dir and clear MINDFLOW_* overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("MINDFLOW_RESPECT_GIT", "MINDFLOW_MAX_DEPTH", "MINDFLOW_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    yield home
    # CLI runs swap loguru sinks onto captured streams; drop them after each test.
    logger.remove()


@pytest.fixture
def home(isolated_env) -> Path:
    return isolated_env


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted at DEBUG and above."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    try:
        logger.remove(handler_id)
    except ValueError:
        pass


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", "-C", str(repo), *args], check=True, capture_output=True)


@pytest.fixture
def git_repo(tmp_path) -> Path:
    """Minimal git repo: one committed file, one untracked, one ignored."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init")
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "user.name", "Test")
    (repo / ".gitignore").write_text("build/\n*.log\n")
    (repo / "src").mkdir()
    (repo / "src" / "main.py").write_text("print('hello')\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "Initial commit")
    (repo / "notes.md").write_text("untracked notes\n")
    (repo / "debug.log").write_text("ignored\n")
    (repo / "build").mkdir()
    (repo / "build" / "out.txt").write_text("ignored build output\n")
    return repo
