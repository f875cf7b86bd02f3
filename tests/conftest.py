# tests/conftest.py
"""
Global pytest fixtures for MiniGit tests.
"""

import pytest

from minigit.core.git_cli import GitConstants
from minigit.core.repository import MiniGit
from minigit.core.settings import Settings
from tests.helpers import GitSession


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keeps ~/.config/minigit inside the test directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def settings(isolated_home):
    """Settings with a fixed author, not written to disk."""
    settings = Settings()
    settings.settings["author_name"] = "Tester"
    return settings


@pytest.fixture
def work_dir(tmp_path):
    """Empty working directory."""
    directory = tmp_path / "playground"
    directory.mkdir()
    return directory


@pytest.fixture
def git(work_dir, settings):
    """Initialized repository."""
    repo = MiniGit(str(work_dir), settings=settings)
    repo.init()
    return repo


@pytest.fixture
def session(work_dir, settings):
    """Transcript session on an initialized repository."""
    git_session = GitSession(work_dir, settings)
    git_session.run_command(GitConstants.INIT)
    return git_session
