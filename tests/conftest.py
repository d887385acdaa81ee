"""Shared fixtures for feature bootstrap tests."""

import logging
from pathlib import Path
from typing import List, Optional

import pytest

from speckfeature.exceptions import VersionControlError


class FakeVersionControl:
    """In-memory version control double recording branch operations."""

    def __init__(
        self,
        root: Optional[Path] = None,
        branch: Optional[str] = None,
        *,
        fail_root: bool = False,
        fail_branch: bool = False,
        fail_create: bool = False,
    ):
        self.root = root
        self.branch = branch
        self.fail_root = fail_root
        self.fail_branch = fail_branch
        self.fail_create = fail_create
        self.created: List[str] = []

    def repository_root(self) -> Path:
        if self.fail_root or self.root is None:
            raise VersionControlError("not a git repository")
        return self.root

    def current_branch(self) -> str:
        if self.fail_branch or self.branch is None:
            raise VersionControlError("no current branch")
        return self.branch

    def create_branch(self, name: str) -> None:
        if self.fail_create:
            raise VersionControlError(f"a branch named '{name}' already exists")
        self.created.append(name)
        self.branch = name


@pytest.fixture
def repo_root(tmp_path):
    """A repository root marked by a workflow config directory."""
    root = tmp_path / "repo"
    (root / ".specify" / "templates").mkdir(parents=True)
    return root.resolve()


@pytest.fixture
def spec_template(repo_root):
    """A spec template in the well-known location."""
    path = repo_root / ".specify" / "templates" / "spec-template.md"
    path.write_bytes(b"# Feature Specification: [FEATURE NAME]\r\n\r\n**Status**: Draft\n")
    return path


@pytest.fixture
def fake_vcs_factory(repo_root):
    """Build a FakeVersionControl rooted at the test repository."""

    def factory(branch: Optional[str] = "main", **kwargs) -> FakeVersionControl:
        return FakeVersionControl(repo_root, branch, **kwargs)

    return factory


@pytest.fixture
def no_git(monkeypatch):
    """Hide the git executable so only marker-based discovery is available."""
    monkeypatch.setattr("speckfeature.vcs.shutil.which", lambda name: None)


@pytest.fixture
def clean_feature_env(monkeypatch):
    """Restore SPECIFY_FEATURE after tests that export it."""
    monkeypatch.setenv("SPECIFY_FEATURE", "")
    monkeypatch.delenv("SPECIFY_FEATURE")


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handlers installed by setup_logging during a test."""
    logger = logging.getLogger("speckfeature")
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
