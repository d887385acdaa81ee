"""Version control capability used by the locator and the reconciler.

Every operation either returns a value or raises
:class:`~speckfeature.exceptions.VersionControlError`; callers convert
those failures into degraded behaviour at the point of use.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol

from .exceptions import VersionControlError

logger = logging.getLogger("speckfeature.vcs")


class VersionControl(Protocol):
    """Operations the feature pipeline needs from a version control system."""

    def repository_root(self) -> Path:
        ...

    def current_branch(self) -> str:
        ...

    def create_branch(self, name: str) -> None:
        ...


class NoVersionControl:
    """Stand-in used when no version control is available; every call fails."""

    def __init__(self, reason: str = "version control is not available"):
        self.reason = reason

    def repository_root(self) -> Path:
        raise VersionControlError(self.reason)

    def current_branch(self) -> str:
        raise VersionControlError(self.reason)

    def create_branch(self, name: str) -> None:
        raise VersionControlError(self.reason)


class GitVersionControl:
    """Git implementation backed by the ``git`` executable."""

    def __init__(self, cwd: Path | str, executable: Optional[str] = None):
        self.cwd = Path(cwd)
        self.executable = executable or "git"

    @classmethod
    def detect(cls, cwd: Path | str) -> "GitVersionControl | NoVersionControl":
        """Return a git backend when the executable is on PATH, otherwise a no-op one."""
        executable = shutil.which("git")
        if executable is None:
            logger.debug("git executable not found on PATH")
            return NoVersionControl("git executable not found on PATH")
        return cls(cwd, executable)

    def _run(self, args: List[str]) -> str:
        command = [self.executable, *args]
        try:
            result = subprocess.run(
                command,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise VersionControlError(f"Could not run {self.executable}", command=command, stderr=str(e)) from e

        if result.returncode != 0:
            raise VersionControlError(
                f"Command '{' '.join(command)}' exited with status {result.returncode}",
                command=command,
                stderr=result.stderr,
            )
        return result.stdout.strip()

    def repository_root(self) -> Path:
        output = self._run(["rev-parse", "--show-toplevel"])
        if not output:
            raise VersionControlError("git did not report a top-level directory")
        return Path(output).resolve()

    def current_branch(self) -> str:
        return self._run(["rev-parse", "--abbrev-ref", "HEAD"])

    def create_branch(self, name: str) -> None:
        self._run(["checkout", "-b", name])
