"""Exception types raised by the feature bootstrap pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional


class FeatureError(ValueError):
    """Base class for fatal, user-facing feature creation errors."""


class EmptyDescriptionError(FeatureError):
    """Raised when no usable feature description was provided."""

    def __init__(self, message: str = "Feature description cannot be empty"):
        super().__init__(message)


class RepositoryRootNotFound(FeatureError):
    """Raised when no repository root can be determined from a start directory."""

    def __init__(self, start: Path | str, markers: Optional[List[str]] = None):
        self.start = Path(start)
        self.markers = list(markers or [])
        marker_text = ", ".join(self.markers) if self.markers else "repository markers"
        super().__init__(
            f"Could not determine repository root from '{self.start}'. "
            f"No version control root was reported and none of ({marker_text}) "
            "was found in any parent directory."
        )


class InvalidBranchNameError(FeatureError):
    """Raised when a branch name cannot be produced from the given input."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(
            f"Could not derive a branch name from '{raw}'. "
            "Provide a description or --short-name containing letters or digits."
        )


class VersionControlError(RuntimeError):
    """Raised when a version control operation fails or is unavailable."""

    def __init__(self, message: str, *, command: Optional[List[str]] = None, stderr: str = ""):
        self.command = list(command or [])
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"{message}{detail}")
