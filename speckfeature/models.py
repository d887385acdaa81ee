"""Data models for feature bootstrap runs.

These values are transient: each invocation derives them fresh, and only
the feature directory and its spec file persist on disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import FEATURE_ENV_VAR

ACTION_REUSE = "reuse"
ACTION_ADOPT = "adopt"
ACTION_CREATE = "create"
RECONCILE_ACTIONS = (ACTION_REUSE, ACTION_ADOPT, ACTION_CREATE)


@dataclass(slots=True)
class RepositoryLocation:
    """Resolved repository root and whether version control reported it."""

    root: Path
    vcs_available: bool
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {"root": str(self.root), "vcs_available": self.vcs_available}


@dataclass(slots=True)
class ReconcileOutcome:
    """Which branch/folder path was taken and what it produced."""

    action: str
    branch_name: str
    feature_dir: Path
    branch_created: bool = False
    dir_created: bool = False
    warnings: List[str] = field(default_factory=list)

    def validate(self) -> List[str]:
        """Validate the outcome and return any issues."""
        issues = []
        if self.action not in RECONCILE_ACTIONS:
            issues.append(f"Invalid reconcile action: {self.action}")
        if not self.branch_name:
            issues.append("Branch name is required")
        if self.action == ACTION_REUSE and (self.branch_created or self.dir_created):
            issues.append("Reuse must not create a branch or directory")
        if self.action == ACTION_ADOPT and self.branch_created:
            issues.append("Adopting the current branch must not create a branch")
        return issues


@dataclass(slots=True)
class SeedOutcome:
    """Result of ensuring the spec document exists."""

    spec_file: Path
    created: bool
    template_used: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)


@dataclass(slots=True)
class FeatureResult:
    """Everything a caller needs after a feature workspace is prepared."""

    branch_name: str
    spec_file: Path
    feature_dir: Path
    repository_root: Path
    action: str
    vcs_available: bool
    branch_created: bool = False
    spec_created: bool = False
    template_used: Optional[Path] = None
    truncated: bool = False
    warnings: List[str] = field(default_factory=list)

    @property
    def session_variables(self) -> Dict[str, str]:
        """Variables the caller should export into the invoking session."""
        return {FEATURE_ENV_VAR: self.branch_name}

    def to_record(self) -> Dict[str, str]:
        """Compact record consumed by orchestrating tools."""
        return {"BRANCH_NAME": self.branch_name, "SPEC_FILE": str(self.spec_file)}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "branch_name": self.branch_name,
            "spec_file": str(self.spec_file),
            "feature_dir": str(self.feature_dir),
            "repository_root": str(self.repository_root),
            "action": self.action,
            "vcs_available": self.vcs_available,
            "branch_created": self.branch_created,
            "spec_created": self.spec_created,
            "template_used": str(self.template_used) if self.template_used else None,
            "truncated": self.truncated,
            "warnings": list(self.warnings),
            "session_variables": self.session_variables,
        }
