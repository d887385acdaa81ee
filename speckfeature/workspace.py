"""Feature workspace management.

This module decides how a feature maps onto a branch and a directory
under the specs root, and seeds that directory with a spec document.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .config import SPEC_FILENAME, FeatureSettings
from .exceptions import VersionControlError
from .feature_logging import observability_hooks
from .models import (
    ACTION_ADOPT,
    ACTION_CREATE,
    ACTION_REUSE,
    ReconcileOutcome,
    SeedOutcome,
)
from .vcs import NoVersionControl, VersionControl

DETACHED_HEAD = "HEAD"


class Workspace:
    """Manage feature directories and spec files within a repository."""

    def __init__(
        self,
        root: Path | str,
        *,
        vcs: Optional[VersionControl] = None,
        vcs_available: bool = False,
        settings: Optional[FeatureSettings] = None,
    ):
        self.root = Path(root).resolve()
        self.settings = settings or FeatureSettings()
        self.vcs = vcs if vcs is not None else NoVersionControl()
        self.vcs_available = vcs_available and vcs is not None
        self.specs_dir = self.settings.specs_root(self.root)
        self.logger = logging.getLogger("speckfeature.workspace")

    @property
    def template_path(self) -> Path:
        """Get path to the spec template."""
        return self.settings.template_path(self.root)

    def feature_dir(self, branch_name: str) -> Path:
        """Get the directory for a feature without creating it."""
        return self.specs_dir / branch_name

    # ------------------------------------------------------------------
    # Branch / folder reconciliation
    # ------------------------------------------------------------------

    def current_branch(self, warnings: Optional[List[str]] = None) -> Optional[str]:
        """Return the checked-out branch, or ``None`` when it cannot be determined.

        A failed query is logged and, when ``warnings`` is given, recorded there.
        """
        if not self.vcs_available:
            return None
        try:
            branch = self.vcs.current_branch()
        except VersionControlError as e:
            message = f"Could not determine current branch: {e}"
            self.logger.warning(message)
            if warnings is not None:
                warnings.append(message)
            return None
        if not branch or branch == DETACHED_HEAD:
            return None
        return branch

    def reconcile(self, candidate: str) -> ReconcileOutcome:
        """Pick the branch and feature directory for ``candidate``.

        An existing feature directory for the current branch is reused
        as-is. A current branch that is not a trunk branch is adopted and
        gets a directory if it lacks one. Otherwise a new branch named
        ``candidate`` is attempted and its directory created.
        """
        warnings: List[str] = []
        current = self.current_branch(warnings)

        if current and self.feature_dir(current).is_dir():
            self.logger.info(f"Reusing existing feature directory for current branch '{current}'")
            self._check_adopted_length(current, warnings)
            outcome = ReconcileOutcome(
                action=ACTION_REUSE,
                branch_name=current,
                feature_dir=self.feature_dir(current),
            )
        elif current and current not in self.settings.trunk_branches:
            self.logger.info(f"Adopting current branch '{current}' for the feature")
            self._check_adopted_length(current, warnings)
            feature_dir, created = self._ensure_dir(current)
            outcome = ReconcileOutcome(
                action=ACTION_ADOPT,
                branch_name=current,
                feature_dir=feature_dir,
                dir_created=created,
            )
        else:
            outcome = self._create_new(candidate)

        outcome.warnings[:0] = warnings

        issues = outcome.validate()
        if issues:
            raise RuntimeError(f"Inconsistent reconcile outcome for '{outcome.branch_name}': {'; '.join(issues)}")

        observability_hooks.log_workflow_event(
            "feature_reconciled",
            feature_id=outcome.branch_name,
            action=outcome.action,
            branch_created=outcome.branch_created,
            dir_created=outcome.dir_created,
        )
        return outcome

    def _check_adopted_length(self, branch_name: str, warnings: List[str]) -> None:
        # An existing branch cannot be renamed here, only reported
        size = len(branch_name.encode("utf-8"))
        if size > self.settings.max_branch_bytes:
            message = (
                f"Current branch '{branch_name}' is {size} bytes, over the "
                f"{self.settings.max_branch_bytes}-byte limit; using it unchanged"
            )
            self.logger.warning(message)
            warnings.append(message)

    def _create_new(self, candidate: str) -> ReconcileOutcome:
        warnings: List[str] = []
        branch_created = False

        if self.vcs_available:
            try:
                self.vcs.create_branch(candidate)
                branch_created = True
                self.logger.info(f"Created and switched to branch '{candidate}'")
            except VersionControlError as e:
                message = f"Failed to create git branch '{candidate}': {e}. Continuing with directory setup only."
                self.logger.warning(message)
                warnings.append(message)
        else:
            message = f"Version control not available; skipped branch creation for '{candidate}'"
            self.logger.warning(message)
            warnings.append(message)

        feature_dir, created = self._ensure_dir(candidate)
        return ReconcileOutcome(
            action=ACTION_CREATE,
            branch_name=candidate,
            feature_dir=feature_dir,
            branch_created=branch_created,
            dir_created=created,
            warnings=warnings,
        )

    def _ensure_dir(self, branch_name: str) -> Tuple[Path, bool]:
        path = self.feature_dir(branch_name)
        existed = path.is_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path, not existed

    # ------------------------------------------------------------------
    # Spec seeding
    # ------------------------------------------------------------------

    def seed_spec(self, feature_dir: Path) -> SeedOutcome:
        """Ensure ``spec.md`` exists in ``feature_dir``; never overwrites."""
        spec_file = feature_dir / SPEC_FILENAME

        if spec_file.exists():
            self.logger.info(f"Reusing existing spec file {spec_file}")
            return SeedOutcome(spec_file=spec_file, created=False)

        template = self.template_path
        if template.is_file():
            shutil.copyfile(template, spec_file)
            self.logger.info(f"Created {spec_file} from template {template}")
            outcome = SeedOutcome(spec_file=spec_file, created=True, template_used=template)
        else:
            spec_file.touch()
            message = f"Spec template not found at {template}; created empty {spec_file}"
            self.logger.warning(message)
            outcome = SeedOutcome(spec_file=spec_file, created=True, warnings=[message])

        observability_hooks.log_workflow_event(
            "spec_seeded",
            feature_id=feature_dir.name,
            spec_file=str(spec_file),
            template_used=str(outcome.template_used) if outcome.template_used else None,
        )
        return outcome

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list_features(self) -> List[Dict[str, Optional[str]]]:
        """List all feature directories under the specs root."""
        if not self.specs_dir.is_dir():
            return []
        features: List[Dict[str, Optional[str]]] = []
        for path in sorted(p for p in self.specs_dir.iterdir() if p.is_dir()):
            spec_file = path / SPEC_FILENAME
            features.append(
                {
                    "feature_id": path.name,
                    "feature_dir": str(path),
                    "spec_path": str(spec_file) if spec_file.exists() else None,
                }
            )
        return features
