"""Feature creation workflow.

Runs the bootstrap pipeline: locate the repository, derive the branch
name, reconcile branch and directory, then seed the spec file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from .config import FeatureSettings
from .exceptions import EmptyDescriptionError, FeatureError
from .feature_logging import log_error_with_context, log_operation, observability_hooks
from .locator import locate_repository
from .models import FeatureResult
from .naming import resolve_branch_name
from .vcs import GitVersionControl, VersionControl
from .workspace import Workspace


class FeatureCreator:
    """Create or reuse the workspace for a new feature."""

    def __init__(
        self,
        start: Optional[Path | str] = None,
        *,
        settings: Optional[FeatureSettings] = None,
        vcs: Optional[VersionControl] = None,
    ):
        self.settings = settings or FeatureSettings()
        self.start = Path(start or self.settings.project_root or Path.cwd()).resolve()
        self.vcs = vcs if vcs is not None else GitVersionControl.detect(self.start)
        self.logger = logging.getLogger("speckfeature.workflow")

    def create(self, description: str, short_name: Optional[str] = None) -> FeatureResult:
        """Run the full pipeline and return what was created or reused."""
        try:
            if not description or not description.strip():
                raise EmptyDescriptionError()

            with log_operation("create_feature", start=str(self.start), short_name=short_name):
                return self._create(description.strip(), short_name)

        except FeatureError as e:
            log_error_with_context(e, {
                "operation": "create_feature",
                "start": str(self.start),
                "short_name": short_name,
            })
            raise

    def _create(self, description: str, short_name: Optional[str]) -> FeatureResult:
        location = locate_repository(self.start, self.vcs, self.settings.markers)

        candidate, truncation_warning = resolve_branch_name(
            description,
            short_name,
            max_bytes=self.settings.max_branch_bytes,
        )
        warnings: List[str] = list(location.warnings)
        if truncation_warning:
            warnings.append(truncation_warning)

        workspace = Workspace(
            location.root,
            vcs=self.vcs,
            vcs_available=location.vcs_available,
            settings=self.settings,
        )
        outcome = workspace.reconcile(candidate)
        warnings.extend(outcome.warnings)

        seed = workspace.seed_spec(outcome.feature_dir)
        warnings.extend(seed.warnings)

        result = FeatureResult(
            branch_name=outcome.branch_name,
            spec_file=seed.spec_file,
            feature_dir=outcome.feature_dir,
            repository_root=location.root,
            action=outcome.action,
            vcs_available=location.vcs_available,
            branch_created=outcome.branch_created,
            spec_created=seed.created,
            template_used=seed.template_used,
            truncated=truncation_warning is not None,
            warnings=warnings,
        )

        self.logger.info(f"Feature '{result.branch_name}' ready at {result.feature_dir} ({result.action})")
        observability_hooks.log_workflow_event(
            "feature_created",
            feature_id=result.branch_name,
            action=result.action,
            spec_file=str(result.spec_file),
            warnings=len(warnings),
        )
        return result


def create_feature(
    description: str,
    short_name: Optional[str] = None,
    *,
    start: Optional[Path | str] = None,
    settings: Optional[FeatureSettings] = None,
    vcs: Optional[VersionControl] = None,
) -> FeatureResult:
    """Convenience wrapper around :class:`FeatureCreator`."""
    return FeatureCreator(start, settings=settings, vcs=vcs).create(description, short_name)
