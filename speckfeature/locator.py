"""Repository root discovery."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from .exceptions import RepositoryRootNotFound, VersionControlError
from .feature_logging import observability_hooks
from .models import RepositoryLocation
from .vcs import VersionControl

logger = logging.getLogger("speckfeature.locator")


def find_marker_root(start: Path | str, markers: Iterable[str]) -> Path:
    """Return the nearest directory at or above ``start`` holding any marker."""
    markers = list(markers)
    current = Path(start).resolve()
    for base in (current, *current.parents):
        for marker in markers:
            if (base / marker).exists():
                return base
    raise RepositoryRootNotFound(current, markers)


def locate_repository(
    start: Path | str,
    vcs: VersionControl,
    markers: Iterable[str],
) -> RepositoryLocation:
    """Resolve the repository root, preferring what version control reports.

    The marker search is only consulted when version control fails or is
    absent, in which case the returned location reports
    ``vcs_available=False``.
    """
    vcs_error: Optional[VersionControlError] = None
    try:
        root = vcs.repository_root()
    except VersionControlError as e:
        vcs_error = e
    else:
        location = RepositoryLocation(root=root, vcs_available=True)
        logger.debug(f"Version control reported repository root {root}")
        observability_hooks.log_workflow_event("repository_located", **location.to_dict())
        return location

    message = f"Version control unavailable ({vcs_error}); falling back to marker search"
    logger.warning(message)
    root = find_marker_root(start, markers)
    location = RepositoryLocation(root=root, vcs_available=False, warnings=[message])
    logger.info(f"Repository root resolved from markers: {root}")
    observability_hooks.log_workflow_event("repository_located", **location.to_dict())
    return location
