"""Speck-It feature bootstrap: branch naming and feature workspace setup."""

from .config import FeatureSettings
from .exceptions import (
    EmptyDescriptionError,
    FeatureError,
    InvalidBranchNameError,
    RepositoryRootNotFound,
    VersionControlError,
)
from .models import FeatureResult, RepositoryLocation
from .naming import clamp_branch_name, derive_branch_name, sanitize
from .workflow import FeatureCreator, create_feature
from .workspace import Workspace

__all__ = [
    "FeatureSettings",
    "FeatureError",
    "EmptyDescriptionError",
    "InvalidBranchNameError",
    "RepositoryRootNotFound",
    "VersionControlError",
    "FeatureResult",
    "RepositoryLocation",
    "clamp_branch_name",
    "derive_branch_name",
    "sanitize",
    "FeatureCreator",
    "create_feature",
    "Workspace",
]
