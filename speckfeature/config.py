"""Runtime configuration for the feature bootstrap tooling.

Settings are read from environment variables so the CLI and the MCP
server resolve the same layout without extra configuration files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

MAX_BRANCH_BYTES = 244
TRUNK_BRANCHES = ("main", "master", "develop")
VCS_METADATA_DIR = ".git"
DEFAULT_CONFIG_DIR = ".specify"
DEFAULT_SPECS_DIR = "specs"
SPEC_FILENAME = "spec.md"
TEMPLATE_RELATIVE_PATH = Path("templates") / "spec-template.md"
FEATURE_ENV_VAR = "SPECIFY_FEATURE"

SPECS_DIR_ENV = "SPECKIT_SPECS_DIR"
CONFIG_DIR_ENV = "SPECKIT_CONFIG_DIR"
LOG_LEVEL_ENV = "SPECKIT_LOG_LEVEL"
PROJECT_ROOT_ENV = "SPECKIT_PROJECT_ROOT"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class FeatureSettings:
    """Layout and naming settings for a feature bootstrap run."""

    specs_dir_name: str = DEFAULT_SPECS_DIR
    config_dir_name: str = DEFAULT_CONFIG_DIR
    log_level: str = "INFO"
    project_root: Optional[Path] = None
    max_branch_bytes: int = MAX_BRANCH_BYTES
    trunk_branches: Tuple[str, ...] = field(default=TRUNK_BRANCHES)

    @property
    def markers(self) -> Tuple[str, ...]:
        """Directory names whose presence marks a repository root."""
        return (VCS_METADATA_DIR, self.config_dir_name)

    def template_path(self, root: Path) -> Path:
        """Location of the spec template under the given repository root."""
        return root / self.config_dir_name / TEMPLATE_RELATIVE_PATH

    def specs_root(self, root: Path) -> Path:
        return root / self.specs_dir_name

    @classmethod
    def from_env(cls) -> "FeatureSettings":
        """Build settings from ``SPECKIT_*`` environment variables."""
        project_root: Optional[Path] = None
        env_root = os.getenv(PROJECT_ROOT_ENV)
        if env_root:
            project_root = Path(env_root).expanduser().resolve()
            if not project_root.exists():
                raise ValueError(
                    f"Environment variable {PROJECT_ROOT_ENV} points to '{env_root}', which does not exist."
                )

        log_level = (os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"Environment variable {LOG_LEVEL_ENV} is '{log_level}'; expected one of {', '.join(LOG_LEVELS)}."
            )

        return cls(
            specs_dir_name=os.getenv(SPECS_DIR_ENV) or DEFAULT_SPECS_DIR,
            config_dir_name=os.getenv(CONFIG_DIR_ENV) or DEFAULT_CONFIG_DIR,
            log_level=log_level,
            project_root=project_root,
        )
