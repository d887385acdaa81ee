"""MCP server exposing Speck-It feature bootstrap tools."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.resources import TextResource

from speckfeature import FeatureCreator, FeatureSettings, Workspace
from speckfeature.config import PROJECT_ROOT_ENV
from speckfeature.feature_logging import setup_logging
from speckfeature.locator import find_marker_root
from speckfeature.naming import meaningful_words, resolve_branch_name

mcp = FastMCP("speck-feature")

FEATURES_URI = "speck-feature://features"


def _resolve_start(root: Optional[str]) -> Path:
    if root:
        resolved = Path(root).expanduser().resolve()
        if not resolved.exists():
            raise ValueError(f"Provided root '{root}' does not exist.")
        return resolved

    env_root = os.getenv(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.exists():
            raise ValueError(
                f"Environment variable {PROJECT_ROOT_ENV} points to '{env_root}', which does not exist."
            )
        return env_path

    return Path.cwd().resolve()


@mcp.tool()
def create_new_feature(
    description: str,
    short_name: Optional[str] = None,
    root: Optional[str] = None,
) -> Dict[str, Any]:
    """STEP 1: Create or reuse the feature branch and specs/<branch>/spec.md workspace.
    Derives a short branch name from the description unless short_name is given.
    Safe to call again on the same branch: existing folders and spec files are reused."""

    creator = FeatureCreator(_resolve_start(root), settings=FeatureSettings.from_env())
    result = creator.create(description, short_name)

    payload = result.to_dict()
    payload["record"] = result.to_record()
    payload["next_suggested_step"] = "fill_spec"
    payload["workflow_tip"] = f"Next: write the feature specification in {result.spec_file}"
    return payload


@mcp.tool()
def derive_branch_name(description: str, short_name: Optional[str] = None) -> Dict[str, Any]:
    """Preview the branch name a description would produce, without touching git or the filesystem."""

    settings = FeatureSettings.from_env()
    branch_name, warning = resolve_branch_name(
        description,
        short_name,
        max_bytes=settings.max_branch_bytes,
    )
    return {
        "branch_name": branch_name,
        "meaningful_words": meaningful_words(description),
        "truncated": warning is not None,
        "warnings": [warning] if warning else [],
    }


def _workspace(root: Optional[str]) -> Workspace:
    settings = FeatureSettings.from_env()
    repo_root = find_marker_root(_resolve_start(root), settings.markers)
    return Workspace(repo_root, settings=settings)


@mcp.tool()
def list_features(root: Optional[str] = None) -> Dict[str, Any]:
    """Enumerate feature directories that exist under the specs root."""

    workspace = _workspace(root)
    return {"specs_dir": str(workspace.specs_dir), "features": workspace.list_features()}


@mcp.resource(FEATURES_URI)
def resource_features():
    """Resource view exposing feature directories for discovery."""

    try:
        workspace = _workspace(None)
    except ValueError:
        return TextResource(
            uri=FEATURES_URI,
            name="features",
            text=f"No repository root detected. Launch the server inside a repository or set {PROJECT_ROOT_ENV}.",
        )

    features = workspace.list_features()
    if not features:
        return TextResource(uri=FEATURES_URI, name="features", text="No features have been created yet.")

    lines = ["Speck-It Features"]
    for feature in features:
        lines.append("")
        lines.append(f"- {feature['feature_id']}")
        lines.append(f"  Spec: {feature['spec_path'] or '(missing)'}")

    return TextResource(uri=FEATURES_URI, name="features", text="\n".join(lines))


def run() -> None:
    try:
        settings = FeatureSettings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)
    setup_logging(settings.log_level)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run()
