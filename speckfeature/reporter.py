"""Output formatting for feature creation results."""

from __future__ import annotations

import json

from .config import FEATURE_ENV_VAR
from .models import FeatureResult


def format_json(result: FeatureResult) -> str:
    """Single compact JSON record with ``BRANCH_NAME`` and ``SPEC_FILE``."""
    return json.dumps(result.to_record(), separators=(",", ":"))


def format_text(result: FeatureResult) -> str:
    lines = [
        f"BRANCH_NAME: {result.branch_name}",
        f"SPEC_FILE: {result.spec_file}",
        f"{FEATURE_ENV_VAR} environment variable set to: {result.branch_name}",
    ]
    return "\n".join(lines)


def format_result(result: FeatureResult, *, as_json: bool = False) -> str:
    return format_json(result) if as_json else format_text(result)
