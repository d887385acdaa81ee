"""Command line entry point: ``create-new-feature``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import FEATURE_ENV_VAR, LOG_LEVELS, FeatureSettings
from .exceptions import FeatureError
from .feature_logging import setup_logging
from .reporter import format_result
from .workflow import FeatureCreator

EPILOG = """\
examples:
  create-new-feature 'Add user authentication system' --short-name user-auth
  create-new-feature 'Implement OAuth2 integration for API'
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-new-feature",
        description=(
            "Create or reuse a feature branch and its specs/<branch>/spec.md "
            "workspace from a free-text feature description."
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--json", action="store_true", help="Output in JSON format")
    parser.add_argument(
        "--short-name",
        metavar="NAME",
        help="Provide a custom short name (2-4 words) for the branch",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        metavar="LEVEL",
        help=f"Logging level for stderr output, one of {', '.join(LOG_LEVELS)} (default: $SPECKIT_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write JSON logs to this file")
    parser.add_argument("description", nargs="*", help="Feature description")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    description = " ".join(args.description).strip()
    if not description:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: a feature description is required", file=sys.stderr)
        return 1

    if args.log_level and args.log_level not in LOG_LEVELS:
        print(f"Error: unknown log level '{args.log_level}'; expected one of {', '.join(LOG_LEVELS)}", file=sys.stderr)
        return 1

    try:
        settings = FeatureSettings.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.log_level or settings.log_level, args.log_file)
    logger = logging.getLogger("speckfeature.cli")

    try:
        result = FeatureCreator(settings=settings).create(description, args.short_name)
    except FeatureError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Exporting is left to the caller; the value is printed and returned
    logger.debug(f"{FEATURE_ENV_VAR}={result.branch_name}")

    print(format_result(result, as_json=args.json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
