"""
Command-line interface for the GitHub issue copier.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import github_utils as ghu
from .exceptions import MigrationError
from .migrator import IssueCopier, MigrationResult
from .snapshot import load_snapshot
from .utils import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Copy issues, labels, milestones and comments from an exported snapshot to a GitHub repository",
        epilog=f"The GitHub token is read from the {ghu.TOKEN_ENV_VAR} environment variable.",
    )

    _ = parser.add_argument("--file", help="Path to the JSON file containing the issue data array")
    _ = parser.add_argument("--owner", help="Owner of the target GitHub repository")
    _ = parser.add_argument("--repo", help="Name of the target GitHub repository")
    _ = parser.add_argument(
        "--github-url", help="GitHub API base URL for GitHub Enterprise (default: https://api.github.com)"
    )
    _ = parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase console verbosity (-v for INFO, -vv for DEBUG)",
    )
    return parser


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments, exiting with usage if a required one is missing."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not (args.file and args.owner and args.repo):
        print("All flags (--file, --owner, --repo) are required.", file=sys.stderr)
        parser.print_usage(sys.stderr)
        sys.exit(1)

    return args


def _print_report(result: MigrationResult, repo_path: str) -> None:
    """Print a summary of the migration run."""
    status = "COMPLETED" if result.success else "COMPLETED WITH WARNINGS"
    print(f"\nMigration to {repo_path}: {status}")

    for key, value in result.stats.as_dict().items():
        print(f"  {key}={value}")

    if result.stats.warnings:
        print("\nWarnings:")
        for warning in result.stats.warnings:
            print(f"  - {warning}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging(verbosity=args.verbose)

    try:
        token = ghu.get_token()
        issues = load_snapshot(args.file)
        client = ghu.get_client(token, base_url=args.github_url)
        repo = ghu.get_repo(client, args.owner, args.repo)
        result = IssueCopier(repo).migrate(issues)
    except MigrationError as e:
        logger.critical(str(e))
        sys.exit(1)
    except Exception:
        logger.exception("Migration failed")
        sys.exit(1)

    _print_report(result, f"{args.owner}/{args.repo}")
    sys.exit(0)
