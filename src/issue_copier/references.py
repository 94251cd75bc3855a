"""
Rewrite ``#<number>`` issue references to point at the newly created issues.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

import requests
from github import GithubException

from .models import MigrationStats, OperationResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from github.Repository import Repository

    from .models import SourceIssue

logger: logging.Logger = logging.getLogger(__name__)

ISSUE_REFERENCE_PATTERN = re.compile(r"#([0-9]+)")


def rewrite_references(text: str, number_map: Mapping[int, int]) -> str:
    """Replace references to copied issues with their new numbers.

    References to issues without a mapping entry (not copied, failed, or
    external) are left as they are.
    """

    def _replace(match: re.Match[str]) -> str:
        try:
            old_number = int(match.group(1))
        except ValueError:
            # Longer than the int conversion limit, cannot be a mapped issue
            return match.group(0)
        new_number = number_map.get(old_number)
        if new_number is None:
            return match.group(0)
        return f"#{new_number}"

    return ISSUE_REFERENCE_PATTERN.sub(_replace, text)


def update_issue_body(repo: Repository, new_number: int, body: str) -> OperationResult:
    """Set the body of an issue in the target, reporting failure as a value."""
    subject = f"body of new issue #{new_number}"
    try:
        repo.get_issue(new_number).edit(body=body)
    except (GithubException, requests.RequestException) as e:
        return OperationResult.failure(subject, e)
    return OperationResult.success(subject)


def update_issue_references(
    repo: Repository,
    issues: Iterable[SourceIssue],
    number_map: Mapping[int, int],
    stats: MigrationStats | None = None,
) -> int:
    """Rewrite references in the bodies of all copied issues.

    An edit is submitted only when the body actually changed.

    Returns:
        Number of issue bodies updated
    """
    stats = stats if stats is not None else MigrationStats()
    updated = 0

    for issue in issues:
        new_number = number_map.get(issue.number)
        if new_number is None:
            logger.info(f"Skipping body update for old issue #{issue.number} as it was not created.")
            continue

        new_body = rewrite_references(issue.body, number_map)
        if new_body == issue.body:
            continue

        logger.info(f"Updating body for new issue #{new_number} (from old #{issue.number})...")
        outcome = update_issue_body(repo, new_number, new_body)
        if outcome.ok:
            updated += 1
            stats.bodies_rewritten += 1
        else:
            logger.warning(f"Failed to update {outcome.subject}: {outcome.error}")
            stats.bodies_failed += 1
            stats.record_failure(outcome)

    logger.info(f"Updated references in {updated} issue bodies")
    return updated
