"""
Issue replication: create each source issue and its consolidated comment.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests
from github import GithubException

from .issue_builder import build_consolidated_comment
from .models import IdentifierMapping, MigrationStats, OperationResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from github.Issue import Issue as GithubIssue
    from github.Repository import Repository

    from .milestones import MilestoneMap
    from .models import SourceIssue

logger: logging.Logger = logging.getLogger(__name__)


def create_issue(
    repo: Repository, issue: SourceIssue, milestone_map: MilestoneMap
) -> tuple[OperationResult, GithubIssue | None]:
    """Create the target issue for one source issue.

    The body is copied unmodified; references are rewritten in a later pass
    once every new issue number is known.
    """
    subject = f'issue "{issue.title}" (old #{issue.number})'

    issue_params: dict[str, Any] = {
        "title": issue.title,
        "body": issue.body,
        "labels": issue.label_names,
    }
    if issue.milestone is not None:
        target_milestone = milestone_map.get(issue.milestone.title)
        if target_milestone is not None:
            issue_params["milestone"] = target_milestone
        else:
            logger.debug(f"Milestone '{issue.milestone.title}' not available, creating old #{issue.number} without it")

    try:
        created = repo.create_issue(**issue_params)
    except (GithubException, requests.RequestException) as e:
        return OperationResult.failure(subject, e), None
    return OperationResult.success(subject), created


def post_consolidated_comment(github_issue: GithubIssue, issue: SourceIssue) -> OperationResult | None:
    """Post all original comments as one comment on the new issue.

    Returns:
        The outcome, or None if the source issue has no comments
    """
    body = build_consolidated_comment(issue.comments)
    if body is None:
        return None

    subject = f"consolidated comment for issue #{github_issue.number}"
    logger.info(f"Consolidating {len(issue.comments)} comments for new issue #{github_issue.number}")
    try:
        _ = github_issue.create_comment(body)
    except (GithubException, requests.RequestException) as e:
        return OperationResult.failure(subject, e)
    return OperationResult.success(subject)


def replicate_issues(
    repo: Repository,
    issues: Iterable[SourceIssue],
    milestone_map: MilestoneMap,
    stats: MigrationStats | None = None,
) -> IdentifierMapping:
    """Create one new issue per source issue, in snapshot order.

    Failed issues are logged and skipped: they get no mapping entry and no
    comment. A failed comment leaves the issue itself in place.

    Args:
        repo: The target GitHub repository
        issues: Source issues in snapshot order
        milestone_map: Milestone title -> target milestone
        stats: Optional statistics to update

    Returns:
        Mapping from source issue number to new issue number, for created issues only
    """
    stats = stats if stats is not None else MigrationStats()
    number_map: IdentifierMapping = {}

    for issue in issues:
        logger.info(f'Creating issue for: "{issue.title}"...')
        outcome, github_issue = create_issue(repo, issue, milestone_map)
        if github_issue is None:
            logger.warning(f"Failed to create {outcome.subject}: {outcome.error}")
            stats.issues_failed += 1
            stats.record_failure(outcome)
            continue

        number_map[issue.number] = github_issue.number
        stats.issues_created += 1
        logger.debug(f"Created issue #{github_issue.number} from old #{issue.number}")

        comment_outcome = post_consolidated_comment(github_issue, issue)
        if comment_outcome is None:
            continue
        if comment_outcome.ok:
            stats.comments_posted += 1
            logger.info("Successfully posted consolidated comments.")
        else:
            logger.warning(f"Failed to create {comment_outcome.subject}: {comment_outcome.error}")
            stats.comments_failed += 1
            stats.record_failure(comment_outcome)

    logger.info(f"Created {len(number_map)} issues")
    return number_map
