"""
Milestone provisioning in the target repository.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from typing import TYPE_CHECKING, Any

import requests
from github import GithubException

from .exceptions import MigrationError
from .models import MigrationStats, OperationResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from github.Milestone import Milestone as GithubMilestone
    from github.Repository import Repository

    from .models import Milestone

logger: logging.Logger = logging.getLogger(__name__)

# Milestone title -> milestone in the target repository
MilestoneMap = dict[str, "GithubMilestone"]

RFC3339_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}[Tt][0-9]{2}:[0-9]{2}:[0-9]{2}"
    r"(\.[0-9]+)?([Zz]|[+-][0-9]{2}:[0-9]{2})\Z"
)


def parse_due_date(due_on: str | None) -> dt.date | None:
    """Parse an RFC 3339 date-time string into the due date of a milestone.

    Only full date-times with an offset are accepted; a bare date such as
    "2024-06-30" is rejected. The date is taken in UTC.

    Args:
        due_on: Date-time text such as "2024-06-30T07:00:00Z", or None

    Returns:
        The UTC date, or None if there is no due date or it cannot be parsed
    """
    if not due_on:
        return None

    if not RFC3339_PATTERN.match(due_on):
        logger.warning(f"Could not parse due date {due_on!r}: not an RFC 3339 date-time. Creating without due date.")
        return None

    try:
        parsed = dt.datetime.fromisoformat(due_on.upper())
    except ValueError as e:
        logger.warning(f"Could not parse due date {due_on!r}: {e}. Creating without due date.")
        return None
    return parsed.astimezone(dt.UTC).date()


def fetch_existing_milestones(repo: Repository) -> MilestoneMap:
    """Return all milestones in the target, open and closed, keyed by title.

    Raises:
        MigrationError: If the milestone list cannot be fetched
    """
    try:
        return {milestone.title: milestone for milestone in repo.get_milestones(state="all")}
    except (GithubException, requests.RequestException) as e:
        msg = f"Failed to fetch existing milestones: {e}"
        raise MigrationError(msg) from e


def create_milestone(repo: Repository, milestone: Milestone) -> tuple[OperationResult, GithubMilestone | None]:
    """Create a single milestone, reporting failure as a value."""
    subject = f"milestone '{milestone.title}'"

    # Only include due_on if it parses
    milestone_params: dict[str, Any] = {
        "title": milestone.title,
        "description": milestone.description,
    }
    due_date = parse_due_date(milestone.due_on)
    if due_date is not None:
        milestone_params["due_on"] = due_date

    try:
        created = repo.create_milestone(**milestone_params)
    except (GithubException, requests.RequestException) as e:
        return OperationResult.failure(subject, e), None
    return OperationResult.success(subject), created


def provision_milestones(
    repo: Repository,
    milestones: Mapping[str, Milestone],
    stats: MigrationStats | None = None,
) -> MilestoneMap:
    """Create every collected milestone whose title is not in the target yet.

    A milestone that already exists, in any state, is never created again.
    A failed creation is logged and leaves the title out of the returned map,
    so issues referencing it are created without a milestone.

    Returns:
        Mapping from milestone title to the target milestone

    Raises:
        MigrationError: If the existing milestones cannot be fetched
    """
    stats = stats if stats is not None else MigrationStats()
    milestone_map = fetch_existing_milestones(repo)

    for title, milestone in milestones.items():
        if title in milestone_map:
            logger.debug(f"Using existing milestone #{milestone_map[title].number}: {title}")
            stats.milestones_existing += 1
            continue

        logger.info(f"Creating milestone: {title}")
        outcome, created = create_milestone(repo, milestone)
        if created is None:
            logger.warning(f"Failed to create milestone '{title}': {outcome.error}")
            stats.milestones_failed += 1
            stats.record_failure(outcome)
            continue

        milestone_map[title] = created
        stats.milestones_created += 1
        logger.debug(f"Created milestone #{created.number}: {title}")

    return milestone_map
