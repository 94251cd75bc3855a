"""Collect the unique labels and milestones referenced by a snapshot."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .models import Label, Milestone, SourceIssue

logger: logging.Logger = logging.getLogger(__name__)


class CollectedMetadata(NamedTuple):
    """Labels and milestones used by the source issues."""

    labels: dict[str, Label]
    """Label name -> label, from the last issue that carried it."""
    milestones: dict[str, Milestone]
    """Milestone title -> milestone, from the last issue that referenced it."""


def collect_metadata(issues: Iterable[SourceIssue]) -> CollectedMetadata:
    """Scan all issues once and deduplicate their labels and milestones.

    Later occurrences overwrite earlier ones with the same name/title.
    """
    labels: dict[str, Label] = {}
    milestones: dict[str, Milestone] = {}

    for issue in issues:
        for label in issue.labels:
            labels[label.name] = label
        if issue.milestone is not None:
            milestones[issue.milestone.title] = issue.milestone

    logger.info(f"Found {len(labels)} unique labels and {len(milestones)} unique milestones.")
    return CollectedMetadata(labels=labels, milestones=milestones)
