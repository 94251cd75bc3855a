"""
Label provisioning in the target repository.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

import requests
from github import GithubException

from .exceptions import MigrationError
from .models import MigrationStats, OperationResult

if TYPE_CHECKING:
    from collections.abc import Mapping

    from github.Repository import Repository

    from .models import Label

logger: logging.Logger = logging.getLogger(__name__)


def _is_already_exists_error(exc: GithubException) -> bool:
    """Check if a GithubException is a 422 'already_exists' validation error."""
    if exc.status != 422 or not isinstance(exc.data, dict):
        return False
    errors: object = exc.data.get("errors")  # pyright: ignore[reportUnknownVariableType]
    if not isinstance(errors, list):
        return False
    return any(isinstance(e, dict) and e.get("code") == "already_exists" for e in errors)  # pyright: ignore[reportUnknownArgumentType,reportUnknownVariableType]


class LabelProvisioningResult(NamedTuple):
    """Result of label provisioning."""

    created: list[str]
    """Names of labels created by this run."""
    existing: list[str]
    """Names of collected labels that were already present in the target."""
    failed: list[str]
    """Names of labels whose creation failed."""


def fetch_existing_label_names(repo: Repository) -> set[str]:
    """Return the names of all labels currently in the target.

    Raises:
        MigrationError: If the label list cannot be fetched
    """
    try:
        return {label.name for label in repo.get_labels()}
    except (GithubException, requests.RequestException) as e:
        msg = f"Failed to fetch existing labels: {e}"
        raise MigrationError(msg) from e


def create_label(repo: Repository, label: Label) -> OperationResult:
    """Create a single label, reporting failure as a value."""
    subject = f"label [{label.name}]"
    try:
        _ = repo.create_label(
            name=label.name,
            color=label.color.lstrip("#"),
            description=label.description,
        )
    except GithubException as e:
        if _is_already_exists_error(e):
            # Label appeared between get_labels() and create_label()
            logger.debug(f"Label already existed: [{label.name}]")
            return OperationResult.success(subject)
        return OperationResult.failure(subject, e)
    except requests.RequestException as e:
        return OperationResult.failure(subject, e)
    return OperationResult.success(subject)


def provision_labels(
    repo: Repository,
    labels: Mapping[str, Label],
    stats: MigrationStats | None = None,
) -> LabelProvisioningResult:
    """Create every collected label that does not exist in the target yet.

    Failing to create one label is not fatal: it is logged and skipped.

    Args:
        repo: The target GitHub repository
        labels: Collected labels keyed by name
        stats: Optional statistics to update

    Returns:
        LabelProvisioningResult with created, existing and failed names

    Raises:
        MigrationError: If the existing labels cannot be fetched
    """
    stats = stats if stats is not None else MigrationStats()
    existing_names = fetch_existing_label_names(repo)
    result = LabelProvisioningResult(created=[], existing=[], failed=[])

    for name, label in labels.items():
        if name in existing_names:
            logger.debug(f"Using existing label: [{name}]")
            result.existing.append(name)
            stats.labels_existing += 1
            continue

        logger.info(f"Creating label: [{name}]")
        outcome = create_label(repo, label)
        if outcome.ok:
            result.created.append(name)
            stats.labels_created += 1
        else:
            logger.warning(f"Failed to create label [{name}]: {outcome.error}")
            result.failed.append(name)
            stats.labels_failed += 1
            stats.record_failure(outcome)

    logger.info(f"Labels: {len(result.created)} created, {len(result.existing)} already present")
    return result
