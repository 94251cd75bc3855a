"""Pipeline that copies a snapshot of issues into the target repository.

Migration Flow
--------------
The phases run strictly one after another; each hands its result to the
next and never touches it again:

Phase 1: Collect
    - Deduplicate the labels and milestones used by the snapshot

Phase 2: Provision
    - Create missing labels
    - Create missing milestones, building the title -> milestone map

Phase 3: Issues and Comments
    For each issue (in snapshot order):
        a. Create the issue with its original body, labels and milestone
        b. Record old number -> new number
        c. Post all original comments as one consolidated comment

Phase 4: References
    - Rewrite ``#<old>`` to ``#<new>`` in each copied body
    - Edit the issue only when the body changed

Error Handling
--------------
- Fetching the existing labels/milestones failing: MigrationError, the run stops
- Anything per label/milestone/issue/comment/edit: logged, counted, skipped
- No retries and no rollback. Re-running is safe for labels and milestones
  but duplicates issues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .issues import replicate_issues
from .labels import provision_labels
from .metadata import collect_metadata
from .milestones import provision_milestones
from .models import IdentifierMapping, MigrationStats
from .references import update_issue_references

if TYPE_CHECKING:
    from collections.abc import Sequence

    from github.Repository import Repository

    from .milestones import MilestoneMap
    from .models import SourceIssue

logger = logging.getLogger(__name__)


@dataclass
class MigrationResult:
    """Result of a migration run."""

    stats: MigrationStats
    number_map: IdentifierMapping = field(default_factory=dict)  # old issue number -> new issue number
    milestone_map: MilestoneMap = field(default_factory=dict)  # milestone title -> target milestone

    @property
    def success(self) -> bool:
        """True when every unit of work succeeded."""
        return not self.stats.warnings


class IssueCopier:
    """Copies source issues into a target repository.

    Usage:
        repo = github_utils.get_repo(client, "owner", "repo")
        result = IssueCopier(repo).migrate(load_snapshot("issues.json"))
    """

    _repo: Repository

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def migrate(self, issues: Sequence[SourceIssue]) -> MigrationResult:
        """Execute all four phases.

        Raises:
            MigrationError: If existing labels or milestones cannot be fetched
        """
        stats = MigrationStats()

        logger.info("Phase 1: Collecting unique labels and milestones")
        metadata = collect_metadata(issues)

        logger.info("Phase 2: Creating labels and milestones in target repository")
        _ = provision_labels(self._repo, metadata.labels, stats)
        milestone_map = provision_milestones(self._repo, metadata.milestones, stats)

        logger.info("Phase 3: Creating issues and comments")
        number_map = replicate_issues(self._repo, issues, milestone_map, stats)

        logger.info("Phase 4: Updating issue bodies with new links")
        _ = update_issue_references(self._repo, issues, number_map, stats)

        if stats.warnings:
            logger.warning(f"Migration finished with {len(stats.warnings)} warning(s)")
        else:
            logger.info("All issues created and linked successfully!")

        return MigrationResult(stats=stats, number_map=number_map, milestone_map=milestone_map)
