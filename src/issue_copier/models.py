"""Data models for copying issues from a snapshot into a target repository.

The snapshot models mirror the records written by ``gh issue list --json``.
They are immutable once loaded; the pipeline phases only read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Source issue number -> newly created issue number
IdentifierMapping = dict[int, int]


@dataclass(frozen=True)
class Label:
    """A label/tag that can be applied to issues. Identity is the name."""

    name: str
    color: str  # Hex color, usually without '#' prefix (e.g., "d73a4a")
    description: str = ""


@dataclass(frozen=True)
class Milestone:
    """A milestone referenced by a source issue. Identity is the title.

    ``due_on`` is the raw date-time text from the snapshot. It is parsed only
    when the milestone is created in the target.
    """

    title: str
    description: str = ""
    due_on: str | None = None


@dataclass(frozen=True)
class Comment:
    """A comment on a source issue."""

    body: str
    author: str  # Login of the comment author


@dataclass(frozen=True)
class SourceIssue:
    """An issue from the exported snapshot.

    The body may embed ``#<number>`` references to other source issues. These
    are rewritten only after every issue has been created in the target.
    """

    number: int
    title: str
    body: str = ""
    labels: tuple[Label, ...] = ()
    comments: tuple[Comment, ...] = ()
    milestone: Milestone | None = None

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a single remote operation on one unit of work."""

    subject: str
    ok: bool
    error: str | None = None

    @classmethod
    def success(cls, subject: str) -> OperationResult:
        return cls(subject=subject, ok=True)

    @classmethod
    def failure(cls, subject: str, error: object) -> OperationResult:
        return cls(subject=subject, ok=False, error=str(error))


@dataclass
class MigrationStats:
    """Statistics collected during migration."""

    labels_created: int = 0
    labels_existing: int = 0
    labels_failed: int = 0
    milestones_created: int = 0
    milestones_existing: int = 0
    milestones_failed: int = 0
    issues_created: int = 0
    issues_failed: int = 0
    comments_posted: int = 0
    comments_failed: int = 0
    bodies_rewritten: int = 0
    bodies_failed: int = 0
    warnings: list[str] = field(default_factory=list)

    def record_failure(self, result: OperationResult) -> None:
        """Remember a non-fatal failure for the final report."""
        self.warnings.append(f"{result.subject}: {result.error}")

    def as_dict(self) -> dict[str, int]:
        return {
            "labels_created": self.labels_created,
            "labels_existing": self.labels_existing,
            "labels_failed": self.labels_failed,
            "milestones_created": self.milestones_created,
            "milestones_existing": self.milestones_existing,
            "milestones_failed": self.milestones_failed,
            "issues_created": self.issues_created,
            "issues_failed": self.issues_failed,
            "comments_posted": self.comments_posted,
            "comments_failed": self.comments_failed,
            "bodies_rewritten": self.bodies_rewritten,
            "bodies_failed": self.bodies_failed,
        }
