"""
GitHub Issue Copier

Copies issues, labels, milestones, comments and cross-issue references from
an exported issue snapshot into another GitHub repository.
"""

from __future__ import annotations

from .cli import main
from .exceptions import MigrationError, SnapshotError
from .migrator import IssueCopier, MigrationResult
from .models import Comment, Label, Milestone, SourceIssue
from .snapshot import load_snapshot
from .utils import setup_logging

# Package version
__version__ = "0.1.0"

__all__ = [
    "Comment",
    "IssueCopier",
    "Label",
    "MigrationError",
    "MigrationResult",
    "Milestone",
    "SnapshotError",
    "SourceIssue",
    "load_snapshot",
    "main",
    "setup_logging",
]
