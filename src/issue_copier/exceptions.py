"""
Custom exception classes for the GitHub issue copier.
"""

from __future__ import annotations


class MigrationError(Exception):
    """Base exception for fatal migration errors."""


class SnapshotError(MigrationError):
    """Raised when the issue snapshot file cannot be read or is malformed."""
