"""Load the exported issue snapshot.

The snapshot is the JSON array produced by, for example::

    gh issue list --state all --repo owner/source \\
        --json number,title,body,labels,comments,milestone > issues.json

Only the fields needed for copying are read; anything else in the records is
ignored.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .exceptions import SnapshotError
from .models import Comment, Label, Milestone, SourceIssue

logger: logging.Logger = logging.getLogger(__name__)

# Login GitHub shows for comments whose author account was deleted
GHOST_LOGIN = "ghost"


def _require(record: dict[str, Any], key: str, context: str) -> Any:  # noqa: ANN401 - raw JSON value
    if key not in record:
        msg = f"{context} is missing required field '{key}'"
        raise SnapshotError(msg)
    return record[key]


def _require_str(record: dict[str, Any], key: str, context: str, *, nullable: bool = False) -> str:
    """Get a required text field. With ``nullable``, null becomes an empty string."""
    value = _require(record, key, context)
    if value is None and nullable:
        return ""
    if not isinstance(value, str):
        msg = f"{context} field '{key}' must be a string, got {type(value).__name__}"
        raise SnapshotError(msg)
    return value


def _optional_str(record: dict[str, Any], key: str, context: str) -> str | None:
    value = record.get(key)
    if value is not None and not isinstance(value, str):
        msg = f"{context} field '{key}' must be a string or null, got {type(value).__name__}"
        raise SnapshotError(msg)
    return value


def _require_list(record: dict[str, Any], key: str, context: str) -> list[Any]:
    value = _require(record, key, context)
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"{context} field '{key}' must be an array, got {type(value).__name__}"
        raise SnapshotError(msg)
    return value


def _require_object(raw: object, context: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        msg = f"{context} must be an object, got {type(raw).__name__}"
        raise SnapshotError(msg)
    return raw


def _parse_label(raw: object, context: str) -> Label:
    record = _require_object(raw, context)
    return Label(
        name=_require_str(record, "name", context),
        color=_optional_str(record, "color", context) or "",
        description=_optional_str(record, "description", context) or "",
    )


def _parse_milestone(raw: object, context: str) -> Milestone | None:
    if raw is None:
        return None
    record = _require_object(raw, context)
    return Milestone(
        title=_require_str(record, "title", context),
        description=_optional_str(record, "description", context) or "",
        due_on=_optional_str(record, "dueOn", context),
    )


def _parse_comment(raw: object, context: str) -> Comment:
    record = _require_object(raw, context)
    login: str | None = None
    if record.get("author") is not None:
        author = _require_object(record["author"], f"{context} author")
        login = _optional_str(author, "login", f"{context} author")
    return Comment(
        body=_require_str(record, "body", context, nullable=True),
        author=login or GHOST_LOGIN,
    )


def parse_issue(record: dict[str, Any], index: int) -> SourceIssue:
    """Convert one snapshot record into a SourceIssue.

    Raises:
        SnapshotError: If a required field is missing or has the wrong type
    """
    record = _require_object(record, f"Snapshot entry {index}")

    context = f"Snapshot entry {index}"
    number = _require(record, "number", context)
    if isinstance(number, bool) or not isinstance(number, int):
        msg = f"{context} has a non-integer issue number: {number!r}"
        raise SnapshotError(msg)

    context = f"Issue #{number}"
    return SourceIssue(
        number=number,
        title=_require_str(record, "title", context),
        body=_require_str(record, "body", context, nullable=True),
        labels=tuple(_parse_label(raw, f"{context} label") for raw in _require_list(record, "labels", context)),
        comments=tuple(
            _parse_comment(raw, f"{context} comment") for raw in _require_list(record, "comments", context)
        ),
        milestone=_parse_milestone(_require(record, "milestone", context), f"{context} milestone"),
    )


def load_snapshot(path: str | Path) -> list[SourceIssue]:
    """Read and parse the snapshot file.

    Args:
        path: Path to the JSON file holding the array of issue records

    Returns:
        Source issues in file order

    Raises:
        SnapshotError: If the file cannot be read or is not a valid snapshot
    """
    try:
        raw_text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Error reading JSON file {path}: {e}"
        raise SnapshotError(msg) from e

    try:
        records: object = json.loads(raw_text)
    except json.JSONDecodeError as e:
        msg = f"Error parsing JSON data in {path}: {e}"
        raise SnapshotError(msg) from e

    if not isinstance(records, list):
        msg = f"Expected a JSON array of issues in {path}, got {type(records).__name__}"
        raise SnapshotError(msg)

    issues = [parse_issue(record, index) for index, record in enumerate(records)]
    logger.info(f"Successfully parsed {len(issues)} issues from the file.")
    return issues
