"""Build the consolidated comment posted on each copied issue."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import Comment

COMMENTS_HEADER = "### Comments from original issue:\n\n"
SEPARATOR = "---\n\n"


def format_attribution(author: str) -> str:
    """Attribution line placed above each original comment."""
    return f"**Comment from @{author}:**\n\n"


def build_consolidated_comment(comments: Sequence[Comment]) -> str | None:
    """Aggregate all original comments into a single comment body.

    Args:
        comments: Comments of the source issue, in original order

    Returns:
        The consolidated Markdown body, or None if there are no comments
    """
    if not comments:
        return None

    body = COMMENTS_HEADER + SEPARATOR
    for comment in comments:
        body += format_attribution(comment.author)
        body += comment.body
        body += "\n\n" + SEPARATOR
    return body
