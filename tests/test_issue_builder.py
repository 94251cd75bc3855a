"""Tests for consolidated comment building."""

from __future__ import annotations

import pytest

from issue_copier.issue_builder import build_consolidated_comment, format_attribution
from issue_copier.models import Comment


@pytest.mark.unit
class TestFormatAttribution:
    def test_mentions_author(self) -> None:
        assert format_attribution("alice") == "**Comment from @alice:**\n\n"


@pytest.mark.unit
class TestBuildConsolidatedComment:
    def test_no_comments(self) -> None:
        assert build_consolidated_comment([]) is None

    def test_single_comment_layout(self) -> None:
        body = build_consolidated_comment([Comment(body="Looks good", author="bob")])
        assert body == (
            "### Comments from original issue:\n\n---\n\n**Comment from @bob:**\n\nLooks good\n\n---\n\n"
        )

    def test_attributions_in_original_order_with_one_header(self) -> None:
        comments = [
            Comment(body="first", author="alice"),
            Comment(body="second", author="bob"),
            Comment(body="third", author="alice"),
        ]

        body = build_consolidated_comment(comments)

        assert body is not None
        assert body.count("### Comments from original issue:") == 1
        positions = [
            body.index("**Comment from @alice:**\n\nfirst"),
            body.index("**Comment from @bob:**\n\nsecond"),
            body.index("**Comment from @alice:**\n\nthird"),
        ]
        assert positions == sorted(positions)
        assert body.count("---\n\n") == 4
