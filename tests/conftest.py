"""
Pytest configuration and fixtures.

- Unit tests use a Mock standing in for the PyGithub Repository.
- Integration tests fail on any WARNING logged by the code under test, and are
  skipped unless a real target repository is configured.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from typing import Any, override
from unittest.mock import Mock

import pytest

from issue_copier.models import Comment, Label, Milestone, SourceIssue

INTEGRATION_ENV_VARS = ("GITHUB_TOKEN", "TARGET_GITHUB_TEST_REPO")


class IntegrationTestWarningHandler(logging.Handler):
    """Logging handler that collects warnings emitted during integration tests."""

    records: list[logging.LogRecord]

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records = []

    @override
    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture(autouse=True)
def fail_on_log_warnings_for_integration_tests(request: pytest.FixtureRequest) -> Iterator[None]:
    """Fail integration tests if the code under test logs a warning.

    Warnings are fine when running the tool, but a clean integration run
    against a fresh repository should not produce any.
    """
    if request.node.get_closest_marker("integration") is None:
        yield
        return

    missing = [name for name in INTEGRATION_ENV_VARS if not os.environ.get(name)]
    if missing:
        pytest.skip(f"Integration tests require environment variables: {', '.join(missing)}")

    handler = IntegrationTestWarningHandler()
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    try:
        yield
    finally:
        root_logger.removeHandler(handler)

    if handler.records:
        messages = [f"{r.levelname}: {r.getMessage()} (in {r.name}:{r.lineno})" for r in handler.records]
        pytest.fail(f"{len(messages)} warning(s) logged:\n" + "\n".join(f"  - {m}" for m in messages))


def make_issue(
    number: int,
    *,
    title: str | None = None,
    body: str = "",
    labels: tuple[Label, ...] = (),
    comments: tuple[Comment, ...] = (),
    milestone: Milestone | None = None,
) -> SourceIssue:
    return SourceIssue(
        number=number,
        title=title or f"Issue {number}",
        body=body,
        labels=labels,
        comments=comments,
        milestone=milestone,
    )


def make_github_label(name: str) -> Mock:
    label = Mock()
    label.name = name
    return label


def make_github_milestone(title: str, number: int) -> Mock:
    milestone = Mock()
    milestone.title = title
    milestone.number = number
    return milestone


@pytest.fixture
def github_repo() -> Callable[..., Mock]:
    """Factory for a mock target repository.

    ``issue_numbers`` are handed out in order by ``create_issue``. Created
    issues can be looked up again through ``get_issue``.
    """

    def _make(issue_numbers: list[int] | None = None) -> Mock:
        repo = Mock()
        repo.full_name = "target-owner/target-repo"
        repo.get_labels.return_value = []
        repo.get_milestones.return_value = []

        numbers = iter(issue_numbers or range(1, 1000))
        created: dict[int, Mock] = {}
        next_milestone = iter(range(1, 1000))

        def _create_issue(**kwargs: Any) -> Mock:  # noqa: ANN401
            issue = Mock()
            issue.number = next(numbers)
            issue.title = kwargs["title"]
            created[issue.number] = issue
            return issue

        def _create_milestone(**kwargs: Any) -> Mock:  # noqa: ANN401
            return make_github_milestone(kwargs["title"], next(next_milestone))

        repo.create_issue.side_effect = _create_issue
        repo.create_milestone.side_effect = _create_milestone
        repo.get_issue.side_effect = lambda number: created[number]
        repo.created_issues = created
        return repo

    return _make
