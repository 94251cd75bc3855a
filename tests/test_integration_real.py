"""
Real integration test against a GitHub repository.

Copies a small snapshot into the repository named by TARGET_GITHUB_TEST_REPO
(format: owner/repo) using GITHUB_TOKEN. The repository should be a throwaway:
the test creates labels, a milestone, issues and comments, and closes the
created issues afterwards (GitHub issues cannot be deleted through the REST API).
"""

from __future__ import annotations

import json
import os
import uuid
from pathlib import Path

import pytest

from issue_copier import IssueCopier, load_snapshot
from issue_copier import github_utils as ghu


@pytest.mark.integration
def test_copy_snapshot_into_real_repository(tmp_path: Path) -> None:
    owner, repo_name = os.environ["TARGET_GITHUB_TEST_REPO"].split("/", 1)
    suffix = uuid.uuid4().hex[:8]
    snapshot = [
        {
            "number": 101,
            "title": f"Integration parent {suffix}",
            "body": "Tracks #102 and the external #99999",
            "labels": [{"name": f"itest-{suffix}", "color": "c5def5", "description": "integration test"}],
            "comments": [
                {"body": "first", "author": {"login": "alice"}},
                {"body": "second", "author": {"login": "bob"}},
            ],
            "milestone": {"title": f"itest-{suffix}", "description": "", "dueOn": "2030-01-01T00:00:00Z"},
        },
        {
            "number": 102,
            "title": f"Integration child {suffix}",
            "body": "Part of #101",
            "labels": [],
            "comments": [],
            "milestone": None,
        },
    ]
    snapshot_path = tmp_path / "issues.json"
    snapshot_path.write_text(json.dumps(snapshot), encoding="utf-8")

    repo = ghu.get_repo(ghu.get_client(ghu.get_token()), owner, repo_name)
    result = IssueCopier(repo).migrate(load_snapshot(snapshot_path))

    try:
        assert result.success, result.stats.warnings
        parent = repo.get_issue(result.number_map[101])
        child = repo.get_issue(result.number_map[102])

        assert parent.body == f"Tracks #{child.number} and the external #99999"
        assert child.body == f"Part of #{parent.number}"
        assert [label.name for label in parent.labels] == [f"itest-{suffix}"]
        assert parent.milestone is not None
        assert parent.milestone.title == f"itest-{suffix}"

        comments = list(parent.get_comments())
        assert len(comments) == 1
        assert comments[0].body.index("@alice") < comments[0].body.index("@bob")
    finally:
        for new_number in result.number_map.values():
            repo.get_issue(new_number).edit(state="closed")
        repo.get_label(f"itest-{suffix}").delete()
        result.milestone_map[f"itest-{suffix}"].delete()
