"""
Tests for pull request descriptions and workflows
"""

from unittest.mock import AsyncMock

import pytest

from issuebridge.config import BridgeConfig
from issuebridge.integrations.github import GitHubPullRequest, GitHubUser
from issuebridge.integrations.linear import LinearIssue
from issuebridge.pr import (
    FileChange,
    PullRequestChange,
    PullRequestWorkflows,
    branch_name_for,
    extract_issue_ids,
    feature_pr_description,
    generate_release_title,
    release_pr_description,
    summarize_diff,
)


class TestHelpers:
    def test_branch_name(self):
        assert branch_name_for("ENG-12", "Add Login Page!") == "feature/eng-12-add-login-page"

    def test_extract_issue_ids_dedupes_in_order(self):
        assert extract_issue_ids("Fixes ENG-2 and OPS-10, see ENG-2") == ["ENG-2", "OPS-10"]

    def test_extract_issue_ids_empty(self):
        assert extract_issue_ids(None) == []

    def test_feature_description_tags_issue(self):
        issue = LinearIssue(id="ENG-12", title="Add login", description="Users need SSO")
        body = feature_pr_description(issue)

        assert "Users need SSO" in body
        assert "Initial implementation for Add login" in body
        assert body.endswith("Fixes ENG-12")


class TestReleaseDescription:
    """Tests for release_pr_description"""

    def test_groups_and_tags(self):
        changes = [
            PullRequestChange(
                number=1,
                title="feat: ENG-1: Add login",
                author="dev1",
                linear_issues=["ENG-1", "ENG-9"],
            ),
            PullRequestChange(number=2, title="fix: crash on save", author="dev2"),
        ]

        body = release_pr_description(changes)

        assert "It includes 2 pull requests" in body
        assert "### Feat\n- ENG-1: Add login (#1)" in body
        assert "### Fix\n- crash on save (#2)" in body
        assert "- #1 feat: ENG-1: Add login (@dev1) [ENG-1]" in body
        assert "- #2 fix: crash on save (@dev2)" in body
        assert "- fixes ENG-1" in body
        assert "- contributes to ENG-9" in body

    def test_no_linear_issues(self):
        body = release_pr_description([PullRequestChange(number=3, title="chore: bump deps")])

        assert "It includes 1 pull request with" in body
        assert "No Linear issues referenced" in body


class TestDiffSummary:
    def setup_method(self):
        self.files = [
            FileChange("src/a.py", additions=10, deletions=2),
            FileChange("src/b.py", additions=1, deletions=1),
            FileChange("tests/test_a.py", additions=5),
        ]

    def test_summarize_diff(self):
        diff = summarize_diff(self.files)

        assert diff.total_additions == 16
        assert diff.total_deletions == 3
        assert diff.summary == (
            "Changed 3 files across 2 directories: "
            "src (2 files, +11 -3), tests (1 files, +5 -0)"
        )
        assert diff.to_dict()["files"] == 3

    def test_file_change_from_dict(self):
        change = FileChange.from_dict({"filename": "README.md", "additions": 4})
        assert change.file_path == "README.md"
        assert change.deletions == 0

    def test_release_title_from_prs(self):
        changes = [
            PullRequestChange(number=1, title="feat: Add login"),
            PullRequestChange(number=2, title="fix: Crash"),
            PullRequestChange(number=3, title="feat: Export"),
        ]

        title = generate_release_title(summarize_diff(self.files), changes)
        assert title == "release: feat/fix Add login"

    def test_release_title_without_prs(self):
        title = generate_release_title(summarize_diff(self.files), [])
        assert title == "release: chore update src and tests components"


def merged_pr(number, title, sha, body=""):
    return GitHubPullRequest(
        number=number,
        title=title,
        body=body,
        state="closed",
        html_url=f"https://github.com/acme/widgets/pull/{number}",
        merged_at="2024-05-01T00:00:00Z",
        merge_commit_sha=sha,
        user=GitHubUser(login="dev1"),
    )


class TestPullRequestWorkflows:
    """Tests for PullRequestWorkflows with mocked trackers"""

    def setup_method(self):
        self.github = AsyncMock()
        self.linear = AsyncMock()
        self.workflows = PullRequestWorkflows(self.github, self.linear, BridgeConfig())

    @pytest.mark.asyncio
    async def test_create_feature_pr(self):
        self.linear.get_issue.return_value = LinearIssue(
            id="ENG-12",
            title="Add login",
            description="Users need SSO",
            url="https://linear.app/acme/issue/ENG-12",
        )
        self.github.create_pull_request.return_value = GitHubPullRequest(
            number=5,
            title="feat: Add login",
            body="",
            state="open",
            html_url="https://github.com/acme/widgets/pull/5",
        )

        result = await self.workflows.create_feature_pr("acme", "widgets", "ENG-12")

        self.github.create_branch.assert_called_once_with(
            "acme", "widgets", "feature/eng-12-add-login", "dev"
        )
        kwargs = self.github.create_pull_request.call_args.kwargs
        assert kwargs["title"] == "feat: Add login"
        assert kwargs["head"] == "feature/eng-12-add-login"
        assert kwargs["base"] == "dev"
        assert kwargs["draft"] is True
        assert kwargs["body"].endswith("Fixes ENG-12")

        assert result["number"] == 5
        assert result["branch"] == "feature/eng-12-add-login"
        assert result["linear_issue"]["id"] == "ENG-12"

    @pytest.mark.asyncio
    async def test_create_feature_pr_overrides(self):
        self.linear.get_issue.return_value = LinearIssue(id="ENG-1", title="X")
        self.github.create_pull_request.return_value = GitHubPullRequest(
            number=6, title="Custom", body="", state="open"
        )

        await self.workflows.create_feature_pr(
            "acme", "widgets", "ENG-1", base="main", title="Custom", description="Body"
        )

        kwargs = self.github.create_pull_request.call_args.kwargs
        assert kwargs["base"] == "main"
        assert kwargs["title"] == "Custom"
        assert kwargs["body"] == "Body"

    def _stub_release(self):
        self.github.compare_commits.return_value = {
            "commits": [{"sha": "abc"}],
            "files": [{"filename": "src/login.py", "additions": 3, "deletions": 1}],
        }
        self.github.list_closed_pull_requests.return_value = [
            merged_pr(7, "feat: ENG-3: Login", "abc"),
            merged_pr(8, "fix: other branch", "zzz"),
        ]
        self.github.get_pull_request.return_value = merged_pr(
            7, "feat: ENG-3: Login", "abc", body="Also touches ENG-4"
        )

    @pytest.mark.asyncio
    async def test_analyze_changes_keeps_merged_in_range(self):
        self._stub_release()

        changes = await self.workflows.analyze_changes("acme", "widgets", "main", "dev")

        assert [pr.number for pr in changes["prs"]] == [7]
        assert changes["prs"][0].linear_issues == ["ENG-3", "ENG-4"]
        assert changes["files"][0].file_path == "src/login.py"
        self.github.get_pull_request.assert_called_once_with("acme", "widgets", 7)

    @pytest.mark.asyncio
    async def test_create_release_pr(self):
        self._stub_release()
        self.github.find_open_pull_request.return_value = None
        self.github.create_pull_request.return_value = merged_pr(20, "release", None)

        result = await self.workflows.create_release_pr("acme", "widgets")

        kwargs = self.github.create_pull_request.call_args.kwargs
        assert kwargs["head"] == "dev"
        assert kwargs["base"] == "main"
        assert kwargs["title"] == "release: feat ENG-3: Login"
        assert "- fixes ENG-3" in kwargs["body"]
        assert "- contributes to ENG-4" in kwargs["body"]
        self.github.update_pull_request.assert_not_called()

        assert result["number"] == 20
        assert result["updated_existing"] is False
        assert result["changes"] == {"files": 1, "prs": 1}

    @pytest.mark.asyncio
    async def test_create_release_pr_updates_existing(self):
        self._stub_release()
        self.github.find_open_pull_request.return_value = merged_pr(15, "release", None)
        self.github.update_pull_request.return_value = merged_pr(15, "release", None)

        result = await self.workflows.create_release_pr("acme", "widgets", title="Release 1.2")

        self.github.create_pull_request.assert_not_called()
        args, kwargs = self.github.update_pull_request.call_args
        assert args == ("acme", "widgets", 15)
        assert kwargs["title"] == "Release 1.2"
        assert result["updated_existing"] is True

    @pytest.mark.asyncio
    async def test_update_pr(self):
        self.github.update_pull_request.return_value = GitHubPullRequest(
            number=3, title="New", body="", state="open", html_url="u"
        )

        result = await self.workflows.update_pr("acme", "widgets", 3, title="New")

        self.github.update_pull_request.assert_called_once_with(
            "acme", "widgets", 3, title="New", body=None
        )
        assert result == {"url": "u", "number": 3, "title": "New", "updated": True}
