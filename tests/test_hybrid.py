"""
Tests for hybrid issue coordination

Uses AsyncMock trackers so no GitHub or Linear calls are made.
"""

import pytest

from issuebridge.exceptions import (
    PartialHybridFailure,
    UpstreamCreateError,
    UpstreamError,
    ValidationError,
)
from issuebridge.triage import (
    COORDINATION_LABELS,
    HybridCoordinator,
    HybridIssueRequest,
    Platform,
)


def make_request(**overrides):
    fields = {
        "title": "Platform migration epic",
        "description": "Move every service to the new platform",
        "owner": "acme",
        "repo": "widgets",
        "team_id": "team-123",
        "labels": ["migration"],
    }
    fields.update(overrides)
    return HybridIssueRequest(**fields)


class TestValidation:
    """Requests are rejected before any tracker is called"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["owner", "repo", "team_id"])
    async def test_missing_identifier(self, missing, mock_github, mock_linear):
        coordinator = HybridCoordinator(mock_github, mock_linear)

        with pytest.raises(ValidationError) as exc_info:
            await coordinator.create_hybrid_issue(make_request(**{missing: None}))

        assert missing in str(exc_info.value)
        mock_github.create_issue.assert_not_called()
        mock_linear.create_issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_non_hybrid_platform(self, mock_github, mock_linear):
        coordinator = HybridCoordinator(mock_github, mock_linear)

        with pytest.raises(ValidationError):
            await coordinator.create_hybrid_issue(make_request(platform=Platform.GITHUB))

        mock_github.create_issue.assert_not_called()
        mock_linear.create_issue.assert_not_called()

    def test_unknown_platform(self):
        with pytest.raises(ValidationError):
            HybridCoordinator.validate(make_request(platform="jira"))

    def test_string_platform_accepted(self):
        HybridCoordinator.validate(make_request(platform="hybrid"))


class TestCreateHybridIssue:
    """Tests for HybridCoordinator.create_hybrid_issue"""

    @pytest.mark.asyncio
    async def test_creates_linked_issues(self, mock_github, mock_linear, github_issue):
        coordinator = HybridCoordinator(mock_github, mock_linear)

        result = await coordinator.create_hybrid_issue(make_request(priority=2))

        assert result.cross_referenced is True
        assert result.platform == Platform.HYBRID
        assert result.github_issue is github_issue

        github_kwargs = mock_github.create_issue.call_args.kwargs
        assert github_kwargs["title"] == "[Engineering] Platform migration epic"
        assert github_kwargs["owner"] == "acme"
        assert github_kwargs["repo"] == "widgets"
        assert "Move every service" in github_kwargs["body"]

        linear_kwargs = mock_linear.create_issue.call_args.kwargs
        assert linear_kwargs["title"] == "[Business] Platform migration epic"
        assert linear_kwargs["team_id"] == "team-123"
        assert linear_kwargs["priority"] == 2
        assert github_issue.url in linear_kwargs["description"]

    @pytest.mark.asyncio
    async def test_coordination_labels_on_github(self, mock_github, mock_linear):
        coordinator = HybridCoordinator(mock_github, mock_linear)

        await coordinator.create_hybrid_issue(
            make_request(labels=["bug", "hybrid-issue"])
        )

        github_labels = mock_github.create_issue.call_args.kwargs["labels"]
        assert github_labels == ["bug", "hybrid-issue", "linear-synced", "agent-available"]
        for label in COORDINATION_LABELS:
            assert label in github_labels

        linear_labels = mock_linear.create_issue.call_args.kwargs["labels"]
        assert linear_labels == ["bug", "hybrid-issue"]

    @pytest.mark.asyncio
    async def test_labels_derived_when_not_given(self, mock_github, mock_linear):
        coordinator = HybridCoordinator(mock_github, mock_linear)

        await coordinator.create_hybrid_issue(
            make_request(
                title="Launch pricing API",
                description="New endpoint for the marketing campaign",
                labels=[],
            )
        )

        github_labels = mock_github.create_issue.call_args.kwargs["labels"]
        assert "agent-ready" in github_labels
        assert "api" in github_labels
        assert github_labels[-3:] == COORDINATION_LABELS

        linear_labels = mock_linear.create_issue.call_args.kwargs["labels"]
        assert "marketing" in linear_labels
        assert "agent-ready" not in linear_labels

    @pytest.mark.asyncio
    async def test_github_failure_creates_nothing(self, mock_github, mock_linear):
        error = UpstreamCreateError("GitHub API error 422", platform="github", status=422)
        mock_github.create_issue.side_effect = error
        coordinator = HybridCoordinator(mock_github, mock_linear)

        with pytest.raises(UpstreamCreateError) as exc_info:
            await coordinator.create_hybrid_issue(make_request())

        assert exc_info.value is error
        assert not isinstance(exc_info.value, PartialHybridFailure)
        mock_linear.create_issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_linear_failure_reports_orphan(
        self, mock_github, mock_linear, github_issue
    ):
        cause = UpstreamError("Linear API error 500", platform="linear", status=500)
        mock_linear.create_issue.side_effect = cause
        coordinator = HybridCoordinator(mock_github, mock_linear)

        with pytest.raises(PartialHybridFailure) as exc_info:
            await coordinator.create_hybrid_issue(make_request())

        failure = exc_info.value
        assert isinstance(failure, UpstreamCreateError)
        assert failure.orphaned_issue is github_issue
        assert failure.__cause__ is cause
        assert failure.platform == "linear"
        assert failure.status == 500
        mock_github.create_issue.assert_called_once()

    @pytest.mark.asyncio
    async def test_programming_error_after_github_propagates(
        self, mock_github, mock_linear
    ):
        """Only upstream failures are reported as a partial hybrid failure"""
        mock_linear.create_issue.side_effect = AttributeError("boom")
        coordinator = HybridCoordinator(mock_github, mock_linear)

        with pytest.raises(AttributeError):
            await coordinator.create_hybrid_issue(make_request())

        mock_github.create_issue.assert_called_once()

    @pytest.mark.asyncio
    async def test_result_to_dict(self, mock_github, mock_linear):
        coordinator = HybridCoordinator(mock_github, mock_linear)

        result = await coordinator.create_hybrid_issue(make_request())
        data = result.to_dict()

        assert data["platform"] == "hybrid"
        assert data["cross_referenced"] is True
        assert data["github_issue"]["number"] == 42
        assert data["linear_issue"]["id"] == "ENG-123"
