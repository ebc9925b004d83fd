"""
Issue Bridge MCP Server

Exposes triage, label generation, agent-readiness assessment, hybrid issue
creation, sync status and PR workflows as MCP tools, so Claude Code, Copilot
agents and other MCP clients can route work between GitHub and Linear.

Uses FastMCP for simplified server implementation.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from ..config import DEFAULT_CONFIG_PATH, BridgeConfig
from ..exceptions import PartialHybridFailure
from ..integrations.github import GitHubClient
from ..integrations.linear import LinearClient
from ..pr import PullRequestWorkflows
from ..triage import (
    AgentReadinessAssessor,
    HybridCoordinator,
    HybridIssueRequest,
    IssueClassifier,
    LabelGenerator,
    Platform,
    SyncStatusChecker,
)

logger = logging.getLogger(__name__)


def get_config() -> BridgeConfig:
    """Load configuration from ISSUEBRIDGE_CONFIG (or the default path) and env."""
    return BridgeConfig.from_file(os.environ.get("ISSUEBRIDGE_CONFIG", DEFAULT_CONFIG_PATH))


def get_github_client(config: BridgeConfig) -> GitHubClient:
    return GitHubClient(config)


def get_linear_client(config: BridgeConfig) -> LinearClient:
    return LinearClient(config)


def _error_response(tool: str, error: Exception) -> Dict[str, Any]:
    """Uniform failure payload; partial hybrid failures expose the orphan"""
    logger.error(f"{tool} failed: {error}")
    response: Dict[str, Any] = {
        "success": False,
        "error": str(error),
        "error_type": type(error).__name__,
    }
    if isinstance(error, PartialHybridFailure):
        orphan = error.orphaned_issue
        response["orphaned_issue"] = orphan.to_dict() if hasattr(orphan, "to_dict") else orphan
    return response


def create_bridge_mcp_server(
    classifier: Optional[IssueClassifier] = None,
) -> FastMCP:
    """Create and configure the Issue Bridge MCP server."""
    assessor = AgentReadinessAssessor()
    label_generator = LabelGenerator(assessor)
    classifier = classifier or IssueClassifier(label_generator)

    mcp = FastMCP("Issue Bridge")

    @mcp.tool()
    async def triage_issue(
        title: str,
        description: str = "",
        labels: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Decide whether an issue belongs on GitHub, Linear, or both (hybrid).

        Args:
            title: Issue title
            description: Issue description
            labels: Existing labels, if any

        Returns:
            Triage decision with platform, confidence, reasoning and labels
        """
        try:
            decision = classifier.triage(title, description, labels)
            return {"success": True, "decision": decision.to_dict()}
        except Exception as e:
            return _error_response("triage_issue", e)

    @mcp.tool()
    async def generate_labels(
        title: str,
        body: str = "",
        platform: str = "github",
    ) -> Dict[str, Any]:
        """
        Generate labels for an issue on a given platform.

        Args:
            title: Issue title
            body: Issue body
            platform: github (engineering), linear (business) or hybrid

        Returns:
            Ordered list of labels
        """
        try:
            target = Platform.parse(platform)
        except ValueError:
            return {
                "success": False,
                "error": f"Invalid platform '{platform}'. Valid: github, linear, hybrid, engineering, business",
            }

        try:
            labels = label_generator.generate_labels(title, body, target)
            return {"success": True, "platform": target.value, "labels": labels}
        except Exception as e:
            return _error_response("generate_labels", e)

    @mcp.tool()
    async def assess_agent_ready(
        owner: str,
        repo: str,
        issue_number: int,
    ) -> Dict[str, Any]:
        """
        Assess whether a GitHub issue can be handed to an automated coding agent.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue number

        Returns:
            Compatibility, complexity tier, hour estimate and prerequisites
        """
        try:
            config = get_config()
            async with get_github_client(config) as github:
                issue = await github.get_issue(owner, repo, issue_number)

            assessment = assessor.assess(issue)
            return {
                "success": True,
                "issue": {"number": issue.number, "title": issue.title, "url": issue.url},
                "assessment": assessment.to_dict(),
            }
        except Exception as e:
            return _error_response("assess_agent_ready", e)

    @mcp.tool()
    async def create_hybrid_issue(
        title: str,
        description: str,
        owner: str = "",
        repo: str = "",
        team_id: str = "",
        labels: Optional[List[str]] = None,
        assignee: Optional[str] = None,
        priority: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Create linked GitHub and Linear issues for work spanning both.

        The GitHub issue is created first; the Linear issue links back to it.

        Args:
            title: Issue title (prefixed per platform)
            description: Issue description
            owner: GitHub repository owner (required)
            repo: GitHub repository name (required)
            team_id: Linear team ID (required)
            labels: Labels for both issues (derived from the text if omitted)
            assignee: GitHub username to assign
            priority: Linear priority 0-4

        Returns:
            Both created issues and the cross-reference flag
        """
        request = HybridIssueRequest(
            title=title,
            description=description,
            owner=owner or None,
            repo=repo or None,
            team_id=team_id or None,
            labels=labels or [],
            assignee=assignee,
            priority=priority,
        )

        if priority is not None and not 0 <= priority <= 4:
            return {
                "success": False,
                "error": "Priority must be between 0 (none) and 4 (low)",
            }

        try:
            # Fails before any client is built or called
            HybridCoordinator.validate(request)

            config = get_config()
            async with get_github_client(config) as github, get_linear_client(
                config
            ) as linear:
                coordinator = HybridCoordinator(github, linear, label_generator)
                result = await coordinator.create_hybrid_issue(request)

            return {"success": True, **result.to_dict()}
        except Exception as e:
            return _error_response("create_hybrid_issue", e)

    @mcp.tool()
    async def check_sync_status(
        owner: str,
        repo: str,
        issue_number: int,
        linear_issue_id: str,
    ) -> Dict[str, Any]:
        """
        Compare a GitHub issue with its Linear counterpart.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: GitHub issue number
            linear_issue_id: Linear issue identifier (e.g. ENG-123)

        Returns:
            State of both issues and synced/drift status
        """
        try:
            config = get_config()
            async with get_github_client(config) as github, get_linear_client(
                config
            ) as linear:
                status = await SyncStatusChecker(github, linear).check(
                    owner, repo, issue_number, linear_issue_id
                )
            return {"success": True, **status.to_dict()}
        except Exception as e:
            return _error_response("check_sync_status", e)

    @mcp.tool()
    async def create_feature_pr(
        owner: str,
        repo: str,
        linear_issue_id: str,
        base: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a feature branch and draft PR from a Linear issue.

        Args:
            owner: Repository owner
            repo: Repository name
            linear_issue_id: Linear issue ID (e.g. 'ARC-119')
            base: Base branch (default: 'dev')
            title: Optional PR title override
            description: Optional PR description override
        """
        try:
            config = get_config()
            async with get_github_client(config) as github, get_linear_client(
                config
            ) as linear:
                result = await PullRequestWorkflows(github, linear, config).create_feature_pr(
                    owner, repo, linear_issue_id, base=base, title=title, description=description
                )
            return {"success": True, **result}
        except Exception as e:
            return _error_response("create_feature_pr", e)

    @mcp.tool()
    async def create_release_pr(
        owner: str,
        repo: str,
        head: Optional[str] = None,
        base: Optional[str] = None,
        title: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create (or update) the release PR from the development branch to main.

        Args:
            owner: Repository owner
            repo: Repository name
            head: Head branch (default: 'dev')
            base: Base branch (default: 'main')
            title: Optional PR title override
        """
        try:
            config = get_config()
            async with get_github_client(config) as github:
                result = await PullRequestWorkflows(github, None, config).create_release_pr(
                    owner, repo, head=head, base=base, title=title
                )
            return {"success": True, **result}
        except Exception as e:
            return _error_response("create_release_pr", e)

    @mcp.tool()
    async def update_pr(
        owner: str,
        repo: str,
        pr_number: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Update an existing pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number
            title: New PR title
            description: New PR description in markdown format
        """
        if title is None and description is None:
            return {"success": False, "error": "No fields to update"}

        try:
            config = get_config()
            async with get_github_client(config) as github:
                result = await PullRequestWorkflows(github, None, config).update_pr(
                    owner, repo, pr_number, title=title, description=description
                )
            return {"success": True, **result}
        except Exception as e:
            return _error_response("update_pr", e)

    @mcp.resource("issuebridge://triage/vocabulary")
    async def vocabulary_resource() -> str:
        """
        Keyword vocabularies used by the triage classifier, as markdown.
        """
        sections = [
            ("Engineering (GitHub)", classifier.ENGINEERING_KEYWORDS),
            ("Business (Linear)", classifier.BUSINESS_KEYWORDS),
            ("Hybrid", classifier.HYBRID_KEYWORDS),
        ]
        lines = ["# Triage Vocabulary", ""]
        for heading, keywords in sections:
            lines.append(f"## {heading}")
            lines.append(", ".join(sorted(keywords)))
            lines.append("")
        return "\n".join(lines)

    return mcp


def run_bridge_server(transport: str = "stdio"):
    """Run the Issue Bridge MCP server."""
    mcp = create_bridge_mcp_server()

    if transport == "stdio":
        mcp.run(transport="stdio")
    else:
        raise ValueError(f"Unsupported transport: {transport}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_bridge_server()
