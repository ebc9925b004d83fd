"""
GitHub REST Client

Async aiohttp client for the GitHub operations the bridge needs: issues,
branches, pull requests and commit comparisons.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ...config import BridgeConfig
from ...exceptions import UpstreamCreateError, UpstreamError
from ..base import EngineeringTracker
from .models import GitHubIssue, GitHubPullRequest

logger = logging.getLogger(__name__)


class GitHubClient(EngineeringTracker):
    """
    Async GitHub REST API client.

    Use as an async context manager so the underlying session is closed:

        async with GitHubClient(config) as github:
            issue = await github.get_issue("owner", "repo", 42)
    """

    def __init__(self, config: Optional[BridgeConfig] = None):
        self.config = config or BridgeConfig.from_env()
        self._token = self.config.require_github()
        self._session: Optional[aiohttp.ClientSession] = None

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def __aenter__(self) -> "GitHubClient":
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        self._session = aiohttp.ClientSession(
            headers=self._auth_headers(),
            timeout=timeout,
        )
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        creating: bool = False,
    ) -> Any:
        """Send a request and return the decoded JSON body, raising on failure"""
        if not self._session:
            raise RuntimeError("Client not connected. Use async with context.")

        error_class = UpstreamCreateError if creating else UpstreamError
        url = f"{self.config.github_api_url.rstrip('/')}{path}"
        try:
            async with self._session.request(
                method, url, json=json, params=params
            ) as resp:
                if resp.status >= 400:
                    detail = await resp.text()
                    logger.warning(f"GitHub {method} {path} failed: {resp.status}")
                    raise error_class(
                        f"GitHub API error {resp.status}: {detail}",
                        platform="github",
                        status=resp.status,
                    )
                if resp.status == 204:
                    return None
                return await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise error_class(f"GitHub request failed: {e}", platform="github") from e

    # =========================================================================
    # Issues
    # =========================================================================

    async def create_issue(
        self,
        title: str,
        body: str,
        labels: List[str],
        owner: str,
        repo: str,
        assignee: Optional[str] = None,
    ) -> GitHubIssue:
        payload: Dict[str, Any] = {"title": title, "body": body, "labels": labels}
        if assignee:
            payload["assignees"] = [assignee]

        data = await self._request(
            "POST", f"/repos/{owner}/{repo}/issues", json=payload, creating=True
        )
        issue = GitHubIssue.from_dict(data)
        logger.info(f"Created GitHub issue {owner}/{repo}#{issue.number}")
        return issue

    async def get_issue(self, owner: str, repo: str, number: int) -> GitHubIssue:
        data = await self._request("GET", f"/repos/{owner}/{repo}/issues/{number}")
        return GitHubIssue.from_dict(data)

    # =========================================================================
    # Branches
    # =========================================================================

    async def get_branch_sha(self, owner: str, repo: str, branch: str) -> str:
        data = await self._request("GET", f"/repos/{owner}/{repo}/git/ref/heads/{branch}")
        return data["object"]["sha"]

    async def create_branch(
        self, owner: str, repo: str, branch_name: str, from_branch: str = "dev"
    ) -> None:
        """Create ``branch_name`` pointing at the head of ``from_branch``"""
        sha = await self.get_branch_sha(owner, repo, from_branch)
        await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            json={"ref": f"refs/heads/{branch_name}", "sha": sha},
            creating=True,
        )
        logger.info(f"Created branch {branch_name} from {from_branch} in {owner}/{repo}")

    # =========================================================================
    # Pull Requests
    # =========================================================================

    async def create_pull_request(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str,
        head: str,
        base: str,
        draft: bool = False,
    ) -> GitHubPullRequest:
        data = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/pulls",
            json={
                "title": title,
                "body": body,
                "head": head,
                "base": base,
                "draft": draft,
                "maintainer_can_modify": True,
            },
            creating=True,
        )
        pr = GitHubPullRequest.from_dict(data)
        logger.info(f"Created PR {owner}/{repo}#{pr.number} ({head} -> {base})")
        return pr

    async def update_pull_request(
        self,
        owner: str,
        repo: str,
        number: int,
        title: Optional[str] = None,
        body: Optional[str] = None,
    ) -> GitHubPullRequest:
        payload = {}
        if title is not None:
            payload["title"] = title
        if body is not None:
            payload["body"] = body

        data = await self._request(
            "PATCH", f"/repos/{owner}/{repo}/pulls/{number}", json=payload
        )
        return GitHubPullRequest.from_dict(data)

    async def get_pull_request(
        self, owner: str, repo: str, number: int
    ) -> GitHubPullRequest:
        data = await self._request("GET", f"/repos/{owner}/{repo}/pulls/{number}")
        return GitHubPullRequest.from_dict(data)

    async def find_open_pull_request(
        self, owner: str, repo: str, head: str, base: str
    ) -> Optional[GitHubPullRequest]:
        """Return the open PR from ``head`` into ``base``, if one exists"""
        data = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/pulls",
            params={"state": "open", "head": f"{owner}:{head}", "base": base},
        )
        return GitHubPullRequest.from_dict(data[0]) if data else None

    async def list_closed_pull_requests(
        self, owner: str, repo: str, per_page: int = 100
    ) -> List[GitHubPullRequest]:
        data = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/pulls",
            params={
                "state": "closed",
                "sort": "updated",
                "direction": "desc",
                "per_page": per_page,
            },
        )
        return [GitHubPullRequest.from_dict(pr) for pr in data]

    # =========================================================================
    # Commits
    # =========================================================================

    async def compare_commits(
        self, owner: str, repo: str, base: str, head: str
    ) -> Dict[str, Any]:
        """Raw compare payload: ``commits`` and ``files`` between two refs"""
        return await self._request("GET", f"/repos/{owner}/{repo}/compare/{base}...{head}")
