"""
Pull Request Workflows

Feature PRs from Linear issues, release PRs from the development branch, and
PR updates. Each workflow is a short sequence of GitHub / Linear calls made
through injected clients.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from ..config import BridgeConfig
from .descriptions import (
    FileChange,
    PullRequestChange,
    branch_name_for,
    extract_issue_ids,
    feature_pr_description,
    generate_release_title,
    release_pr_description,
    summarize_diff,
)

logger = logging.getLogger(__name__)


class PullRequestWorkflows:
    """Orchestrates branch and PR operations across GitHub and Linear"""

    def __init__(self, github, linear, config: Optional[BridgeConfig] = None):
        """
        Args:
            github: GitHubClient (or compatible) for branches and PRs
            linear: LinearClient (or compatible) for reading issues
            config: Branch defaults
        """
        self.github = github
        self.linear = linear
        self.config = config or BridgeConfig()

    async def create_feature_pr(
        self,
        owner: str,
        repo: str,
        linear_issue_id: str,
        base: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a feature branch and a draft PR for a Linear issue"""
        base = base or self.config.default_base_branch
        issue = await self.linear.get_issue(linear_issue_id)
        branch = branch_name_for(issue.id, issue.title)

        await self.github.create_branch(owner, repo, branch, base)
        pr = await self.github.create_pull_request(
            owner=owner,
            repo=repo,
            title=title or f"feat: {issue.title}",
            body=description or feature_pr_description(issue),
            head=branch,
            base=base,
            draft=True,
        )

        return {
            "url": pr.html_url,
            "number": pr.number,
            "branch": branch,
            "linear_issue": {"id": issue.id, "title": issue.title, "url": issue.url},
        }

    async def analyze_changes(
        self, owner: str, repo: str, base: str, head: str
    ) -> Dict[str, Any]:
        """Files changed between two refs and the PRs merged in that range"""
        comparison = await self.github.compare_commits(owner, repo, base, head)
        closed = await self.github.list_closed_pull_requests(owner, repo)

        commit_shas = {commit.get("sha") for commit in comparison.get("commits", [])}
        merged = [
            pr
            for pr in closed
            if pr.merged_at and pr.merge_commit_sha and pr.merge_commit_sha in commit_shas
        ]
        details = await asyncio.gather(
            *(self.github.get_pull_request(owner, repo, pr.number) for pr in merged)
        )

        changes = [
            PullRequestChange(
                number=pr.number,
                title=pr.title,
                url=pr.html_url,
                merged_at=pr.merged_at or "",
                author=pr.user.login if pr.user else "unknown",
                body=pr.body,
                linear_issues=extract_issue_ids(f"{pr.title}\n{pr.body}"),
            )
            for pr in details
        ]
        files = [FileChange.from_dict(f) for f in comparison.get("files") or []]
        return {"files": files, "prs": changes}

    async def create_release_pr(
        self,
        owner: str,
        repo: str,
        head: Optional[str] = None,
        base: Optional[str] = None,
        title: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Open (or refresh) the release PR from ``head`` into ``base``"""
        head = head or self.config.release_head_branch
        base = base or self.config.release_base_branch

        changes = await self.analyze_changes(owner, repo, base, head)
        files: List[FileChange] = changes["files"]
        prs: List[PullRequestChange] = changes["prs"]
        diff = summarize_diff(files)

        title = title or generate_release_title(diff, prs)
        body = release_pr_description(prs)

        existing = await self.github.find_open_pull_request(owner, repo, head, base)
        if existing:
            logger.info(f"Updating existing release PR #{existing.number}")
            pr = await self.github.update_pull_request(
                owner, repo, existing.number, title=title, body=body
            )
        else:
            pr = await self.github.create_pull_request(
                owner=owner, repo=repo, title=title, body=body, head=head, base=base
            )

        return {
            "url": pr.html_url,
            "number": pr.number,
            "updated_existing": existing is not None,
            "changes": {"files": len(files), "prs": len(prs)},
            "diff": diff.to_dict(),
        }

    async def update_pr(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        pr = await self.github.update_pull_request(
            owner, repo, pr_number, title=title, body=description
        )
        return {"url": pr.html_url, "number": pr.number, "title": pr.title, "updated": True}
