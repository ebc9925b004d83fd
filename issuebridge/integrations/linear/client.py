"""
Linear GraphQL Client

Async aiohttp client for reading and creating Linear issues.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ...config import BridgeConfig
from ...exceptions import UpstreamCreateError, UpstreamError
from ..base import BusinessTracker
from .models import LinearIssue

logger = logging.getLogger(__name__)

ISSUE_FIELDS = """
    id
    identifier
    title
    description
    url
    priority
    createdAt
    updatedAt
    state { name type }
    labels { nodes { id name color } }
"""

ISSUE_QUERY = f"""
query Issue($id: String!) {{
  issue(id: $id) {{ {ISSUE_FIELDS} }}
}}
"""

ISSUE_CREATE_MUTATION = f"""
mutation IssueCreate($input: IssueCreateInput!) {{
  issueCreate(input: $input) {{
    success
    issue {{ {ISSUE_FIELDS} }}
  }}
}}
"""

TEAM_LABELS_QUERY = """
query TeamLabels($teamId: String!) {
  team(id: $teamId) {
    labels { nodes { id name } }
  }
}
"""


class LinearClient(BusinessTracker):
    """
    Async Linear GraphQL API client.

        async with LinearClient(config) as linear:
            issue = await linear.get_issue("ENG-123")
    """

    def __init__(self, config: Optional[BridgeConfig] = None):
        self.config = config or BridgeConfig.from_env()
        self._api_key = self.config.require_linear()
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "LinearClient":
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        self._session = aiohttp.ClientSession(
            headers={
                "Content-Type": "application/json",
                "Authorization": self._api_key,
            },
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

    async def _graphql(
        self,
        query: str,
        variables: Dict[str, Any],
        creating: bool = False,
    ) -> Dict[str, Any]:
        """Run a GraphQL operation and return its ``data`` member"""
        if not self._session:
            raise RuntimeError("Client not connected. Use async with context.")

        error_class = UpstreamCreateError if creating else UpstreamError
        try:
            async with self._session.post(
                self.config.linear_api_url,
                json={"query": query, "variables": variables},
            ) as resp:
                if resp.status >= 400:
                    detail = await resp.text()
                    raise error_class(
                        f"Linear API error {resp.status}: {detail}",
                        platform="linear",
                        status=resp.status,
                    )
                payload = await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise error_class(f"Linear request failed: {e}", platform="linear") from e

        if payload.get("errors"):
            messages = "; ".join(
                err.get("message", "unknown error") for err in payload["errors"]
            )
            raise error_class(f"Linear API error: {messages}", platform="linear")

        return payload.get("data") or {}

    async def get_issue(self, issue_id: str) -> LinearIssue:
        data = await self._graphql(ISSUE_QUERY, {"id": issue_id})
        if not data.get("issue"):
            raise UpstreamError(f"Linear issue {issue_id} not found", platform="linear")
        return LinearIssue.from_dict(data["issue"])

    async def create_issue(
        self,
        title: str,
        description: str,
        team_id: str,
        labels: Optional[List[str]] = None,
        priority: Optional[int] = None,
    ) -> LinearIssue:
        issue_input: Dict[str, Any] = {
            "title": title,
            "description": description,
            "teamId": team_id,
        }
        if priority is not None:
            issue_input["priority"] = priority
        if labels:
            label_ids = await self.resolve_label_ids(team_id, labels)
            if label_ids:
                issue_input["labelIds"] = label_ids

        data = await self._graphql(
            ISSUE_CREATE_MUTATION, {"input": issue_input}, creating=True
        )
        result = data.get("issueCreate") or {}
        if not result.get("success") or not result.get("issue"):
            raise UpstreamCreateError(
                "Linear rejected issue creation", platform="linear"
            )

        issue = LinearIssue.from_dict(result["issue"])
        logger.info(f"Created Linear issue {issue.id}")
        return issue

    async def resolve_label_ids(self, team_id: str, names: List[str]) -> List[str]:
        """Map label names to the team's label ids; unknown names are skipped"""
        data = await self._graphql(TEAM_LABELS_QUERY, {"teamId": team_id})
        nodes = ((data.get("team") or {}).get("labels") or {}).get("nodes", [])
        by_name = {node["name"].lower(): node["id"] for node in nodes}

        ids = []
        for name in names:
            label_id = by_name.get(name.lower())
            if label_id:
                ids.append(label_id)
            else:
                logger.debug(f"Linear team {team_id} has no label named '{name}'")
        return ids
