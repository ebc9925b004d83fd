"""
Cross-platform sync status

Compares a GitHub issue with its Linear counterpart. Only the current state
of both records is read; nothing about previous syncs is stored.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from ..integrations.base import BusinessTracker, EngineeringTracker

logger = logging.getLogger(__name__)


class SyncStatus(str, Enum):
    SYNCED = "synced"
    DRIFT = "drift"
    # Needs stored last-sync state to detect; never produced here
    CONFLICT = "conflict"


@dataclass
class CrossPlatformStatus:
    """Side-by-side state of a GitHub issue and a Linear issue"""

    github_issue: Dict[str, Any]
    linear_issue: Dict[str, Any]
    sync_status: SyncStatus
    checked_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "github_issue": self.github_issue,
            "linear_issue": self.linear_issue,
            "sync_status": self.sync_status.value,
            "checked_at": self.checked_at,
        }


def check_sync_status(
    github_issue: Any, linear_issue: Any, now: Optional[datetime] = None
) -> CrossPlatformStatus:
    """
    Compare completion state across both trackers.

    A GitHub issue is done when closed; a Linear issue is done when its
    workflow state is completed or canceled. Matching done-ness is synced.
    """
    github_done = github_issue.state == "closed"
    linear_done = linear_issue.is_done
    status = SyncStatus.SYNCED if github_done == linear_done else SyncStatus.DRIFT

    return CrossPlatformStatus(
        github_issue={
            "number": github_issue.number,
            "state": github_issue.state,
            "last_updated": github_issue.updated_at,
        },
        linear_issue={
            "id": linear_issue.id,
            "status": linear_issue.status,
            "last_updated": linear_issue.updated_at,
        },
        sync_status=status,
        checked_at=(now or datetime.now(timezone.utc)).isoformat(),
    )


class SyncStatusChecker:
    """Reads both issues and reports whether they agree"""

    def __init__(self, github: EngineeringTracker, linear: BusinessTracker):
        self.github = github
        self.linear = linear

    async def check(
        self, owner: str, repo: str, number: int, linear_issue_id: str
    ) -> CrossPlatformStatus:
        github_issue = await self.github.get_issue(owner, repo, number)
        linear_issue = await self.linear.get_issue(linear_issue_id)

        result = check_sync_status(github_issue, linear_issue)
        if result.sync_status != SyncStatus.SYNCED:
            logger.info(
                f"{owner}/{repo}#{number} ({github_issue.state}) and {linear_issue_id} "
                f"({linear_issue.status}) have drifted"
            )
        return result
