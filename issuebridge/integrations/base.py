"""
Collaborator interfaces for the two trackers.

The hybrid coordinator and the sync checker depend only on these, so tests
can inject mocks and production code injects the aiohttp clients.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class EngineeringTracker(ABC):
    """Issue operations on the code-hosting platform (GitHub)"""

    @abstractmethod
    async def create_issue(
        self,
        title: str,
        body: str,
        labels: List[str],
        owner: str,
        repo: str,
        assignee: Optional[str] = None,
    ):
        """Create an issue and return it as a GitHubIssue"""

    @abstractmethod
    async def get_issue(self, owner: str, repo: str, number: int):
        """Fetch an existing issue as a GitHubIssue"""


class BusinessTracker(ABC):
    """Issue operations on the project-management platform (Linear)"""

    @abstractmethod
    async def create_issue(
        self,
        title: str,
        description: str,
        team_id: str,
        labels: Optional[List[str]] = None,
        priority: Optional[int] = None,
    ):
        """Create an issue and return it as a LinearIssue"""

    @abstractmethod
    async def get_issue(self, issue_id: str):
        """Fetch an existing issue as a LinearIssue"""
