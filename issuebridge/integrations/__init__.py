"""
Issue Bridge Integrations

External tracker clients:
- GitHub: issues, branches, pull requests (engineering tracker)
- Linear: issues (business tracker)
"""

from .base import BusinessTracker, EngineeringTracker
from .github import GitHubClient, GitHubIssue, GitHubLabel, GitHubPullRequest
from .linear import LinearClient, LinearIssue

__all__ = [
    "BusinessTracker",
    "EngineeringTracker",
    "GitHubClient",
    "GitHubIssue",
    "GitHubLabel",
    "GitHubPullRequest",
    "LinearClient",
    "LinearIssue",
]
