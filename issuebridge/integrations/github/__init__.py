"""GitHub integration"""

from .client import GitHubClient
from .models import GitHubIssue, GitHubLabel, GitHubPullRequest, GitHubUser

__all__ = [
    "GitHubClient",
    "GitHubIssue",
    "GitHubLabel",
    "GitHubPullRequest",
    "GitHubUser",
]
