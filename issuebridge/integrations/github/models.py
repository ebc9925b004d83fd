"""
GitHub Data Models

Thin dataclasses over GitHub REST payloads.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class GitHubUser:
    """GitHub account"""

    login: str
    id: int = 0
    type: str = "User"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GitHubUser":
        return cls(
            login=data.get("login", "unknown"),
            id=data.get("id", 0),
            type=data.get("type", "User"),
        )


@dataclass
class GitHubLabel:
    """Issue label"""

    name: str
    color: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GitHubLabel":
        return cls(
            name=data.get("name", ""),
            color=data.get("color", "") or "",
            description=data.get("description", "") or "",
        )


@dataclass
class GitHubIssue:
    """GitHub issue as read from or written to the REST API"""

    number: int
    title: str
    body: str
    state: str  # open, closed
    id: int = 0
    user: Optional[GitHubUser] = None
    assignee: Optional[GitHubUser] = None
    labels: List[GitHubLabel] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""
    comments_count: int = 0
    html_url: str = ""

    @property
    def url(self) -> str:
        return self.html_url

    @property
    def label_names(self) -> List[str]:
        return [label.name for label in self.labels]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GitHubIssue":
        """Create issue from API response dict"""
        return cls(
            number=data.get("number", 0),
            title=data.get("title", ""),
            body=data.get("body") or "",
            state=data.get("state", "open"),
            id=data.get("id", 0),
            user=GitHubUser.from_dict(data["user"]) if data.get("user") else None,
            assignee=(
                GitHubUser.from_dict(data["assignee"]) if data.get("assignee") else None
            ),
            labels=[GitHubLabel.from_dict(label) for label in data.get("labels", [])],
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
            comments_count=data.get("comments", 0),
            html_url=data.get("html_url", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "number": self.number,
            "title": self.title,
            "body": self.body,
            "state": self.state,
            "labels": [{"name": l.name, "color": l.color} for l in self.labels],
            "assignee": self.assignee.login if self.assignee else None,
            "url": self.html_url,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class GitHubPullRequest:
    """Pull request summary"""

    number: int
    title: str
    body: str
    state: str
    html_url: str = ""
    head: str = ""
    base: str = ""
    draft: bool = False
    merged_at: Optional[str] = None
    merge_commit_sha: Optional[str] = None
    user: Optional[GitHubUser] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GitHubPullRequest":
        return cls(
            number=data.get("number", 0),
            title=data.get("title", ""),
            body=data.get("body") or "",
            state=data.get("state", "open"),
            html_url=data.get("html_url", ""),
            head=(data.get("head") or {}).get("ref", ""),
            base=(data.get("base") or {}).get("ref", ""),
            draft=data.get("draft", False),
            merged_at=data.get("merged_at"),
            merge_commit_sha=data.get("merge_commit_sha"),
            user=GitHubUser.from_dict(data["user"]) if data.get("user") else None,
        )
