"""
Linear Data Models
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LinearLabel:
    """Linear issue label"""

    id: str
    name: str
    color: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinearLabel":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            color=data.get("color", "") or "",
        )


@dataclass
class LinearIssue:
    """Linear issue as returned by the GraphQL API"""

    id: str  # Human identifier, e.g. ENG-123
    title: str
    description: str = ""
    url: str = ""
    uuid: str = ""
    status: Optional[str] = None
    status_type: Optional[str] = None  # triage, backlog, unstarted, started, completed, canceled
    priority: Optional[int] = None
    labels: List[LinearLabel] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return self.status_type in ("completed", "canceled")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinearIssue":
        """Create issue from a GraphQL ``Issue`` node"""
        state = data.get("state") or {}
        identifier = data.get("identifier") or data.get("id", "")
        return cls(
            id=identifier,
            title=data.get("title", ""),
            description=data.get("description") or "",
            url=data.get("url") or f"https://linear.app/issue/{identifier}",
            uuid=data.get("id", ""),
            status=state.get("name"),
            status_type=state.get("type"),
            priority=data.get("priority"),
            labels=[
                LinearLabel.from_dict(label)
                for label in (data.get("labels") or {}).get("nodes", [])
            ],
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "status": self.status,
            "priority": self.priority,
            "labels": [label.name for label in self.labels],
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
