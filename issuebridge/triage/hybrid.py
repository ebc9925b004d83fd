"""
Hybrid Issue Coordinator

Splits one piece of work into a GitHub issue (technical side) and a Linear
issue (business side) that reference each other. The GitHub issue is created
first because the Linear description links to its URL.

There is no rollback: if the Linear side fails, the GitHub issue stays and is
reported through PartialHybridFailure.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from ..exceptions import BridgeError, PartialHybridFailure, ValidationError
from ..integrations.base import BusinessTracker, EngineeringTracker
from .labels import LabelGenerator, dedupe
from .platform import Platform

logger = logging.getLogger(__name__)

COORDINATION_LABELS = ["linear-synced", "agent-available", "hybrid-issue"]

ENGINEERING_TITLE_PREFIX = "[Engineering]"
BUSINESS_TITLE_PREFIX = "[Business]"


@dataclass
class HybridIssueRequest:
    """Input for creating a hybrid issue"""

    title: str
    description: str
    owner: Optional[str] = None
    repo: Optional[str] = None
    team_id: Optional[str] = None
    platform: Union[str, Platform] = Platform.HYBRID
    labels: List[str] = field(default_factory=list)
    assignee: Optional[str] = None
    priority: Optional[int] = None  # Linear priority 0-4


@dataclass
class HybridIssueResult:
    """Both halves of a hybrid issue"""

    github_issue: Any
    linear_issue: Any
    cross_referenced: bool = True
    platform: Platform = Platform.HYBRID

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "github_issue": self.github_issue.to_dict(),
            "linear_issue": self.linear_issue.to_dict(),
            "cross_referenced": self.cross_referenced,
            "platform": self.platform.value,
        }


class HybridCoordinator:
    """Creates linked GitHub + Linear issues through injected tracker clients"""

    def __init__(
        self,
        github: EngineeringTracker,
        linear: BusinessTracker,
        label_generator: Optional[LabelGenerator] = None,
    ):
        self.github = github
        self.linear = linear
        self.label_generator = label_generator or LabelGenerator()

    @staticmethod
    def validate(request: HybridIssueRequest) -> None:
        """
        Check the request before any network call.

        Raises:
            ValidationError: If the request is not hybrid or lacks a target
        """
        try:
            platform = Platform.parse(request.platform)
        except ValueError:
            raise ValidationError(f"Unknown platform '{request.platform}'")

        if platform != Platform.HYBRID:
            raise ValidationError(
                f"Hybrid issue creation requires platform 'hybrid', got '{platform.value}'"
            )

        missing = [
            name
            for name, value in (
                ("owner", request.owner),
                ("repo", request.repo),
                ("team_id", request.team_id),
            )
            if not value
        ]
        if missing:
            raise ValidationError(
                f"Hybrid issues need a GitHub owner/repo and a Linear team; "
                f"missing: {', '.join(missing)}"
            )

    async def create_hybrid_issue(self, request: HybridIssueRequest) -> HybridIssueResult:
        """
        Create the GitHub issue, then the Linear issue linking back to it.

        Raises:
            ValidationError: Missing identifiers (nothing is created)
            UpstreamCreateError: GitHub creation failed (nothing is created)
            PartialHybridFailure: Linear creation failed after GitHub succeeded
        """
        self.validate(request)
        github_labels, linear_labels = self._labels_for(request)

        github_issue = await self.github.create_issue(
            title=f"{ENGINEERING_TITLE_PREFIX} {request.title}",
            body=self._engineering_body(request.description),
            labels=github_labels,
            owner=request.owner,
            repo=request.repo,
            assignee=request.assignee,
        )

        try:
            linear_issue = await self.linear.create_issue(
                title=f"{BUSINESS_TITLE_PREFIX} {request.title}",
                description=self._business_body(request.description, github_issue.url),
                team_id=request.team_id,
                labels=linear_labels,
                priority=request.priority,
            )
        except BridgeError as e:
            logger.error(
                f"Linear side of hybrid issue failed; GitHub issue "
                f"{request.owner}/{request.repo}#{github_issue.number} left in place: {e}"
            )
            raise PartialHybridFailure(
                f"GitHub issue #{github_issue.number} was created but the Linear "
                f"issue failed: {e}",
                orphaned_issue=github_issue,
                status=getattr(e, "status", None),
            ) from e

        logger.info(
            f"Created hybrid issue: GitHub #{github_issue.number} <-> Linear {linear_issue.id}"
        )
        return HybridIssueResult(github_issue=github_issue, linear_issue=linear_issue)

    def _labels_for(self, request: HybridIssueRequest) -> Tuple[List[str], List[str]]:
        """Caller labels win; otherwise derive them from the issue text"""
        if request.labels:
            github_labels = list(request.labels)
            linear_labels = list(request.labels)
        else:
            github_labels = self.label_generator.generate_labels(
                request.title, request.description, Platform.GITHUB
            )
            linear_labels = self.label_generator.generate_labels(
                request.title, request.description, Platform.LINEAR
            )
        return dedupe(github_labels + COORDINATION_LABELS), linear_labels

    @staticmethod
    def _engineering_body(description: str) -> str:
        return (
            f"{description}\n\n---\n"
            "**Hybrid issue**: this is the technical counterpart. "
            "Business requirements are tracked separately in Linear."
        )

    @staticmethod
    def _business_body(description: str, github_url: str) -> str:
        return (
            f"{description}\n\n---\n"
            f"**Engineering counterpart**: {github_url}"
        )
