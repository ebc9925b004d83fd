"""
Agent Readiness Assessor

Estimates whether an issue can be handed to an unattended coding agent and
how much work it represents. Purely keyword driven: compatibility and
complexity are computed independently, so an issue that needs a human can
still carry a complexity estimate.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)


class ComplexityLevel(Enum):
    """Complexity tiers with their hour estimates"""

    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"

    @property
    def estimated_hours(self) -> int:
        return {
            ComplexityLevel.SIMPLE: 2,
            ComplexityLevel.MODERATE: 8,
            ComplexityLevel.COMPLEX: 16,
        }[self]


@dataclass
class AgentReadyAssessment:
    """Result of an agent-readiness assessment"""

    agent_compatible: bool
    complexity_level: ComplexityLevel
    estimated_hours: int

    # Human-readable setup steps, in fixed check order
    prerequisites: List[str] = field(default_factory=list)

    # Phrases that made the issue unsuitable for an agent
    blockers: List[str] = field(default_factory=list)

    # Complexity phrases that decided the tier
    matched_indicators: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "agent_compatible": self.agent_compatible,
            "complexity_level": self.complexity_level.value,
            "estimated_hours": self.estimated_hours,
            "prerequisites": self.prerequisites,
            "blockers": self.blockers,
            "matched_indicators": self.matched_indicators,
        }


class AgentReadinessAssessor:
    """
    Assesses issues for automated implementation.

    1. An issue is agent-compatible unless it mentions something that needs
       human judgment (approvals, legal, cross-team work, customer contact).
    2. Complexity is the first tier whose phrase list matches, checked
       complex -> moderate -> simple. Simple is also the default.
    3. Prerequisites are collected per topic keyword.
    """

    # Phrases that require a human in the loop
    DISQUALIFYING_PHRASES = [
        "stakeholder approval",
        "requires approval",
        "legal review",
        "multi-team coordination",
        "cross-team coordination",
        "multiple teams",
        "breaking change",
        "domain expertise",
        "customer interaction",
        "customer call",
        "manual verification",
    ]

    COMPLEX_INDICATORS = [
        "database migration",
        "data migration",
        "architecture",
        "system-wide",
        "security audit",
        "performance optimization",
        "multiple services",
        "distributed",
        "rewrite",
        "major refactor",
    ]

    MODERATE_INDICATORS = [
        "new feature",
        "api endpoint",
        "integration",
        "refactor",
        "multiple files",
        "add support",
        "new endpoint",
        "validation",
        "feature",
    ]

    SIMPLE_INDICATORS = [
        "typo",
        "documentation",
        "readme",
        "rename",
        "small fix",
        "config change",
        "copy change",
        "bump",
    ]

    # Topic keyword -> prerequisite, checked in this order
    PREREQUISITE_RULES: List[Tuple[str, str]] = [
        ("database", "Database access and migration permissions"),
        ("test", "Test environment setup"),
        ("api", "API documentation and credentials"),
        ("security", "Security review required"),
    ]

    def assess(self, issue: Any) -> AgentReadyAssessment:
        """
        Assess an existing issue.

        Args:
            issue: Any object with ``title`` and ``body`` attributes
                (typically a GitHubIssue)

        Returns:
            AgentReadyAssessment for the issue text
        """
        return self.assess_text(
            getattr(issue, "title", "") or "", getattr(issue, "body", "") or ""
        )

    def assess_text(self, title: str, body: str) -> AgentReadyAssessment:
        """Assess raw issue text"""
        text = f"{title} {body}".lower()

        blockers = [phrase for phrase in self.DISQUALIFYING_PHRASES if phrase in text]
        complexity, indicators = self._assess_complexity(text)
        prerequisites = [
            prerequisite
            for keyword, prerequisite in self.PREREQUISITE_RULES
            if keyword in text
        ]

        logger.debug(
            f"Readiness: compatible={not blockers}, complexity={complexity.value}, "
            f"blockers={blockers}"
        )

        return AgentReadyAssessment(
            agent_compatible=not blockers,
            complexity_level=complexity,
            estimated_hours=complexity.estimated_hours,
            prerequisites=prerequisites,
            blockers=blockers,
            matched_indicators=indicators,
        )

    def _assess_complexity(self, text: str) -> Tuple[ComplexityLevel, List[str]]:
        """Resolve the complexity tier and the phrases that decided it"""
        for level, phrases in (
            (ComplexityLevel.COMPLEX, self.COMPLEX_INDICATORS),
            (ComplexityLevel.MODERATE, self.MODERATE_INDICATORS),
            (ComplexityLevel.SIMPLE, self.SIMPLE_INDICATORS),
        ):
            matched = [phrase for phrase in phrases if phrase in text]
            if matched:
                return level, matched

        return ComplexityLevel.SIMPLE, []
