"""
Issue Triage Classifier

Decides whether an issue belongs on GitHub (engineering work), on Linear
(business work) or on both as a hybrid issue. The decision is a deterministic
keyword score: no model calls, no I/O, and the same input always produces the
same decision.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .labels import LabelGenerator, dedupe
from .platform import Platform

logger = logging.getLogger(__name__)


@dataclass
class TriageDecision:
    """Outcome of classifying one issue"""

    platform: Platform
    is_engineering: bool

    # Winning score over total score, boosted by 1.1 and capped at 1.0
    confidence: float

    reasoning: str

    # Union of every derived label subset
    suggested_labels: List[str] = field(default_factory=list)

    # Only populated when the platform covers the matching tracker
    engineering_labels: Optional[List[str]] = None
    business_labels: Optional[List[str]] = None
    automation_labels: Optional[List[str]] = None

    # Diagnostics
    scores: Dict[str, int] = field(default_factory=dict)
    matched_keywords: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "platform": self.platform.value,
            "is_engineering": self.is_engineering,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "suggested_labels": self.suggested_labels,
            "engineering_labels": self.engineering_labels,
            "business_labels": self.business_labels,
            "automation_labels": self.automation_labels,
            "scores": self.scores,
            "matched_keywords": self.matched_keywords,
        }


class IssueClassifier:
    """
    Keyword-weighted issue classifier.

    Scoring:
    1. Each vocabulary keyword present in the issue text or its labels scores
       once: 3 for a STRONG keyword, 2 for any other keyword longer than
       8 characters, 1 otherwise.
    2. Agent-workflow phrases add a flat bonus to engineering; explicit
       customer / business-requirement framing adds one to business.
    3. Hybrid wins if positive and not below either other score, then
       engineering wins only if strictly above business. Everything else,
       including ties and empty input, goes to Linear.
    """

    ENGINEERING_KEYWORDS = [
        # Bugs and errors
        "bug",
        "error",
        "crash",
        "exception",
        "broken",
        "failing",
        "regression",
        "stack trace",
        "hotfix",
        # Infrastructure
        "api",
        "endpoint",
        "backend",
        "frontend",
        "server",
        "database",
        "query",
        "schema",
        "migration",
        "infrastructure",
        "deployment",
        "deploy",
        "docker",
        "kubernetes",
        "ci/cd",
        # Security
        "security",
        "vulnerability",
        "authentication",
        "authorization",
        "encryption",
        "xss",
        # Performance
        "performance",
        "latency",
        "memory leak",
        "timeout",
        "optimization",
        # Development stack
        "refactor",
        "code",
        "implementation",
        "typescript",
        "javascript",
        "python",
        "react",
        "graphql",
        "sdk",
        "sql",
        # Testing
        "test",
        "unit test",
        "integration test",
        "coverage",
        # Dependencies
        "dependency",
        "dependencies",
        "upgrade",
        "npm",
    ]

    BUSINESS_KEYWORDS = [
        # Strategy and planning
        "strategy",
        "roadmap",
        "market",
        "revenue",
        "budget",
        "pricing",
        "forecast",
        "quarter",
        "okr",
        "kpi",
        "planning",
        # Design (non-implementation)
        "design review",
        "mockup",
        "wireframe",
        "branding",
        "user research",
        "persona",
        # Operations
        "operations",
        "vendor",
        "procurement",
        # Compliance
        "compliance",
        "legal",
        "gdpr",
        "contract",
        # People and process
        "hiring",
        "onboarding",
        "training",
        "stakeholder",
        "meeting",
        # Partnerships and customers
        "partnership",
        "customer",
        "feedback",
        "competitor",
        "campaign",
        "marketing",
        "sales",
    ]

    HYBRID_KEYWORDS = [
        "epic",
        "major release",
        "platform migration",
        "cross-team",
        "cross-platform",
        "multi-quarter",
        "initiative",
        "overhaul",
        "entire system",
        "company-wide",
        "product launch",
        "end-to-end",
        "large-scale",
    ]

    # Unambiguous terms that always score the top weight
    STRONG_KEYWORDS = {
        "bug",
        "error",
        "crash",
        "api",
        "security",
        "vulnerability",
        "strategy",
        "roadmap",
        "revenue",
        "market",
        "epic",
    }

    STRONG_WEIGHT = 3
    LONG_KEYWORD_WEIGHT = 2
    DEFAULT_WEIGHT = 1
    LONG_KEYWORD_LENGTH = 8

    AGENT_WORKFLOW_PHRASES = [
        "copilot",
        "coding agent",
        "ai agent",
        "automated agent",
        "agent workflow",
        "mcp",
    ]
    AGENT_WORKFLOW_BONUS = 5

    BUSINESS_REQUIREMENT_PHRASES = [
        "customer request",
        "customer feedback",
        "business requirement",
        "client request",
        "requested by customer",
        "customer-facing",
    ]
    BUSINESS_REQUIREMENT_BONUS = 4

    CONFIDENCE_BOOST = 1.1
    DEFAULT_CONFIDENCE = 0.5

    PLATFORM_NAMES = {
        Platform.GITHUB: "GitHub (engineering)",
        Platform.LINEAR: "Linear (business)",
        Platform.HYBRID: "GitHub and Linear (hybrid)",
    }

    def __init__(self, label_generator: Optional[LabelGenerator] = None):
        self.label_generator = label_generator or LabelGenerator()

    def triage(
        self,
        title: str,
        description: str,
        labels: Optional[Sequence[str]] = None,
    ) -> TriageDecision:
        """
        Classify an issue.

        Args:
            title: Issue title
            description: Issue description
            labels: Existing labels, if any

        Returns:
            TriageDecision; never raises for any string input
        """
        title = title or ""
        description = description or ""
        text = f"{title} {description}".lower()
        label_text = " ".join(labels or []).lower()

        matched = {
            "engineering": self._match(self.ENGINEERING_KEYWORDS, text, label_text),
            "business": self._match(self.BUSINESS_KEYWORDS, text, label_text),
            "hybrid": self._match(self.HYBRID_KEYWORDS, text, label_text),
        }
        scores = {category: self._score(words) for category, words in matched.items()}

        bonuses = []
        if self._contains_any(self.AGENT_WORKFLOW_PHRASES, text, label_text):
            scores["engineering"] += self.AGENT_WORKFLOW_BONUS
            bonuses.append(f"agent workflow (+{self.AGENT_WORKFLOW_BONUS} engineering)")
        if self._contains_any(self.BUSINESS_REQUIREMENT_PHRASES, text, label_text):
            scores["business"] += self.BUSINESS_REQUIREMENT_BONUS
            bonuses.append(
                f"business requirement (+{self.BUSINESS_REQUIREMENT_BONUS} business)"
            )

        platform = self._decide(scores)
        confidence = self._confidence(platform, scores)
        reasoning = self._reasoning(platform, matched, bonuses)

        # Labels come from the same text, independent of the decision above
        label_source = f"{text} {label_text}"
        engineering = self.label_generator.engineering_labels(label_source)
        business = self.label_generator.business_labels(label_source)
        automation = self.label_generator.automation_labels(
            title, f"{description} {label_text}"
        )

        decision = TriageDecision(
            platform=platform,
            is_engineering=platform == Platform.GITHUB,
            confidence=confidence,
            reasoning=reasoning,
            suggested_labels=dedupe(engineering + business + automation),
            engineering_labels=engineering if platform.includes_engineering else None,
            business_labels=business if platform.includes_business else None,
            automation_labels=automation if platform.includes_engineering else None,
            scores=scores,
            matched_keywords=matched,
        )

        logger.debug(
            f"Triaged '{title[:60]}' -> {platform.value} "
            f"(scores={scores}, confidence={confidence})"
        )
        return decision

    def _match(self, vocabulary: List[str], text: str, label_text: str) -> List[str]:
        return [kw for kw in vocabulary if kw in text or kw in label_text]

    def _score(self, keywords: List[str]) -> int:
        return sum(self._weight(kw) for kw in keywords)

    def _weight(self, keyword: str) -> int:
        if keyword in self.STRONG_KEYWORDS:
            return self.STRONG_WEIGHT
        if len(keyword) > self.LONG_KEYWORD_LENGTH:
            return self.LONG_KEYWORD_WEIGHT
        return self.DEFAULT_WEIGHT

    @staticmethod
    def _contains_any(phrases: List[str], text: str, label_text: str) -> bool:
        return any(phrase in text or phrase in label_text for phrase in phrases)

    @staticmethod
    def _decide(scores: Dict[str, int]) -> Platform:
        engineering = scores["engineering"]
        business = scores["business"]
        hybrid = scores["hybrid"]

        if hybrid > 0 and hybrid >= engineering and hybrid >= business:
            return Platform.HYBRID
        # TODO: equal non-zero engineering/business scores fall through to Linear;
        # decide whether ties should be flagged as low-confidence instead.
        if engineering > business:
            return Platform.GITHUB
        return Platform.LINEAR

    def _confidence(self, platform: Platform, scores: Dict[str, int]) -> float:
        total = sum(scores.values())
        if total == 0:
            # Maximum uncertainty is reported as-is, without the boost
            return self.DEFAULT_CONFIDENCE

        winning = {
            Platform.GITHUB: scores["engineering"],
            Platform.LINEAR: scores["business"],
            Platform.HYBRID: scores["hybrid"],
        }[platform]
        return round(min(1.0, winning / total * self.CONFIDENCE_BOOST), 3)

    def _reasoning(
        self,
        platform: Platform,
        matched: Dict[str, List[str]],
        bonuses: List[str],
    ) -> str:
        keywords = matched["engineering"] + matched["business"] + matched["hybrid"]
        name = self.PLATFORM_NAMES[platform]

        if not keywords and not bonuses:
            return f"No platform-specific keywords matched; defaulting to {name}"

        parts = [f"Routed to {name}"]
        if keywords:
            parts.append(f"matched keywords: {', '.join(keywords)}")
        if bonuses:
            parts.append(f"signals: {', '.join(bonuses)}")
        return "; ".join(parts)
