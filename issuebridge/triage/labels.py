"""
Label Generator

Derives platform-specific label sets from issue text. Works independently of
the classifier's platform decision so it can be called standalone with just a
title, a body and a target platform.
"""

import logging
from typing import Iterable, List, Optional, Tuple, Union

from .platform import Platform
from .readiness import AgentReadinessAssessor

logger = logging.getLogger(__name__)

LabelRules = List[Tuple[str, Tuple[str, ...]]]


def dedupe(labels: Iterable[str]) -> List[str]:
    """Drop duplicates while keeping first-seen order"""
    seen = set()
    result = []
    for label in labels:
        if label not in seen:
            seen.add(label)
            result.append(label)
    return result


class LabelGenerator:
    """
    Generates labels for GitHub and Linear issues.

    Each rule is evaluated independently, so several type and component
    labels can co-occur. A rule fires on the first of its keywords found in
    the text.
    """

    # Always applied to engineering-tracker issues
    AGENT_READY_LABEL = "agent-ready"

    TYPE_RULES: LabelRules = [
        ("bug", ("bug", "error", "crash", "broken", "fix", "regression")),
        ("feature", ("feature", "add", "implement", "new", "support for")),
        ("security", ("security", "vulnerability", "auth", "xss", "injection")),
        (
            "infrastructure",
            ("infrastructure", "deploy", "docker", "kubernetes", "ci/cd", "pipeline"),
        ),
    ]

    COMPONENT_RULES: LabelRules = [
        ("api", ("api", "endpoint", "graphql", "rest")),
        ("frontend", ("frontend", "web", "ui component", "react", "css", "page")),
        ("database", ("database", "sql", "query", "schema", "migration")),
    ]

    BUSINESS_RULES: LabelRules = [
        ("product", ("product", "feature request", "roadmap", "user story")),
        ("business", ("business", "strategy", "revenue", "budget", "market")),
        ("design", ("design", "mockup", "wireframe", "ux", "prototype")),
        ("customer", ("customer", "client", "feedback", "support ticket")),
        ("compliance", ("compliance", "legal", "gdpr", "policy", "audit")),
        ("marketing", ("marketing", "campaign", "launch", "brand", "seo")),
    ]

    def __init__(self, assessor: Optional[AgentReadinessAssessor] = None):
        self.assessor = assessor or AgentReadinessAssessor()

    def generate_labels(
        self, title: str, body: str, platform: Union[str, Platform] = Platform.GITHUB
    ) -> List[str]:
        """
        Generate labels for an issue targeted at a platform.

        Args:
            title: Issue title
            body: Issue body / description
            platform: github/engineering, linear/business or hybrid

        Returns:
            Deduplicated labels in a deterministic order
        """
        target = Platform.parse(platform)
        text = f"{title} {body}".lower()

        labels: List[str] = []
        if target.includes_engineering:
            labels.append(self.AGENT_READY_LABEL)
            labels.extend(self.engineering_labels(text))
        if target.includes_business:
            labels.extend(self.business_labels(text))
        if target.includes_engineering:
            labels.extend(self.complexity_labels(title, body))

        return dedupe(labels)

    def engineering_labels(self, text: str) -> List[str]:
        """Type and component labels for the engineering tracker"""
        return self._apply_rules(self.TYPE_RULES + self.COMPONENT_RULES, text)

    def business_labels(self, text: str) -> List[str]:
        """Labels for the business tracker"""
        return self._apply_rules(self.BUSINESS_RULES, text)

    def complexity_labels(self, title: str, body: str) -> List[str]:
        """``complexity:<level>`` when the issue is fit for an agent, else nothing"""
        assessment = self.assessor.assess_text(title, body)
        if not assessment.agent_compatible:
            return []
        return [f"complexity:{assessment.complexity_level.value}"]

    def automation_labels(self, title: str, body: str) -> List[str]:
        """Labels that steer automated agents working the engineering tracker"""
        return [self.AGENT_READY_LABEL] + self.complexity_labels(title, body)

    @staticmethod
    def _apply_rules(rules: LabelRules, text: str) -> List[str]:
        labels = []
        for label, keywords in rules:
            for keyword in keywords:
                if keyword in text:
                    labels.append(label)
                    break
        return labels
