"""
Issue Triage Module

Deterministic triage for the GitHub / Linear bridge:
- Platform classification (engineering, business or hybrid)
- Label generation per platform
- Agent-readiness and complexity assessment
- Hybrid issue coordination across both trackers
- Cross-platform sync status
"""

from .classifier import IssueClassifier, TriageDecision
from .hybrid import (
    COORDINATION_LABELS,
    HybridCoordinator,
    HybridIssueRequest,
    HybridIssueResult,
)
from .labels import LabelGenerator
from .platform import Platform
from .readiness import AgentReadinessAssessor, AgentReadyAssessment, ComplexityLevel
from .sync import CrossPlatformStatus, SyncStatus, SyncStatusChecker, check_sync_status

__all__ = [
    # Classification
    "IssueClassifier",
    "TriageDecision",
    "Platform",
    # Labels
    "LabelGenerator",
    # Readiness
    "AgentReadinessAssessor",
    "AgentReadyAssessment",
    "ComplexityLevel",
    # Hybrid coordination
    "COORDINATION_LABELS",
    "HybridCoordinator",
    "HybridIssueRequest",
    "HybridIssueResult",
    # Sync status
    "CrossPlatformStatus",
    "SyncStatus",
    "SyncStatusChecker",
    "check_sync_status",
]
