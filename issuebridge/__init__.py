"""
Issue Bridge - route and link work between GitHub and Linear

Deterministic issue triage, label generation, agent-readiness assessment and
hybrid issue coordination, served to MCP clients.
"""

from .__version__ import __version__
from .triage import IssueClassifier, Platform, TriageDecision

__all__ = ["__version__", "IssueClassifier", "Platform", "TriageDecision"]
