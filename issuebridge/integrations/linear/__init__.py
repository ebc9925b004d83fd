"""Linear integration"""

from .client import LinearClient
from .models import LinearIssue, LinearLabel

__all__ = ["LinearClient", "LinearIssue", "LinearLabel"]
