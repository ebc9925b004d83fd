"""
Issue Bridge Errors

Error taxonomy shared by the triage core, the API clients and the MCP tools.
Pure triage functions never raise; everything here originates from tool input
validation or from calls to GitHub / Linear.
"""

from typing import Any, Optional


class BridgeError(Exception):
    """Base class for all issuebridge errors"""


class ConfigurationError(BridgeError):
    """Required configuration (token, API key) is missing"""


class ValidationError(BridgeError):
    """Tool input is invalid; raised before any network call is made"""


class UpstreamError(BridgeError):
    """An external API (GitHub or Linear) call failed"""

    def __init__(
        self, message: str, platform: str = "unknown", status: Optional[int] = None
    ):
        super().__init__(message)
        self.platform = platform
        self.status = status


class UpstreamCreateError(UpstreamError):
    """Creating a record on an external platform failed"""


class PartialHybridFailure(UpstreamCreateError):
    """
    The GitHub half of a hybrid issue was created but the Linear half was not.

    The GitHub issue is left in place. It is exposed as ``orphaned_issue`` so
    the caller can close it, retry the Linear side, or link it manually.
    """

    def __init__(self, message: str, orphaned_issue: Any, status: Optional[int] = None):
        super().__init__(message, platform="linear", status=status)
        self.orphaned_issue = orphaned_issue
