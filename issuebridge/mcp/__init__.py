"""
Issue Bridge MCP Server

Model Context Protocol server exposing the bridge's tools to:
- Claude Code
- GitHub Copilot Custom Agents
- Other MCP-compatible clients

Note: This module uses lazy imports so the triage core and CLI can be
imported without loading the MCP SDK.
"""

__all__ = [
    "create_bridge_mcp_server",
    "run_bridge_server",
]

# Lazy import cache
_lazy_imports = {}


def __getattr__(name: str):
    """Lazy import to avoid loading the MCP SDK unless actually used."""
    if name in __all__:
        if name not in _lazy_imports:
            from .server import create_bridge_mcp_server, run_bridge_server

            _lazy_imports["create_bridge_mcp_server"] = create_bridge_mcp_server
            _lazy_imports["run_bridge_server"] = run_bridge_server
        return _lazy_imports[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
