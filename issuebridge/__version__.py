"""Version information for issuebridge"""

__version__ = "0.3.0"
__title__ = "issuebridge"
__description__ = "MCP bridge that triages and links issues across GitHub and Linear"


def get_version_info() -> str:
    return f"{__title__} {__version__} - {__description__}"
