"""
Issue Bridge Configuration
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".issuebridge/config.yaml"


@dataclass
class BridgeConfig:
    """Configuration for the GitHub / Linear bridge."""

    # Credentials
    github_token: Optional[str] = None
    linear_api_key: Optional[str] = None

    # API endpoints
    github_api_url: str = "https://api.github.com"
    linear_api_url: str = "https://api.linear.app/graphql"
    timeout: float = 30.0

    # Branch defaults for PR workflows
    default_base_branch: str = "dev"
    release_head_branch: str = "dev"
    release_base_branch: str = "main"

    # Logging
    log_file: str = ".issuebridge/issuebridge.log"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "BridgeConfig":
        """Create config from environment variables (and a .env file if present)."""
        load_dotenv(dotenv_path)
        return cls(
            github_token=os.environ.get("GITHUB_TOKEN"),
            linear_api_key=os.environ.get("LINEAR_API_KEY"),
            github_api_url=os.environ.get(
                "ISSUEBRIDGE_GITHUB_API_URL", "https://api.github.com"
            ),
            linear_api_url=os.environ.get(
                "ISSUEBRIDGE_LINEAR_API_URL", "https://api.linear.app/graphql"
            ),
            timeout=float(os.environ.get("ISSUEBRIDGE_TIMEOUT", "30.0")),
            default_base_branch=os.environ.get("ISSUEBRIDGE_BASE_BRANCH", "dev"),
            log_level=os.environ.get("ISSUEBRIDGE_LOG_LEVEL", "INFO"),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BridgeConfig":
        """Create config from the ``issuebridge`` section of a config file."""
        section = data.get("issuebridge", {}) or {}
        github = section.get("github", {}) or {}
        linear = section.get("linear", {}) or {}
        branches = section.get("branches", {}) or {}
        logging_config = section.get("logging", {}) or {}

        return cls(
            github_token=github.get("token"),
            linear_api_key=linear.get("api_key"),
            github_api_url=github.get("api_url", "https://api.github.com"),
            linear_api_url=linear.get("api_url", "https://api.linear.app/graphql"),
            timeout=section.get("timeout", 30.0),
            default_base_branch=branches.get("default_base", "dev"),
            release_head_branch=branches.get("release_head", "dev"),
            release_base_branch=branches.get("release_base", "main"),
            log_file=logging_config.get("file", ".issuebridge/issuebridge.log"),
            log_level=logging_config.get("level", "INFO"),
        )

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_PATH) -> "BridgeConfig":
        """
        Load config from a YAML file, falling back to environment credentials.

        A missing file is not an error: the environment-only config is returned.
        """
        env_config = cls.from_env()
        config_path = Path(path)
        if not config_path.exists():
            logger.debug(f"Config file {path} not found, using environment only")
            return env_config

        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        config = cls.from_dict(data)
        if not config.github_token:
            config.github_token = env_config.github_token
        if not config.linear_api_key:
            config.linear_api_key = env_config.linear_api_key
        return config

    def require_github(self) -> str:
        if not self.github_token:
            raise ConfigurationError("GITHUB_TOKEN environment variable is required")
        return self.github_token

    def require_linear(self) -> str:
        if not self.linear_api_key:
            raise ConfigurationError("LINEAR_API_KEY environment variable is required")
        return self.linear_api_key
