"""
Pytest configuration and fixtures for Issue Bridge tests
"""

import json
import logging
import shutil
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import yaml
from click.testing import CliRunner

from issuebridge.config import BridgeConfig
from issuebridge.integrations.github import GitHubIssue
from issuebridge.integrations.linear import LinearIssue


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path

    # Close logging handlers that might be holding files open
    for handler in logging.root.handlers[:]:
        handler.close()
        logging.root.removeHandler(handler)

    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def cli_runner():
    """Click CLI test runner"""
    return CliRunner()


@pytest.fixture
def bridge_config():
    """Config with fake credentials and no file or env lookups"""
    return BridgeConfig(github_token="ghp_test", linear_api_key="lin_api_test")


@pytest.fixture
def config_file(temp_dir):
    """Write a config file into temp_dir and return its path"""
    config = {
        "issuebridge": {
            "github": {"token": "ghp_from_file", "api_url": "https://github.example.com/api/v3"},
            "linear": {"api_key": "lin_from_file"},
            "branches": {"default_base": "develop", "release_head": "develop"},
            "logging": {"file": str(temp_dir / "bridge.log"), "level": "DEBUG"},
            "timeout": 10,
        }
    }
    path = temp_dir / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(config, f)
    return path


@pytest.fixture
def github_issue_data():
    """GitHub REST payload for a single issue"""
    return {
        "id": 1001,
        "number": 42,
        "title": "[Engineering] Platform migration epic",
        "body": "Move every service to the new platform",
        "state": "open",
        "user": {"login": "octocat", "id": 1, "type": "User"},
        "assignee": None,
        "labels": [{"name": "hybrid-issue", "color": "0e8a16"}],
        "created_at": "2024-05-01T10:00:00Z",
        "updated_at": "2024-05-02T10:00:00Z",
        "comments": 3,
        "html_url": "https://github.com/acme/widgets/issues/42",
    }


@pytest.fixture
def linear_issue_data():
    """Linear GraphQL ``Issue`` node"""
    return {
        "id": "7f3c0d7e-1111-4c1b-9a55-2f5a1c0d9e01",
        "identifier": "ENG-123",
        "title": "[Business] Platform migration epic",
        "description": "Business side",
        "url": "https://linear.app/acme/issue/ENG-123",
        "priority": 2,
        "createdAt": "2024-05-01T10:01:00Z",
        "updatedAt": "2024-05-02T11:00:00Z",
        "state": {"name": "In Progress", "type": "started"},
        "labels": {"nodes": [{"id": "lbl-1", "name": "product", "color": "#ff0000"}]},
    }


@pytest.fixture
def github_issue(github_issue_data):
    return GitHubIssue.from_dict(github_issue_data)


@pytest.fixture
def linear_issue(linear_issue_data):
    return LinearIssue.from_dict(linear_issue_data)


@pytest.fixture
def mock_github(github_issue):
    """Engineering tracker double usable with ``async with``"""
    github = AsyncMock()
    github.__aenter__.return_value = github
    github.__aexit__.return_value = False
    github.create_issue.return_value = github_issue
    github.get_issue.return_value = github_issue
    return github


@pytest.fixture
def mock_linear(linear_issue):
    """Business tracker double usable with ``async with``"""
    linear = AsyncMock()
    linear.__aenter__.return_value = linear
    linear.__aexit__.return_value = False
    linear.create_issue.return_value = linear_issue
    linear.get_issue.return_value = linear_issue
    return linear


def make_response(status=200, payload=None):
    """aiohttp-style response wrapped in an async context manager"""
    resp = MagicMock()
    resp.status = status
    resp.json = AsyncMock(return_value=payload)
    resp.text = AsyncMock(return_value=json.dumps(payload))

    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=resp)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


@pytest.fixture
def response():
    """Factory for fake aiohttp responses"""
    return make_response
