"""
Pull Request Module

Feature and release PR workflows with their Markdown description templates.
"""

from .descriptions import (
    DiffAnalysis,
    FileChange,
    PullRequestChange,
    branch_name_for,
    extract_issue_ids,
    feature_pr_description,
    generate_release_title,
    release_pr_description,
    summarize_diff,
)
from .workflows import PullRequestWorkflows

__all__ = [
    "DiffAnalysis",
    "FileChange",
    "PullRequestChange",
    "PullRequestWorkflows",
    "branch_name_for",
    "extract_issue_ids",
    "feature_pr_description",
    "generate_release_title",
    "release_pr_description",
    "summarize_diff",
]
