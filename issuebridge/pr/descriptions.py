"""
Pull Request Descriptions

Markdown templates for feature and release PRs, plus the helpers that feed
them: branch naming, Linear id extraction, diff summaries and release titles.
"""

import re
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List

LINEAR_ID_PATTERN = re.compile(r"\b([A-Z]+-\d+)\b")
CONVENTIONAL_TYPE_PATTERN = re.compile(
    r"^(feat|fix|chore|refactor|style|test|docs|perf):\s*", re.IGNORECASE
)


@dataclass
class FileChange:
    file_path: str
    additions: int = 0
    deletions: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileChange":
        """Create from a GitHub compare ``files`` entry"""
        return cls(
            file_path=data.get("filename", ""),
            additions=data.get("additions", 0),
            deletions=data.get("deletions", 0),
        )


@dataclass
class PullRequestChange:
    """A merged PR included in a release"""

    number: int
    title: str
    url: str = ""
    merged_at: str = ""
    author: str = "unknown"
    body: str = ""
    linear_issues: List[str] = field(default_factory=list)


@dataclass
class DiffAnalysis:
    changed_files: List[FileChange]
    total_additions: int
    total_deletions: int
    summary: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files": len(self.changed_files),
            "total_additions": self.total_additions,
            "total_deletions": self.total_deletions,
            "summary": self.summary,
        }


def slugify(text: str) -> str:
    """Lowercase, collapse non-alphanumerics to dashes, trim dashes"""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def branch_name_for(issue_id: str, title: str) -> str:
    """Feature branch for a Linear issue, e.g. ``feature/eng-12-add-login``"""
    return f"feature/{issue_id.lower()}-{slugify(title)}"


def extract_issue_ids(text: str) -> List[str]:
    """Linear identifiers in first-seen order, without duplicates"""
    return list(OrderedDict.fromkeys(LINEAR_ID_PATTERN.findall(text or "")))


def feature_pr_description(issue: Any) -> str:
    """PR body for a feature branch created from a Linear issue"""
    return f"""## Overview
{issue.description}

---

## Key Changes
- Initial implementation for {issue.title}

---

## Code Highlights
- Implementation details will be added during development

---

## Testing
- [ ] Changes tested locally
- [ ] Automated tests added/updated
- [ ] UI changes verified

---

### Issue Tagging
Fixes {issue.id}"""


def _change_type(title: str) -> str:
    match = CONVENTIONAL_TYPE_PATTERN.match(title)
    return match.group(1).lower() if match else "other"


def release_pr_description(changes: List[PullRequestChange]) -> str:
    """
    PR body for a release (development branch into main).

    Linear ids found in a PR title are tagged as ``fixes``; ids that only
    appear in PR bodies are tagged ``contributes to``.
    """
    pr_lines = []
    closed_ids = []
    for pr in changes:
        title_ids = LINEAR_ID_PATTERN.findall(pr.title)
        suffix = f" [{title_ids[0]}]" if title_ids else ""
        pr_lines.append(f"- #{pr.number} {pr.title} (@{pr.author}){suffix}")
        if title_ids:
            closed_ids.append(title_ids[0])

    all_ids = list(
        OrderedDict.fromkeys(issue_id for pr in changes for issue_id in pr.linear_issues)
    )
    if all_ids:
        linear_tagging = "\n".join(
            f"- {'fixes' if issue_id in closed_ids else 'contributes to'} {issue_id}"
            for issue_id in all_ids
        )
    else:
        linear_tagging = "No Linear issues referenced"

    grouped: "OrderedDict[str, List[PullRequestChange]]" = OrderedDict()
    for pr in changes:
        grouped.setdefault(_change_type(pr.title), []).append(pr)

    sections = []
    for change_type, prs in grouped.items():
        lines = [
            f"- {CONVENTIONAL_TYPE_PATTERN.sub('', pr.title)} (#{pr.number})" for pr in prs
        ]
        sections.append(f"### {change_type.capitalize()}\n" + "\n".join(lines))

    key_changes = "\n\n".join(sections)
    highlights = "\n".join(pr_lines)
    count = len(changes)
    plural = "" if count == 1 else "s"

    return f"""## Overview

This release merges the latest development changes into main branch. It includes {count} pull request{plural} with various improvements and updates.

## Key Changes

{key_changes}

## Code Highlights

{highlights}

## Testing

- [x] End-to-end tests passing
- [x] Unit tests passing
- [x] Integration tests passing
- [x] Changes verified in staging environment

## Checklist

- [x] Code follows project standards
- [x] All tests passing
- [x] Documentation updated (if applicable)
- [x] Tested in staging environment

## Additional Notes

Release PR created from development branch. Please review the changes carefully before merging.

---

### Linear Issue Tagging

{linear_tagging}

---"""


def summarize_diff(files: List[FileChange]) -> DiffAnalysis:
    """Totals plus a per-top-level-directory summary line"""
    by_dir: "OrderedDict[str, List[FileChange]]" = OrderedDict()
    for change in files:
        by_dir.setdefault(change.file_path.split("/")[0], []).append(change)

    dir_summaries = []
    for directory, dir_files in by_dir.items():
        adds = sum(f.additions for f in dir_files)
        dels = sum(f.deletions for f in dir_files)
        dir_summaries.append(f"{directory} ({len(dir_files)} files, +{adds} -{dels})")

    return DiffAnalysis(
        changed_files=files,
        total_additions=sum(f.additions for f in files),
        total_deletions=sum(f.deletions for f in files),
        summary=(
            f"Changed {len(files)} files across {len(by_dir)} directories: "
            f"{', '.join(dir_summaries)}"
        ),
    )


def generate_release_title(diff: DiffAnalysis, changes: List[PullRequestChange]) -> str:
    """``release: <types by frequency> <first PR summary or top directories>``"""
    type_counts: Dict[str, int] = OrderedDict()
    for pr in changes:
        change_type = re.sub(r"^\[.*\]\s*", "", pr.title.split(":")[0]).strip()
        type_counts[change_type] = type_counts.get(change_type, 0) + 1
    types = sorted(type_counts, key=lambda t: -type_counts[t])

    dir_counts: Dict[str, int] = OrderedDict()
    for change in diff.changed_files:
        directory = change.file_path.split("/")[0]
        dir_counts[directory] = dir_counts.get(directory, 0) + 1
    top_dirs = sorted(dir_counts, key=lambda d: -dir_counts[d])[:2]

    summaries = []
    for pr in changes:
        rest = ":".join(pr.title.split(":")[1:]).strip()
        summaries.append(re.sub(r":+$", "", re.sub(r"^\[.*\]\s*", "", rest)))

    type_str = "/".join(types) if types else "chore"
    summary = summaries[0] if summaries else f"update {' and '.join(top_dirs)} components"
    return f"release: {type_str} {summary}"
