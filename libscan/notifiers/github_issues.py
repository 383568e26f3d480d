"""Opens a GitHub issue for each risky library."""

import asyncio
import logging
from typing import List, Set

from github import GithubException

from libscan.errors import NotificationFailure
from libscan.models import Request

logger = logging.getLogger(__name__)

LABELS = {
    "security": "d93f0b",
    "dependency": "0366d6",
}


class GitHubIssueNotifier:
    def __init__(self, gh_repo) -> None:
        self.gh_repo = gh_repo

    async def notify(self, request: Request, vulnerabilities: List[str]) -> None:
        await asyncio.to_thread(self._create_issue, request, vulnerabilities)

    def _create_issue(self, request: Request, vulnerabilities: List[str]) -> None:
        title = _issue_title(request, vulnerabilities)
        prefix = _issue_prefix(request)
        _ensure_labels(self.gh_repo)
        open_titles = _get_existing_issue_titles(self.gh_repo)
        if any(t.startswith(prefix) for t in open_titles):
            logger.info("Issue for %s already open, skipping", request.name)
            return

        try:
            self.gh_repo.create_issue(
                title=title,
                body=_format_issue_body(request, vulnerabilities),
                labels=list(LABELS),
            )
        except GithubException as e:
            raise NotificationFailure(f"Failed to create issue '{title}': {e}") from e
        logger.info("Created issue '%s'", title)


def _issue_prefix(request: Request) -> str:
    """Count-free part of the title, stable across rescans."""
    return f"[{request.language.value}] {request.name}:"


def _issue_title(request: Request, vulnerabilities: List[str]) -> str:
    noun = "vulnerability" if len(vulnerabilities) == 1 else "vulnerabilities"
    return f"{_issue_prefix(request)} {len(vulnerabilities)} known {noun}"


def _ensure_labels(gh_repo) -> None:
    try:
        existing = {label.name for label in gh_repo.get_labels()}
    except GithubException as e:
        logger.warning("Could not list labels: %s", e)
        return
    for name, color in LABELS.items():
        if name not in existing:
            try:
                gh_repo.create_label(name=name, color=color)
            except GithubException as e:
                # created concurrently
                logger.warning("Could not create label %s: %s", name, e)


def _get_existing_issue_titles(gh_repo) -> Set[str]:
    """Titles of open issues carrying the security label."""
    titles = set()
    try:
        for issue in gh_repo.get_issues(state="open", labels=["security"]):
            titles.add(issue.title)
    except GithubException as e:
        logger.warning("Could not list existing issues: %s", e)
    return titles


def _format_issue_body(request: Request, vulnerabilities: List[str]) -> str:
    lines = [
        f"## 🔴 Risky dependency: `{request.name}`",
        "",
        f"**Language:** {request.language.value}",
        "",
        "### Known vulnerabilities",
    ]
    lines.extend(f"- {vuln_id}" for vuln_id in vulnerabilities)
    lines.extend([
        "",
        "### Remediation",
        "Upgrade to a release that fixes the listed advisories or replace the library.",
        "",
        "---",
        "*Created by libscan*",
    ])
    return "\n".join(lines)
