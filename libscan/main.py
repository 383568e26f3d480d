"""Library vulnerability scan entry point.

Scans one library against the OSV database, notifies Telegram and/or opens
a GitHub issue when it is risky, and exits non-zero for risky libraries.
"""

import asyncio
import logging
import os
import sys
from typing import List

from github import Github, GithubException

from libscan.errors import ScanError
from libscan.lookups.osv import OSV_QUERY_URL, OsvVulnerabilitiesApi
from libscan.models import Lang, Request, Response, Verdict
from libscan.notifiers.github_issues import GitHubIssueNotifier
from libscan.notifiers.multi import MultiNotifier
from libscan.notifiers.telegram import TelegramNotifier
from libscan.ports import Notifier
from libscan.scanner import Scanner

EXIT_SAFE = 0
EXIT_RISKY = 1
EXIT_ERROR = 2


def main() -> None:
    language = os.environ.get("LIBRARY_LANGUAGE", "")
    library_name = os.environ.get("LIBRARY_NAME", "")
    osv_api_url = os.environ.get("OSV_API_URL", OSV_QUERY_URL)
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not language or not library_name:
        print("Error: LIBRARY_LANGUAGE and LIBRARY_NAME environment variables are required.")
        sys.exit(EXIT_ERROR)

    try:
        lang = Lang(language.strip().lower())
    except ValueError:
        supported = ", ".join(member.value for member in Lang)
        print(f"Error: unsupported language '{language}' (expected one of: {supported}).")
        sys.exit(EXIT_ERROR)

    request = Request(language=lang, name=library_name.strip())
    print(f"🔐 Scanning {request.name} ({request.language.value})")

    scanner = Scanner(OsvVulnerabilitiesApi(osv_api_url), MultiNotifier(_build_notifiers()))
    try:
        response = asyncio.run(scanner.scan(request))
    except ScanError as e:
        print(f"❌ Scan failed: {e}")
        sys.exit(EXIT_ERROR)

    _print_summary(request, response)

    if response.verdict == Verdict.RISKY:
        sys.exit(EXIT_RISKY)


def _build_notifiers() -> List[Notifier]:
    notifiers: List[Notifier] = []

    telegram_bot_token = os.environ.get("TELEGRAM_BOT_TOKEN", "")
    telegram_chat_id = os.environ.get("TELEGRAM_CHAT_ID", "")
    if telegram_bot_token and telegram_chat_id:
        notifiers.append(TelegramNotifier(telegram_bot_token, telegram_chat_id))
    else:
        print("Telegram credentials not configured, skipping Telegram notification.")

    github_token = os.environ.get("GITHUB_TOKEN", "")
    repo_name = os.environ.get("REPO_NAME", "")
    create_issues = os.environ.get("CREATE_ISSUES", "true").lower() == "true"
    if create_issues and github_token and repo_name:
        try:
            gh_repo = Github(github_token).get_repo(repo_name)
        except GithubException as e:
            print(f"Error accessing repo {repo_name}: {e}")
            sys.exit(EXIT_ERROR)
        notifiers.append(GitHubIssueNotifier(gh_repo))

    return notifiers


def _print_summary(request: Request, response: Response) -> None:
    icon = "⛔" if response.verdict == Verdict.RISKY else "✅"
    print(f"\n{'='*50}")
    print(f"📊 Scan Summary for {request.name}")
    print(f"{'='*50}")
    print(f"  Language: {request.language.value}")
    print(f"  Verdict:  {icon} {response.verdict.value.upper()}")
    print(f"  Reason:   {response.reason}")
    print(f"{'='*50}")


if __name__ == "__main__":
    main()
