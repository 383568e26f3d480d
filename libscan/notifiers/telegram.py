"""Telegram notification for risky libraries."""

import asyncio
import json
import logging
import urllib.error
import urllib.request
from datetime import datetime, timezone
from typing import List

from libscan.errors import NotificationFailure
from libscan.models import Request

logger = logging.getLogger(__name__)

MAX_LISTED = 5


class TelegramNotifier:
    def __init__(self, bot_token: str, chat_id: str, timeout: int = 10) -> None:
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.timeout = timeout

    async def notify(self, request: Request, vulnerabilities: List[str]) -> None:
        message = _format_message(request, vulnerabilities)
        await asyncio.to_thread(
            _send_message, self.bot_token, self.chat_id, message, self.timeout
        )
        logger.info("Telegram notification sent for %s", request.name)


def _format_message(request: Request, vulnerabilities: List[str]) -> str:
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")

    lines = [
        f"🔐 Risky library: {request.name} ({request.language.value})",
        f"📅 {now}",
        "",
        f"🔴 Known vulnerabilities: {len(vulnerabilities)}",
    ]
    for vuln_id in vulnerabilities[:MAX_LISTED]:
        lines.append(f"  • {vuln_id}")
    if len(vulnerabilities) > MAX_LISTED:
        lines.append(f"  ...and {len(vulnerabilities) - MAX_LISTED} more")

    return "\n".join(lines)


def _send_message(bot_token: str, chat_id: str, message: str, timeout: int = 10) -> None:
    url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
    payload = json.dumps({
        "chat_id": chat_id,
        "text": message,
        "disable_web_page_preview": True,
    }).encode("utf-8")

    req = urllib.request.Request(
        url,
        data=payload,
        headers={"Content-Type": "application/json"},
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            if resp.status != 200:
                raise NotificationFailure(f"Telegram returned HTTP {resp.status}")
    except (urllib.error.URLError, urllib.error.HTTPError) as e:
        raise NotificationFailure(f"Failed to send Telegram message: {e}") from e
