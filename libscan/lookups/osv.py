"""Vulnerability lookup against the OSV database (https://osv.dev)."""

import asyncio
import json
import logging
import urllib.error
import urllib.request
from typing import List, Optional

from libscan.errors import LookupFailure
from libscan.models import Lang

logger = logging.getLogger(__name__)

OSV_QUERY_URL = "https://api.osv.dev/v1/query"
MAX_PAGES = 50


class OsvVulnerabilitiesApi:
    def __init__(self, api_url: str = OSV_QUERY_URL, timeout: int = 10) -> None:
        self.api_url = api_url
        self.timeout = timeout

    async def analyze(self, language: Lang, name: str) -> List[str]:
        vulns = await asyncio.to_thread(self._query_all, language, name)
        return _vulnerability_ids({"vulns": vulns})

    def _query_all(self, language: Lang, name: str) -> list:
        """Collect advisories across every result page."""
        vulns: list = []
        page_token = None
        for _ in range(MAX_PAGES):
            data = self._query(language, name, page_token)
            page = data.get("vulns") or []
            if not isinstance(page, list):
                raise LookupFailure(f"OSV returned an invalid response for {name}")
            vulns.extend(page)
            page_token = data.get("next_page_token")
            if not page_token:
                return vulns
        logger.warning("OSV results for %s truncated after %d pages", name, MAX_PAGES)
        return vulns

    def _query(self, language: Lang, name: str, page_token: Optional[str] = None) -> dict:
        query = {"package": {"name": name, "ecosystem": language.ecosystem}}
        if page_token:
            query["page_token"] = page_token
        payload = json.dumps(query).encode("utf-8")

        req = urllib.request.Request(
            self.api_url,
            data=payload,
            headers={"Content-Type": "application/json"},
        )

        logger.debug("Querying OSV for %s package %s", language.ecosystem, name)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                if resp.status != 200:
                    raise LookupFailure(f"OSV query for {name} returned HTTP {resp.status}")
                body = resp.read()
        except (urllib.error.URLError, urllib.error.HTTPError) as e:
            raise LookupFailure(f"OSV query for {name} failed: {e}") from e

        if not body:
            return {}
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise LookupFailure(f"OSV returned an invalid response for {name}") from e
        if not isinstance(data, dict):
            raise LookupFailure(f"OSV returned an invalid response for {name}")
        return data


def _vulnerability_ids(data: dict) -> List[str]:
    """Prefer the CVE alias of each advisory, falling back to its OSV id."""
    ids: List[str] = []
    for vuln in data.get("vulns") or []:
        if not isinstance(vuln, dict):
            continue
        aliases = vuln.get("aliases") or []
        cve = next((a for a in aliases if isinstance(a, str) and a.startswith("CVE-")), None)
        vuln_id = cve or vuln.get("id")
        if vuln_id and vuln_id not in ids:
            ids.append(vuln_id)
    return ids
