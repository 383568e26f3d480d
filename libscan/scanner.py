"""Scan orchestrator.

Looks up the vulnerabilities of a library, notifies when any are found and
turns the result into a verdict.
"""

import logging
from typing import List, Optional

from libscan.models import Request, Response
from libscan.ports import Notifier, VulnerabilitiesApi
from libscan.verdict import ResponseBuilder

logger = logging.getLogger(__name__)


class Scanner:
    def __init__(
        self,
        vulnerabilities_api: VulnerabilitiesApi,
        notifier: Notifier,
        response_builder: Optional[ResponseBuilder] = None,
    ) -> None:
        self._vulnerabilities_api = vulnerabilities_api
        self._notifier = notifier
        self._response_builder = response_builder or ResponseBuilder()

    async def scan(self, request: Request) -> Response:
        vulnerabilities = await self._analyze(request)
        await self._notify_if_needed(request, vulnerabilities)
        return self._response_builder.build_for(vulnerabilities)

    async def _analyze(self, request: Request) -> List[str]:
        logger.debug("Looking up %s library %s", request.language.value, request.name)
        vulnerabilities = await self._vulnerabilities_api.analyze(request.language, request.name)
        logger.info(
            "Found %d vulnerability(ies) for %s", len(vulnerabilities or []), request.name
        )
        return vulnerabilities

    async def _notify_if_needed(self, request: Request, vulnerabilities: List[str]) -> None:
        if not vulnerabilities:
            return
        await self._notifier.notify(request, vulnerabilities)
