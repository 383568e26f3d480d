"""Collaborators the scanner depends on."""

from typing import List, Protocol

from libscan.models import Lang, Request


class VulnerabilitiesApi(Protocol):
    async def analyze(self, language: Lang, name: str) -> List[str]:
        """Return the known vulnerability ids for a library.

        An empty list means no known vulnerabilities.

        Raises:
            LookupFailure: If the vulnerabilities could not be determined
        """
        ...


class Notifier(Protocol):
    async def notify(self, request: Request, vulnerabilities: List[str]) -> None:
        """Report a risky library.

        Raises:
            NotificationFailure: If the notification could not be delivered
        """
        ...
