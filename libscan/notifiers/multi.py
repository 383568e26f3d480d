from typing import List, Sequence

from libscan.models import Request
from libscan.ports import Notifier


class MultiNotifier:
    """Notifies through each configured notifier in turn."""

    def __init__(self, notifiers: Sequence[Notifier] = ()) -> None:
        self.notifiers = list(notifiers)

    async def notify(self, request: Request, vulnerabilities: List[str]) -> None:
        for notifier in self.notifiers:
            await notifier.notify(request, vulnerabilities)
