"""Maps a vulnerability list to a Safe/Risky response."""

from typing import Optional, Sequence

from libscan.models import Response, Verdict

RISKY_REASON = "Known vulnerability"
SAFE_REASON = "No known vulnerabilities"


class ResponseBuilder:
    def build_for(self, vulnerabilities: Optional[Sequence[str]]) -> Response:
        if vulnerabilities:
            return Response(Verdict.RISKY, RISKY_REASON)
        return Response(Verdict.SAFE, SAFE_REASON)
