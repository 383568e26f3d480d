from dataclasses import dataclass
from enum import Enum


class Lang(Enum):
    JAVA = "java"
    PYTHON = "python"
    JAVASCRIPT = "javascript"

    @property
    def ecosystem(self) -> str:
        """Ecosystem name as used by the OSV database."""
        return OSV_ECOSYSTEMS[self]


OSV_ECOSYSTEMS = {
    Lang.JAVA: "Maven",
    Lang.PYTHON: "PyPI",
    Lang.JAVASCRIPT: "npm",
}


class Verdict(Enum):
    SAFE = "safe"
    RISKY = "risky"


@dataclass(frozen=True)
class Request:
    language: Lang
    name: str


@dataclass(frozen=True)
class Response:
    verdict: Verdict
    reason: str
