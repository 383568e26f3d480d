"""Shared fixtures for the libscan test suite."""

import asyncio
from typing import List, Optional

import pytest

from libscan.models import Lang, Request, Response, Verdict
from libscan.scanner import Scanner
from libscan.verdict import ResponseBuilder


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------

class FakeVulnerabilitiesApi:
    def __init__(self):
        self.vulnerability: Optional[str] = None
        self.error: Optional[Exception] = None
        self.calls = []

    async def analyze(self, language: Lang, name: str) -> List[str]:
        self.calls.append((language, name))
        if self.error is not None:
            raise self.error
        return [] if self.vulnerability is None else [self.vulnerability]

    def mock_vulnerability(self, vulnerability: str) -> None:
        self.vulnerability = vulnerability

    def mock_no_vulnerabilities(self) -> None:
        self.vulnerability = None


class FakeNotifier:
    def __init__(self):
        self.notification: Optional[str] = None
        self.vulnerabilities: Optional[List[str]] = None
        self.error: Optional[Exception] = None
        self.call_count = 0

    async def notify(self, request: Request, vulnerabilities: List[str]) -> None:
        self.call_count += 1
        if self.error is not None:
            raise self.error
        self.notification = "Known vulnerability" if vulnerabilities else None
        self.vulnerabilities = list(vulnerabilities)


# ---------------------------------------------------------------------------
# Scan context: given / when / then over the fakes
# ---------------------------------------------------------------------------

class ScanContext:
    def __init__(self, vulnerabilities_api: FakeVulnerabilitiesApi, notifier: FakeNotifier):
        self.vulnerabilities_api = vulnerabilities_api
        self.notifier = notifier
        self.scanner = Scanner(vulnerabilities_api, notifier, ResponseBuilder())
        self.language: Optional[Lang] = None
        self.name = ""
        self.response: Optional[Response] = None

    # given

    def given_library(self, language: Lang, name: str) -> "ScanContext":
        self.language = language
        self.name = name
        return self

    def given_java_library(self, name: str = "libX") -> "ScanContext":
        return self.given_library(Lang.JAVA, name)

    def with_known_vulnerability(self, vulnerability: str = "CVE-2023-12345") -> "ScanContext":
        self.vulnerabilities_api.mock_vulnerability(vulnerability)
        return self

    def without_vulnerabilities(self) -> "ScanContext":
        self.vulnerabilities_api.mock_no_vulnerabilities()
        return self

    # when

    def run_scan(self) -> Response:
        request = Request(language=self.language, name=self.name)
        self.response = asyncio.run(self.scanner.scan(request))
        return self.response

    # then

    def verdict_should_be(self, expected: Verdict) -> "ScanContext":
        assert self.response is not None
        assert self.response.verdict == expected
        return self

    def reason_should_contain(self, expected: str) -> "ScanContext":
        assert self.response is not None
        assert expected in self.response.reason
        return self

    def notification_should_be_sent(self) -> "ScanContext":
        assert self.notifier.notification is not None
        return self

    def notification_should_contain(self, expected: str) -> "ScanContext":
        assert self.notifier.notification is not None, "no notification was sent"
        assert expected in self.notifier.notification
        return self

    def notification_should_not_be_sent(self) -> None:
        assert self.notifier.notification is None
        assert self.notifier.call_count == 0


@pytest.fixture
def scan_context():
    return ScanContext(FakeVulnerabilitiesApi(), FakeNotifier())


# ---------------------------------------------------------------------------
# Requests and vulnerability lists
# ---------------------------------------------------------------------------

@pytest.fixture
def java_request():
    return Request(language=Lang.JAVA, name="org.apache.logging.log4j:log4j-core")


@pytest.fixture
def python_request():
    return Request(language=Lang.PYTHON, name="django")


@pytest.fixture
def sample_vulnerabilities():
    return ["CVE-2021-44228", "CVE-2021-45046", "GHSA-jfh8-c2jp-5v3q"]


@pytest.fixture
def empty_vulnerabilities():
    return []
