"""Failures a scan can end with."""


class ScanError(Exception):
    pass


class LookupFailure(ScanError):
    """The vulnerability lookup could not determine the vulnerabilities."""


class NotificationFailure(ScanError):
    """A notifier could not deliver its notification."""
