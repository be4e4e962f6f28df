"""Errors raised while fetching, decoding and rendering a poll."""
from typing import Optional


class EldoodError(Exception):
    """Base class for all fatal errors of the eldood tool."""


class UsageError(EldoodError):
    """Command line arguments were missing or invalid."""


class TransportError(EldoodError):
    """The HTTP request could not be completed."""


class MalformedResponse(EldoodError):
    """The response body is not JSON or lacks a required field."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class BadStatus(EldoodError):
    """The service answered with a status other than "ok"."""

    def __init__(self, status: str):
        super().__init__(f"bad status {status!r}")
        self.status = status


class InvalidDateFormat(EldoodError):
    """A poll date is not a valid YYYYMMDD string."""

    def __init__(self, date: str, reason: str):
        super().__init__(reason)
        self.date = date


class ConfigError(EldoodError):
    """An environment setting has an invalid value."""
