"""Errors raised when talking to the location list and booking api"""

from typing import Optional


class IngestError(Exception):
    """Base error for vaccine slot ingest."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.message = message
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} ({self.url})"
        return self.message


class FetchError(IngestError):
    """Network level failure: connection refused, reset, timed out, etc."""


class DecodeError(IngestError):
    """Response body was not valid json or did not have the expected shape."""


class HTTPStatusError(IngestError):
    """Server answered with a non-success status code."""

    def __init__(self, status: int, url: Optional[str] = None, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(f"Unexpected HTTP status {status}", url)
