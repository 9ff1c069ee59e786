"""
Exceptions raised by the open-data clients.

Every operation surfaces its failure to the caller; nothing is retried or
swallowed.
"""

from __future__ import annotations

from typing import Any


class OpenDataError(Exception):
    """Base class for all ez_opendata failures."""


class NetworkError(OpenDataError):
    """The request could not be sent, timed out, or got an HTTP error status."""


class ParseError(OpenDataError, ValueError):
    """The response body is not JSON or lacks the structure we need."""


class ProviderError(OpenDataError):
    """
    The provider answered with an explicit error object.

    The decoded error object is kept on ``error`` so callers can inspect
    ``code`` / ``info`` the way MediaWiki reports them.
    """

    def __init__(self, error: Any, provider: str = "") -> None:
        self.error = error
        self.provider = provider
        if isinstance(error, dict):
            detail = error.get("info") or error.get("code") or error
        else:
            detail = error
        prefix = f"{provider} error" if provider else "Provider error"
        super().__init__(f"{prefix}: {detail}")


class PageNotFoundError(OpenDataError, LookupError):
    """A requested page id is absent from the response (e.g. deleted file)."""

    def __init__(self, pageid: int | str) -> None:
        self.pageid = pageid
        super().__init__(f"Page {pageid} not found in response")
