"""
Shared HTTP plumbing for the provider clients.

One request per call, JSON decoding, and mapping of `requests` failures onto
NetworkError / ParseError. No retries and no caching.
"""

from __future__ import annotations

import json
from typing import Any

import requests

from ez_opendata.errors import NetworkError, ParseError, ProviderError
from ez_opendata.utils.config import ClientSettings
from ez_opendata.utils.logger import get_logger

logger = get_logger(__name__)


def new_session(settings: ClientSettings) -> requests.Session:
    s = requests.Session()
    s.headers.update({"User-Agent": settings.user_agent, "Accept": "application/json"})
    return s


def _decode(r: requests.Response, url: str) -> Any:
    try:
        return r.json()
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning("Invalid JSON from %s: %s", url, e)
        raise ParseError(f"Response from {url} is not valid JSON: {e}") from e


class SourceClient:
    """
    Base for provider clients. Holds an injected `requests.Session` (so tests
    can pass a mock) and immutable settings.
    """

    provider = "open data"

    def __init__(
        self,
        session: requests.Session | None = None,
        settings: ClientSettings | None = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._session = session if session is not None else new_session(self._settings)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def _get_json(self, url: str, params: dict[str, Any]) -> Any:
        logger.debug("%s GET %s params=%s", self.provider, url, params)
        try:
            r = self._session.get(url, params=params, timeout=self._settings.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            logger.warning("%s request failed: %s", self.provider, e)
            raise NetworkError(f"{self.provider} request to {url} failed: {e}") from e
        return _decode(r, url)

    def _post_json(self, url: str, data: dict[str, Any]) -> Any:
        logger.debug("%s POST %s", self.provider, url)
        try:
            r = self._session.post(url, data=data, timeout=self._settings.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            logger.warning("%s request failed: %s", self.provider, e)
            raise NetworkError(f"{self.provider} request to {url} failed: {e}") from e
        return _decode(r, url)


def raise_for_error_object(data: Any, provider: str) -> None:
    """Raise ProviderError when a MediaWiki-style payload carries `error`."""
    if isinstance(data, dict) and data.get("error"):
        logger.warning("%s returned an error: %s", provider, data["error"])
        raise ProviderError(data["error"], provider=provider)
