"""Load and validate environment variables. Uses python-dotenv.

This module is intentionally thin and side-effect free except for loading `.env`.
The clients never read the environment on their own; only
`ClientSettings.from_env()` (and `OpenDataClient.from_env()`) go through the
accessor functions below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_USER_AGENT = "ez-opendata/0.1 (https://github.com/tbo47/ez-opendata)"
DEFAULT_OVERPASS_ENDPOINT = "https://overpass-api.de/api/interpreter"
DEFAULT_WIKIDATA_ENDPOINT = "https://query.wikidata.org/bigdata/namespace/wdq/sparql"
DEFAULT_COMMONS_API_URL = "https://commons.wikimedia.org/w/api.php"


def load_config() -> None:
    """
    Load the nearest .env, searching upward from the working directory.
    Idempotent; existing environment variables win over values in .env.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_float(key: str, default: float | None = None) -> float | None:
    """Get optional env var as float; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def user_agent() -> str:
    """Optional: User-Agent sent to every provider. Wikimedia asks for a contact URL."""
    return get_optional("OPENDATA_USER_AGENT", DEFAULT_USER_AGENT)


def http_timeout() -> float | None:
    """Optional: request timeout in seconds. Default None (no timeout)."""
    timeout = get_optional_float("OPENDATA_HTTP_TIMEOUT")
    if timeout is not None and timeout <= 0:
        return None
    return timeout


def overpass_endpoint() -> str:
    """Optional: Overpass interpreter URL, for running against a mirror."""
    return get_optional("OVERPASS_ENDPOINT", DEFAULT_OVERPASS_ENDPOINT)


def wikidata_endpoint() -> str:
    """Optional: Wikidata SPARQL endpoint."""
    return get_optional("WIKIDATA_SPARQL_ENDPOINT", DEFAULT_WIKIDATA_ENDPOINT)


def commons_api_url() -> str:
    """Optional: Wikimedia Commons api.php URL."""
    return get_optional("COMMONS_API_URL", DEFAULT_COMMONS_API_URL)


@dataclass(frozen=True)
class ClientSettings:
    """Immutable settings shared by all source clients."""

    user_agent: str = DEFAULT_USER_AGENT
    timeout: float | None = None
    overpass_endpoint: str = DEFAULT_OVERPASS_ENDPOINT
    wikidata_endpoint: str = DEFAULT_WIKIDATA_ENDPOINT
    commons_api_url: str = DEFAULT_COMMONS_API_URL

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Build settings from the environment (and .env)."""
        return cls(
            user_agent=user_agent(),
            timeout=http_timeout(),
            overpass_endpoint=overpass_endpoint(),
            wikidata_endpoint=wikidata_endpoint(),
            commons_api_url=commons_api_url(),
        )
