"""
OpenDataClient: one entry point over the Overpass, Wikipedia, Wikidata and
Wikimedia Commons clients, sharing a single HTTP session.
"""

from __future__ import annotations

from typing import Any, Iterable

import requests

from ez_opendata.domains.diets import DietCount, extract_diets
from ez_opendata.domains.geo import BBoxLike
from ez_opendata.infrastructure.http import new_session
from ez_opendata.infrastructure.sources import (
    OverpassClient,
    WikidataClient,
    WikimediaClient,
    WikipediaClient,
)
from ez_opendata.utils.config import ClientSettings


class OpenDataClient:
    """
    Stateless facade; every method issues at most one request.

    Pass a `requests.Session` (or a mock) to control transport; otherwise one
    is created with the configured User-Agent.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        settings: ClientSettings | None = None,
    ) -> None:
        self.settings = settings or ClientSettings()
        self.session = session if session is not None else new_session(self.settings)
        self.overpass = OverpassClient(self.session, self.settings)
        self.wikipedia = WikipediaClient(self.session, self.settings)
        self.wikidata = WikidataClient(self.session, self.settings)
        self.wikimedia = WikimediaClient(self.session, self.settings)

    @classmethod
    def from_env(cls, session: requests.Session | None = None) -> "OpenDataClient":
        """Client configured from environment variables / .env."""
        return cls(session=session, settings=ClientSettings.from_env())

    # --- OpenStreetMap ---

    def get_pois(self, bbox: BBoxLike, categories: Iterable[Any]) -> list[dict[str, Any]]:
        return self.overpass.get_pois(bbox, categories)

    def get_restaurants(self) -> list[dict[str, Any]]:
        return self.overpass.get_restaurants()

    def get_food_shops(self, viewport: Any) -> list[dict[str, Any]]:
        return self.overpass.get_food_shops(viewport)

    @staticmethod
    def extract_diets(pois: Iterable[dict[str, Any]]) -> list[DietCount]:
        return extract_diets(pois)

    # --- Wikipedia / Wikidata ---

    def wikipedia_query(
        self,
        lat: float = 37,
        lon: float = -122,
        language: str = "en",
        radius: int = 10000,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        return self.wikipedia.geosearch(lat, lon, language, radius, limit)

    def wikidata_query(self, north_east: Any, south_west: Any, limit: int = 3000) -> list[dict[str, Any]]:
        return self.wikidata.box_query(north_east, south_west, limit)

    # --- Wikimedia Commons ---

    def wikimedia_query(self, north_east: Any, south_west: Any, limit: int = 100) -> list[dict[str, Any]]:
        return self.wikimedia.geosearch(north_east, south_west, limit)

    def wikimedia_info_multiple_pages(
        self, pageids: Iterable[int | str], thumb_width: int = 600
    ) -> dict[str, Any]:
        return self.wikimedia.info_multiple_pages(pageids, thumb_width)

    def wikimedia_info(self, pageid: int | str, thumb_width: int = 600) -> dict[str, Any]:
        return self.wikimedia.info(pageid, thumb_width)
