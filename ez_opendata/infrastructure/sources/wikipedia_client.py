"""
Wikipedia geosearch: articles around a coordinate.
"""

from __future__ import annotations

from typing import Any

from ez_opendata.errors import ParseError
from ez_opendata.infrastructure.http import SourceClient, raise_for_error_object
from ez_opendata.utils.link_generator import wikipedia_article_url
from ez_opendata.utils.logger import get_logger

logger = get_logger(__name__)


def wikipedia_api_url(language: str) -> str:
    return f"https://{language}.wikipedia.org/w/api.php"


class WikipediaClient(SourceClient):
    provider = "Wikipedia"

    def geosearch(
        self,
        lat: float = 37,
        lon: float = -122,
        language: str = "en",
        radius: int = 10000,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """
        Return the Wikipedia articles around a location.

        Args:
            lat, lon: Search center.
            language: Wikipedia language code (subdomain).
            radius: Search radius in meters.
            limit: Maximum number of articles.

        Returns:
            Geosearch records (pageid, title, lat, lon, dist, ...) each with
            an added `url` pointing at the article.
        """
        params = {
            "action": "query",
            "list": "geosearch",
            "gscoord": f"{lat}|{lon}",
            "gsradius": radius,
            "gslimit": limit,
            "origin": "*",
            "format": "json",
        }
        data = self._get_json(wikipedia_api_url(language), params)
        raise_for_error_object(data, self.provider)
        try:
            articles = data["query"]["geosearch"]
        except (KeyError, TypeError) as e:
            raise ParseError("Wikipedia response has no query.geosearch") from e
        if not isinstance(articles, list):
            raise ParseError("Wikipedia query.geosearch is not a list")

        for a in articles:
            a["url"] = wikipedia_article_url(language, a.get("title", ""))
        logger.info("Wikipedia (%s) returned %d articles around %s,%s", language, len(articles), lat, lon)
        return articles
