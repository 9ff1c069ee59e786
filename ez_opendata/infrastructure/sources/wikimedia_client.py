"""
Wikimedia Commons client: geotagged files in a bounding box, and image
metadata (URLs, thumbnails, extmetadata) by page id.
"""

from __future__ import annotations

from typing import Any, Iterable

from ez_opendata.domains.geo import LatLng, format_coord
from ez_opendata.errors import PageNotFoundError, ParseError
from ez_opendata.infrastructure.http import SourceClient, raise_for_error_object
from ez_opendata.utils.logger import get_logger

logger = get_logger(__name__)

FILE_NAMESPACE = 6

# output key -> extmetadata field
_EXTMETADATA_FIELDS = {
    "name": "ObjectName",
    "date": "DateTime",
    "categories": "Categories",
    "description": "ImageDescription",
    "artist_html": "Artist",
}


def _query(data: Any) -> dict[str, Any]:
    q = data.get("query") if isinstance(data, dict) else None
    if not isinstance(q, dict):
        raise ParseError("Commons response has no 'query' object")
    return q


def _extmetadata_value(extmetadata: dict[str, Any], field: str) -> Any:
    entry = extmetadata.get(field)
    return entry.get("value") if isinstance(entry, dict) else None


class WikimediaClient(SourceClient):
    provider = "Wikimedia Commons"

    def geosearch(self, north_east: Any, south_west: Any, limit: int = 100) -> list[dict[str, Any]]:
        """
        Files (namespace 6) geotagged inside the box.

        Raises:
            ProviderError: The API answered with an error object.
        """
        ne = LatLng.coerce(north_east)
        sw = LatLng.coerce(south_west)
        params = {
            "action": "query",
            "list": "geosearch",
            # top|left|bottom|right
            "gsbbox": "|".join(format_coord(v) for v in (ne.lat, sw.lng, sw.lat, ne.lng)),
            "gsnamespace": FILE_NAMESPACE,
            "gslimit": limit,
            "format": "json",
            "origin": "*",
        }
        data = self._get_json(self._settings.commons_api_url, params)
        raise_for_error_object(data, self.provider)
        hits = _query(data).get("geosearch") or []
        logger.info("Commons returned %d files", len(hits))
        return hits

    def info_multiple_pages(self, pageids: Iterable[int | str], thumb_width: int = 600) -> dict[str, Any]:
        """
        Image info for several pages in one request.

        Returns:
            The raw `query.pages` mapping, keyed by page id string.
        """
        ids = [str(p) for p in pageids]
        if not ids:
            raise ValueError("At least one page id is required")
        params = {
            "action": "query",
            "pageids": "|".join(ids),
            "prop": "imageinfo",
            "iiprop": "extmetadata|url",
            "format": "json",
            "origin": "*",
            "iiurlwidth": thumb_width,
        }
        data = self._get_json(self._settings.commons_api_url, params)
        raise_for_error_object(data, self.provider)
        pages = _query(data).get("pages")
        if not isinstance(pages, dict):
            raise ParseError("Commons response has no query.pages mapping")
        return pages

    def info(self, pageid: int | str, thumb_width: int = 600) -> dict[str, Any]:
        """
        Image info for one page, with the common extmetadata fields lifted
        to the top level (name, date, categories, description, artist_html).

        Raises:
            PageNotFoundError: The page is not in the response (deleted file,
                wrong id) or has no image info.
        """
        pages = self.info_multiple_pages([pageid], thumb_width)
        page = pages.get(str(pageid))
        if not isinstance(page, dict) or "missing" in page or not page.get("imageinfo"):
            logger.warning("Commons page %s not found", pageid)
            raise PageNotFoundError(pageid)

        info = page["imageinfo"][0]
        extmetadata = info.get("extmetadata") or {}
        out = {key: _extmetadata_value(extmetadata, field) for key, field in _EXTMETADATA_FIELDS.items()}
        out.update(info)
        return out
