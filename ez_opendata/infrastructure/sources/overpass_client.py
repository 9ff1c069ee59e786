"""
Overpass API client for fetching POIs inside a bounding box.

Elements come back flattened: tags merged into the record, plus canonical
OpenStreetMap view/edit links.
"""

from __future__ import annotations

from typing import Any, Iterable

from ez_opendata.domains.geo import BBoxLike, BoundingBox, Category, normalize_categories
from ez_opendata.errors import ParseError
from ez_opendata.infrastructure.http import SourceClient
from ez_opendata.utils.link_generator import osm_edit_url, osm_view_url
from ez_opendata.utils.logger import get_logger

logger = get_logger(__name__)

# Demo area used by get_restaurants (Oakland, CA).
RESTAURANTS_BBOX = "37.8,-122.3,37.8,-122.2"
RESTAURANT_CATEGORIES: list[Category] = [("amenity", "cafe"), ("amenity", "restaurant")]

FOOD_SHOP_CATEGORIES: list[Category] = [
    ("amenity", "cafe"),
    ("amenity", "restaurant"),
    ("shop", "deli"),
    ("amenity", "ice_cream"),
    ("amenity", "fast_food"),
]


def _ql_string(s: str) -> str:
    return s.replace("\\", "\\\\").replace('"', '\\"')


def _build_query(bbox: BoundingBox, categories: list[Category]) -> str:
    """
    Overpass QL matching nodes, ways and relations for every category.
    `>; out skel qt;` pulls in member geometry of ways and relations.
    """
    b = bbox.to_overpass()
    parts = []
    for k, v in categories:
        k, v = _ql_string(k), _ql_string(v)
        parts.append(f'node["{k}"="{v}"]({b});')
        parts.append(f'way["{k}"="{v}"]({b});')
        parts.append(f'relation["{k}"="{v}"]({b});')
    union = "\n  ".join(parts)
    return f"""[out:json][timeout:25];
(
  {union}
);
out body;
>;
out skel qt;
"""


def _parse_element(el: dict[str, Any]) -> dict[str, Any] | None:
    tags = el.get("tags")
    if not tags:
        # geometry-only helper node from the skeleton recursion
        return None

    poi = {k: v for k, v in el.items() if k != "tags"}
    poi.update(tags)
    # Some Overpass replies omit type on relations; members give them away.
    if "members" in poi:
        poi["type"] = "relation"
    if not poi.get("website") and poi.get("contact:website"):
        poi["website"] = poi["contact:website"]

    typ = poi.get("type")
    poi["osm_url"] = osm_view_url(typ, poi.get("id"))
    poi["osm_url_edit"] = osm_edit_url(typ, poi.get("id"))
    return poi


def _parse_overpass_response(data: Any) -> list[dict[str, Any]]:
    if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
        raise ParseError("Overpass response has no 'elements' list")
    out: list[dict[str, Any]] = []
    for el in data["elements"]:
        if not isinstance(el, dict):
            raise ParseError(f"Overpass element is not an object: {el!r}")
        p = _parse_element(el)
        if p:
            out.append(p)
    return out


class OverpassClient(SourceClient):
    """Overpass API wrapper. One POST per query; no caching, no rate limiting."""

    provider = "Overpass"

    def get_pois(self, bbox: BBoxLike, categories: Iterable[Any]) -> list[dict[str, Any]]:
        """
        Fetch tagged OSM elements matching any of the categories.

        Args:
            bbox: "south,west,north,east", a 4-sequence, or a BoundingBox.
            categories: (key, value) pairs such as ("amenity", "cafe").

        Returns:
            POI dicts: element fields and tags at top level, plus
            osm_url, osm_url_edit and website when known.

        Raises:
            ValueError: Malformed bbox or empty categories.
            NetworkError: Request failed.
            ParseError: Response is not the expected JSON.
        """
        box = BoundingBox.parse(bbox)
        cats = normalize_categories(categories)
        query = _build_query(box, cats)
        data = self._post_json(self._settings.overpass_endpoint, {"data": query})
        pois = _parse_overpass_response(data)
        logger.info("Overpass fetched %d POIs for %d categories in %s", len(pois), len(cats), box)
        return pois

    def get_restaurants(self) -> list[dict[str, Any]]:
        """Restaurants and cafes in the demo area."""
        return self.get_pois(RESTAURANTS_BBOX, RESTAURANT_CATEGORIES)

    def get_food_shops(self, viewport: Any) -> list[dict[str, Any]]:
        """
        Cafes, restaurants, delis, ice cream and fast food inside a map viewport.

        Args:
            viewport: Leaflet-style bounds ({"_northEast": {...}, "_southWest": {...}})
                or a BoundingBox.
        """
        return self.get_pois(BoundingBox.from_viewport(viewport), FOOD_SHOP_CATEGORIES)
