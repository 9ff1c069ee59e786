"""
Wikidata SPARQL client: entities with coordinates inside a bounding box.
"""

from __future__ import annotations

from typing import Any

from ez_opendata.domains.geo import LatLng, format_coord
from ez_opendata.errors import ParseError
from ez_opendata.infrastructure.http import SourceClient
from ez_opendata.utils.link_generator import wikidata_query_service_url
from ez_opendata.utils.logger import get_logger

logger = get_logger(__name__)


def _build_box_query(north_east: LatLng, south_west: LatLng, limit: int) -> str:
    # WKT points are "longitude latitude".
    return f"""SELECT ?q ?qLabel ?location ?image ?reason ?desc ?commonscat WHERE {{
  SERVICE wikibase:box {{
    ?q wdt:P625 ?location.
    bd:serviceParam wikibase:cornerSouthWest "Point({format_coord(south_west.lng)} {format_coord(south_west.lat)})"^^geo:wktLiteral;
      wikibase:cornerNorthEast "Point({format_coord(north_east.lng)} {format_coord(north_east.lat)})"^^geo:wktLiteral.
  }}
  OPTIONAL {{ ?q wdt:P18 ?image. }}
  OPTIONAL {{ ?q wdt:P373 ?commonscat. }}
  SERVICE wikibase:label {{
    bd:serviceParam wikibase:language "[AUTO_LANGUAGE]".
    ?q schema:description ?desc;
      rdfs:label ?qLabel.
  }}
}}
LIMIT {limit}"""


class WikidataClient(SourceClient):
    provider = "Wikidata"

    def box_query(self, north_east: Any, south_west: Any, limit: int = 3000) -> list[dict[str, Any]]:
        """
        Entities whose coordinate location (P625) falls in the box, with
        optional image (P18) and Commons category (P373).

        Args:
            north_east, south_west: Corners as LatLng, (lat, lng) or {"lat", "lng"}.
            limit: Maximum number of bindings.

        Returns:
            The raw SPARQL result bindings; [] when the endpoint returns none.
        """
        query = _build_box_query(LatLng.coerce(north_east), LatLng.coerce(south_west), limit)
        logger.debug("Wikidata query: %s", wikidata_query_service_url(query))
        data = self._get_json(self._settings.wikidata_endpoint, {"format": "json", "query": query})
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, dict):
            raise ParseError("Wikidata response has no 'results' object")
        bindings = results.get("bindings") or []
        logger.info("Wikidata returned %d bindings", len(bindings))
        return bindings
