"""
Generate canonical links for POIs, Wikipedia articles and Wikidata queries.
"""

from __future__ import annotations

from urllib.parse import quote

OSM_BASE_URL = "https://www.openstreetmap.org"
WIKIDATA_QUERY_SERVICE_URL = "https://query.wikidata.org/"


def osm_view_url(osm_type: str, osm_id: int | str) -> str:
    """View page of an OSM element, e.g. https://www.openstreetmap.org/node/42."""
    return f"{OSM_BASE_URL}/{osm_type}/{osm_id}"


def osm_edit_url(osm_type: str, osm_id: int | str) -> str:
    """Editor link of an OSM element, e.g. https://www.openstreetmap.org/edit?way=42."""
    return f"{OSM_BASE_URL}/edit?{osm_type}={osm_id}"


def wikipedia_article_url(language: str, title: str) -> str:
    """
    Article URL for a geosearch hit.

    The title is used as returned by the API (spaces included); browsers and
    Wikipedia both accept it.
    """
    return f"https://{language}.wikipedia.org/wiki/{title}"


def wikidata_query_service_url(query: str) -> str:
    """Link that opens a SPARQL query in the Wikidata Query Service UI."""
    # Same character set as JavaScript's encodeURI.
    return WIKIDATA_QUERY_SERVICE_URL + "#" + quote(query, safe="~@#$&()*!+=:;,.?/'-_")
