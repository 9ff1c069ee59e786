"""
Tests for OverpassClient: query building, POI normalization, errors.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from ez_opendata.domains.geo import BoundingBox
from ez_opendata.errors import NetworkError, ParseError
from ez_opendata.infrastructure.sources.overpass_client import (
    FOOD_SHOP_CATEGORIES,
    OverpassClient,
    _build_query,
    _parse_overpass_response,
)


def _session(payload: object) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = payload
    mock_response.raise_for_status = MagicMock()
    session = MagicMock()
    session.post.return_value = mock_response
    return session


@pytest.fixture
def elements() -> list[dict]:
    return [
        {
            "type": "node",
            "id": 1,
            "lat": 37.8,
            "lon": -122.27,
            "tags": {"name": "Cafe Lake", "amenity": "cafe", "contact:website": "https://lake.example"},
        },
        {"type": "node", "id": 2, "lat": 37.81, "lon": -122.26},
        {"type": "way", "id": 3, "nodes": [2], "tags": {"name": "Diner", "amenity": "restaurant", "website": "https://diner.example"}},
        {"id": 4, "members": [{"type": "way", "ref": 3, "role": "outer"}], "tags": {"name": "Food Court", "amenity": "restaurant"}},
        {"type": "node", "id": 5, "tags": {}},
    ]


def test_get_pois_normalizes_elements(elements: list[dict]) -> None:
    """Tags merged, tagless elements dropped, links derived."""
    session = _session({"elements": elements})
    client = OverpassClient(session=session)

    pois = client.get_pois("37.8,-122.3,37.9,-122.2", [("amenity", "cafe"), ("amenity", "restaurant")])

    assert [p["id"] for p in pois] == [1, 3, 4]
    for p in pois:
        assert "tags" not in p
        assert p["osm_url"] == f"https://www.openstreetmap.org/{p['type']}/{p['id']}"
        assert p["osm_url_edit"] == f"https://www.openstreetmap.org/edit?{p['type']}={p['id']}"
    cafe = pois[0]
    assert cafe["name"] == "Cafe Lake"
    assert cafe["amenity"] == "cafe"
    assert cafe["lat"] == 37.8
    assert cafe["website"] == "https://lake.example"
    assert pois[1]["website"] == "https://diner.example"
    assert session.post.call_count == 1


def test_members_force_relation_type() -> None:
    """An element with members is a relation whatever its raw type says."""
    data = {
        "elements": [
            {"id": 9, "members": [], "tags": {"name": "No type"}},
            {"type": "way", "id": 10, "members": [], "tags": {"name": "Wrong type"}},
        ]
    }
    out = _parse_overpass_response(data)
    assert [p["type"] for p in out] == ["relation", "relation"]
    assert out[0]["osm_url"] == "https://www.openstreetmap.org/relation/9"
    assert out[1]["osm_url_edit"] == "https://www.openstreetmap.org/edit?relation=10"


def test_website_is_not_overwritten() -> None:
    data = {"elements": [{"type": "node", "id": 1, "tags": {"website": "a", "contact:website": "b"}}]}
    assert _parse_overpass_response(data)[0]["website"] == "a"


def test_input_elements_are_not_mutated(elements: list[dict]) -> None:
    _parse_overpass_response({"elements": elements})
    assert "tags" in elements[0]
    assert "osm_url" not in elements[0]


def test_build_query() -> None:
    q = _build_query(BoundingBox(37.8, -122.3, 37.9, -122.2), [("amenity", "cafe"), ("shop", "deli")])
    assert q.startswith("[out:json][timeout:25];")
    for kind in ("node", "way", "relation"):
        assert f'{kind}["amenity"="cafe"](37.8,-122.3,37.9,-122.2);' in q
        assert f'{kind}["shop"="deli"](37.8,-122.3,37.9,-122.2);' in q
    assert q.rstrip().endswith("out body;\n>;\nout skel qt;")


def test_request_is_posted_to_interpreter() -> None:
    session = _session({"elements": []})
    OverpassClient(session=session).get_pois("1,2,3,4", [{"key": "leisure", "value": "park"}])

    args, kwargs = session.post.call_args
    assert args[0] == "https://overpass-api.de/api/interpreter"
    assert 'relation["leisure"="park"](1,2,3,4);' in kwargs["data"]["data"]
    assert kwargs["timeout"] is None


def test_get_restaurants_uses_demo_box() -> None:
    session = _session({"elements": []})
    assert OverpassClient(session=session).get_restaurants() == []
    query = session.post.call_args.kwargs["data"]["data"]
    assert 'node["amenity"="restaurant"](37.8,-122.3,37.8,-122.2);' in query
    assert 'node["amenity"="cafe"](37.8,-122.3,37.8,-122.2);' in query


def test_get_food_shops_reads_viewport() -> None:
    session = _session({"elements": []})
    viewport = {"_northEast": {"lat": 45.5, "lng": -73.5}, "_southWest": {"lat": 45.4, "lng": -73.7}}
    OverpassClient(session=session).get_food_shops(viewport)

    query = session.post.call_args.kwargs["data"]["data"]
    for k, v in FOOD_SHOP_CATEGORIES:
        assert f'way["{k}"="{v}"](45.4,-73.7,45.5,-73.5);' in query


def test_empty_categories_rejected() -> None:
    session = _session({"elements": []})
    with pytest.raises(ValueError):
        OverpassClient(session=session).get_pois("1,2,3,4", [])
    session.post.assert_not_called()


def test_network_failure_propagates() -> None:
    session = MagicMock()
    session.post.side_effect = requests.ConnectionError("boom")
    with pytest.raises(NetworkError):
        OverpassClient(session=session).get_pois("1,2,3,4", [("amenity", "cafe")])


def test_http_error_status_is_network_error() -> None:
    session = _session({})
    session.post.return_value.raise_for_status.side_effect = requests.HTTPError("429 Too Many Requests")
    with pytest.raises(NetworkError, match="429"):
        OverpassClient(session=session).get_pois("1,2,3,4", [("amenity", "cafe")])


def test_invalid_json_is_parse_error() -> None:
    session = _session(None)
    session.post.return_value.json.side_effect = ValueError("Expecting value")
    with pytest.raises(ParseError):
        OverpassClient(session=session).get_pois("1,2,3,4", [("amenity", "cafe")])


def test_missing_elements_is_parse_error() -> None:
    with pytest.raises(ParseError):
        _parse_overpass_response({"remark": "runtime error"})


def test_non_finite_bbox_is_value_error() -> None:
    session = _session({"elements": []})
    with pytest.raises(ValueError):
        OverpassClient(session=session).get_pois("inf,0,1,1", [("amenity", "cafe")])
    session.post.assert_not_called()


def test_category_quotes_and_backslashes_are_escaped() -> None:
    q = _build_query(BoundingBox(1, 2, 3, 4), [("name", 'Joe\'s "Diner" \\ Bar')])
    assert 'node["name"="Joe\'s \\"Diner\\" \\\\ Bar"](1,2,3,4);' in q
