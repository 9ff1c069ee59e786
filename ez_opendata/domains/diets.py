"""
Diet extraction: count cuisines and diet:* tags across a list of POIs.

Only meaningful for restaurants and similar food places.
"""

from __future__ import annotations

from typing import Any, Iterable, NamedTuple


class DietCount(NamedTuple):
    diet: str
    count: int


def _poi_diets(poi: dict[str, Any]) -> list[str]:
    """Distinct diet labels of one POI, in the order they are first seen."""
    diets: dict[str, None] = {}
    cuisine = poi.get("cuisine")
    if isinstance(cuisine, str):
        for token in cuisine.split(";"):
            token = token.strip().lower()
            if token:
                diets[token] = None
    for key, value in poi.items():
        if not key.startswith("diet") or value != "yes":
            continue
        parts = key.split(":")
        # "diet:vegan" -> "vegan"; a bare "diet" key names nothing
        if len(parts) > 1 and parts[1]:
            diets[parts[1]] = None
    return list(diets)


def extract_diets(pois: Iterable[dict[str, Any]]) -> list[DietCount]:
    """
    Count how many POIs offer each diet.

    Labels come from the semicolon-separated `cuisine` tag (trimmed,
    lower-cased) and from `diet:<name>=yes` tags. A POI counts once per
    label even when both sources name it.

    Returns:
        DietCount pairs, most common first; ties keep first-seen order.
    """
    counts: dict[str, int] = {}
    for poi in pois:
        for diet in _poi_diets(poi):
            counts[diet] = counts.get(diet, 0) + 1
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [DietCount(diet, count) for diet, count in ranked]
