"""
Geographic scoping types: LatLng, BoundingBox and tag categories.

Callers hand us coordinates in whatever shape their map widget produces
(Leaflet objects serialised to dicts, tuples, strings); everything is
normalised here before a query is built.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping, Sequence, Union

Category = tuple[str, str]


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        _check_finite(self.lat, self.lng)

    @classmethod
    def coerce(cls, value: Any) -> "LatLng":
        """
        Build a LatLng from a LatLng, a (lat, lng) pair, or a mapping with
        `lat` and `lng` (or `lon`) keys.

        Raises:
            ValueError: If the value has no usable coordinates.
        """
        if isinstance(value, LatLng):
            return value
        if isinstance(value, Mapping):
            lat = value.get("lat")
            lng = value.get("lng", value.get("lon"))
        elif isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 2:
            lat, lng = value
        else:
            raise ValueError(f"Cannot read a coordinate from {value!r}")
        if lat is None or lng is None:
            raise ValueError(f"Coordinate is missing lat or lng: {value!r}")
        try:
            return cls(float(lat), float(lng))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid coordinate {value!r}: {e}") from e


@dataclass(frozen=True)
class BoundingBox:
    south: float
    west: float
    north: float
    east: float

    def __post_init__(self) -> None:
        _check_finite(self.south, self.west, self.north, self.east)

    @classmethod
    def from_corners(cls, north_east: Any, south_west: Any) -> "BoundingBox":
        ne = LatLng.coerce(north_east)
        sw = LatLng.coerce(south_west)
        return cls(south=sw.lat, west=sw.lng, north=ne.lat, east=ne.lng)

    @classmethod
    def from_viewport(cls, viewport: Any) -> "BoundingBox":
        """
        Build a box from map viewport bounds.

        Accepts a BoundingBox, or a mapping holding `_northEast`/`_southWest`
        (Leaflet LatLngBounds) or `northEast`/`southWest` corners.
        """
        if isinstance(viewport, BoundingBox):
            return viewport
        if not isinstance(viewport, Mapping):
            raise ValueError(f"Cannot read viewport bounds from {viewport!r}")
        for ne_key, sw_key in (("_northEast", "_southWest"), ("northEast", "southWest")):
            if ne_key in viewport and sw_key in viewport:
                return cls.from_corners(viewport[ne_key], viewport[sw_key])
        raise ValueError("Viewport needs _northEast/_southWest or northEast/southWest corners")

    @classmethod
    def parse(cls, value: "BBoxLike") -> "BoundingBox":
        """Parse "south,west,north,east", a 4-sequence, or a BoundingBox."""
        if isinstance(value, BoundingBox):
            return value
        if isinstance(value, str):
            parts: Sequence[Any] = [p.strip() for p in value.split(",")]
        else:
            parts = list(value)
        if len(parts) != 4:
            raise ValueError(f"Bounding box needs 4 numbers (south,west,north,east), got {value!r}")
        try:
            south, west, north, east = (float(p) for p in parts)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid bounding box {value!r}: {e}") from e
        return cls(south, west, north, east)

    @property
    def north_east(self) -> LatLng:
        return LatLng(self.north, self.east)

    @property
    def south_west(self) -> LatLng:
        return LatLng(self.south, self.west)

    def to_overpass(self) -> str:
        """Overpass (s,w,n,e) form."""
        return ",".join(format_coord(v) for v in (self.south, self.west, self.north, self.east))

    def __str__(self) -> str:
        return self.to_overpass()


BBoxLike = Union[BoundingBox, str, Sequence[float]]


def _check_finite(*values: float) -> None:
    for v in values:
        if not math.isfinite(v):
            raise ValueError(f"Coordinate must be a finite number, got {v!r}")


def format_coord(v: float) -> str:
    """Fixed-point rendering for query strings: 1e-05 -> "0.00001", 37.0 -> "37"."""
    s = format(Decimal(repr(float(v))), "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def normalize_categories(categories: Iterable[Any]) -> list[Category]:
    """
    Normalise tag filters to a list of (key, value) tuples.

    Each category may be a (key, value) pair or a mapping with `key` and
    `value` entries.

    Raises:
        ValueError: If the list is empty or an entry is malformed.
    """
    out: list[Category] = []
    for c in categories or []:
        if isinstance(c, Mapping):
            key, value = c.get("key"), c.get("value")
        elif isinstance(c, Sequence) and not isinstance(c, str) and len(c) == 2:
            key, value = c
        else:
            raise ValueError(f"Category must be a (key, value) pair, got {c!r}")
        if not key or value is None:
            raise ValueError(f"Category needs a key and a value, got {c!r}")
        out.append((str(key), str(value)))
    if not out:
        raise ValueError("At least one category is required")
    return out
