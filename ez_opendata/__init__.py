"""Query open data sources (OpenStreetMap, Wikipedia, Wikidata, Wikimedia Commons)."""

from ez_opendata.domains.diets import DietCount, extract_diets
from ez_opendata.domains.geo import BoundingBox, LatLng
from ez_opendata.errors import (
    NetworkError,
    OpenDataError,
    PageNotFoundError,
    ParseError,
    ProviderError,
)
from ez_opendata.services.opendata_client import OpenDataClient
from ez_opendata.utils.config import ClientSettings
from ez_opendata.utils.logger import install_null_handler, setup_logger

install_null_handler()

__version__ = "0.1.0"

__all__ = [
    "BoundingBox",
    "ClientSettings",
    "DietCount",
    "LatLng",
    "NetworkError",
    "OpenDataClient",
    "OpenDataError",
    "PageNotFoundError",
    "ParseError",
    "ProviderError",
    "extract_diets",
    "setup_logger",
]
