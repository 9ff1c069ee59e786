"""Provider clients: Overpass, Wikipedia, Wikidata, Wikimedia Commons."""

from ez_opendata.infrastructure.sources.overpass_client import OverpassClient
from ez_opendata.infrastructure.sources.wikidata_client import WikidataClient
from ez_opendata.infrastructure.sources.wikimedia_client import WikimediaClient
from ez_opendata.infrastructure.sources.wikipedia_client import WikipediaClient

__all__ = ["OverpassClient", "WikidataClient", "WikimediaClient", "WikipediaClient"]
