"""
Pickup catalog client.

Downloads the catalog of pickup points grouped by country, keeps it in
memory for a configurable TTL and answers queries from the cached copy:

    from pickup_catalog import CatalogClient

    client = CatalogClient(ttl=600)
    countries = await client.get_countries()
"""

__version__ = "1.0.0"

from .client import CatalogClient
from .log_sink import LogSink, StructlogSink
from .models import CatalogEntry, Location
from shared.errors import CatalogError, ConfigurationError, FetchError

__all__ = [
    "CatalogClient",
    "LogSink",
    "StructlogSink",
    "CatalogEntry",
    "Location",
    "CatalogError",
    "ConfigurationError",
    "FetchError",
]
