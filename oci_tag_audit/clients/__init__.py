"""OCI client wrapper module."""

from .search_client import OCIResourceSearchClient, SearchAPIError, SearchClient
from .client_factory import ClientConstructionError, RegionalClientFactory
from .identity_client import HomeRegionLookupError, get_home_region_key

__all__ = [
    "OCIResourceSearchClient",
    "SearchAPIError",
    "SearchClient",
    "ClientConstructionError",
    "RegionalClientFactory",
    "HomeRegionLookupError",
    "get_home_region_key",
]
