from fintrack.application.cache.query_key import QueryKey, ResourceFamily
from fintrack.application.cache.remote_data_cache import (
    CacheState,
    Fetcher,
    RemoteDataCache,
)

__all__ = [
    "CacheState",
    "Fetcher",
    "QueryKey",
    "RemoteDataCache",
    "ResourceFamily",
]
