import os
from functools import lru_cache

from ..services.api_client import DEFAULT_TIMEOUT, TourismApiClient
from ..services.place_cache import PlaceCache
from ..services.session import AuthSession

# Constants
DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_PLACE_CACHE_MAX_AGE = 5.0


def get_api_url() -> str:
    return os.environ.get("TOURISM_API_URL", DEFAULT_API_URL)


def get_api_timeout() -> float:
    """Get the backend request timeout in seconds.

    Raises:
        ValueError: If TOURISM_API_TIMEOUT is set but is not a positive number.
    """
    raw = os.environ.get("TOURISM_API_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    timeout = float(raw)
    if timeout <= 0:
        raise ValueError(f"TOURISM_API_TIMEOUT must be positive, got {raw}")
    return timeout


@lru_cache
def get_api_client() -> TourismApiClient:
    """Get a cached anonymous backend client for the public read endpoints."""
    return TourismApiClient(get_api_url(), session=AuthSession(), timeout=get_api_timeout())


@lru_cache
def get_place_cache() -> PlaceCache:
    """Get the cached place list, refetched once it is older than the max age."""
    max_age = float(os.environ.get("TOURISM_PLACE_CACHE_MAX_AGE", DEFAULT_PLACE_CACHE_MAX_AGE))
    return PlaceCache(get_api_client(), max_age=max_age)
