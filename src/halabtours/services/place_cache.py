"""Client-side cache of the full place list."""

import logging
import time
from typing import List, Optional

from ..models.place import Place
from .api_client import TourismApiClient

logger = logging.getLogger(__name__)


class PlaceCache:
    """Read-only copy of the backend's place list.

    The list is fetched on first use and kept until ``invalidate`` is called,
    which every mutation does, or until it is older than ``max_age`` seconds.
    Concurrent mutations are not ordered: whichever refetch lands last is what
    the cache holds.
    """

    def __init__(self, client: TourismApiClient, max_age: Optional[float] = None):
        self.client = client
        self.max_age = max_age
        self._places: Optional[List[Place]] = None
        self._fetched_at = 0.0

    @property
    def is_stale(self) -> bool:
        if self._places is None:
            return True
        if self.max_age is None:
            return False
        return time.monotonic() - self._fetched_at > self.max_age

    def get_places(self) -> List[Place]:
        if self.is_stale:
            self._places = self.client.list_places()
            self._fetched_at = time.monotonic()
            logger.info(f"Fetched {len(self._places)} places")
        return self._places

    def get_place(self, place_id: int) -> Optional[Place]:
        for place in self.get_places():
            if place.id == place_id:
                return place
        return None

    def invalidate(self) -> None:
        self._places = None

    def refresh(self) -> List[Place]:
        self.invalidate()
        return self.get_places()
