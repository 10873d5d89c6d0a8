"""Administrative management of places and events."""

import logging
from typing import Optional

from ..models.commands import (
    AddPhotosCommand,
    CreateEventCommand,
    CreatePlaceCommand,
    UpdateEventCommand,
    UpdatePlaceCommand,
)
from ..models.place import Event, Place, PlacePage
from .api_client import TourismApiClient
from .discovery import PAGE_SIZE, clamp_page, matches_search, paginate, total_pages
from .place_cache import PlaceCache
from .session import AuthSession, NotAdminError

logger = logging.getLogger(__name__)

ADMIN_PAGE_SIZE = PAGE_SIZE


class AdminService:
    """CRUD on places and events for a signed-in administrator.

    Every successful mutation invalidates the place cache so the next read
    refetches the list.
    """

    def __init__(self, client: TourismApiClient, cache: PlaceCache, session: AuthSession):
        self.client = client
        self.cache = cache
        self.session = session

    def _require_admin(self) -> int:
        admin_id = self.session.admin_id
        if admin_id is None:
            raise NotAdminError("An administrator must be signed in")
        return admin_id

    def list_places(self, search_term: str = "", page: int = 1) -> PlacePage:
        """Places matching ``search_term`` by name, one admin table page at a time."""
        term = search_term.lower()
        matching = [place for place in self.cache.get_places() if term in place.name.lower()]
        pages = total_pages(len(matching), ADMIN_PAGE_SIZE)
        current = clamp_page(page, pages)
        return PlacePage(
            items=paginate(matching, current, ADMIN_PAGE_SIZE),
            page=current,
            total_pages=pages,
            total_count=len(matching),
        )

    def create_place(self, command: CreatePlaceCommand) -> Optional[Place]:
        admin_id = self._require_admin()
        command = command.model_copy(update={"admin_id": admin_id})
        place = self.client.create_place(command)
        self.cache.invalidate()
        logger.info(f"Admin {admin_id} created place {command.name!r}")
        return place

    def update_place(self, place_id: int, command: UpdatePlaceCommand) -> Optional[Place]:
        admin_id = self._require_admin()
        if command.is_empty():
            logger.info(f"No changes to place {place_id}, skipping update")
            return None
        command = command.model_copy(update={"admin_id": admin_id})
        place = self.client.update_place(place_id, command)
        self.cache.invalidate()
        logger.info(f"Admin {admin_id} updated place {place_id}")
        return place

    def delete_place(self, place_id: int) -> None:
        admin_id = self._require_admin()
        self.client.delete_place(place_id)
        self.cache.invalidate()
        logger.info(f"Admin {admin_id} deleted place {place_id}")

    def add_photos(self, place_id: int, command: AddPhotosCommand) -> None:
        self._require_admin()
        self.client.add_photos(place_id, command)
        self.cache.invalidate()

    def create_event(self, command: CreateEventCommand) -> Optional[Event]:
        self._require_admin()
        event = self.client.create_event(command)
        self.cache.invalidate()
        logger.info(f"Created event {command.name!r} at place {command.tourism_place_id}")
        return event

    def update_event(self, event_id: int, command: UpdateEventCommand) -> Optional[Event]:
        self._require_admin()
        event = self.client.update_event(event_id, command)
        self.cache.invalidate()
        return event

    def delete_event(self, event_id: int) -> None:
        self._require_admin()
        self.client.delete_event(event_id)
        self.cache.invalidate()
        logger.info(f"Deleted event {event_id}")
