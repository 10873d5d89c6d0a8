"""Place discovery: filtering, ranking and pagination of the place listing.

Everything here is a pure computation over an already-fetched place list.
The listing is recomputed from scratch whenever the search term, the filters,
the caller's location or the data change.
"""

import logging
import math
from datetime import datetime
from typing import List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from ..models.filters import (
    EventDateRange,
    EventFilterState,
    FilterState,
    SortCriterion,
    SortOrder,
    SortSpec,
)
from ..models.place import Coordinates, Place, PlaceEvent, PlacePage, PlaceSummary
from ..utils.date_utils import is_future_date, is_past_date, to_datetime, utc_now, window_start
from ..utils.geo import haversine_km
from ..utils.time_window import is_open_now

logger = logging.getLogger(__name__)

PAGE_SIZE = 6


def matches_search(place: Place, search_term: str) -> bool:
    term = search_term.lower()
    return term in place.name.lower() or term in place.description.lower()


def matches_filters(
    place: Place,
    filters: FilterState,
    now: Optional[datetime] = None,
    created_after: Optional[datetime] = None,
) -> bool:
    """Check a single place against every active filter.

    Each filter is skipped while it holds its default value, so the checks
    combine as a plain AND.

    Args:
        place: Place to check
        filters: Current filter state
        now: Evaluation instant for the open-now check; defaults to local time
        created_after: Precomputed start of the creation-date window; derived
            from ``filters.date_range`` when omitted

    Returns:
        True if the place passes every filter
    """
    if filters.search_term and not matches_search(place, filters.search_term):
        return False

    if len(place.photos) < filters.photos_min:
        return False

    if created_after is None:
        created_after = window_start(filters.date_range, now)
    if created_after is not None and to_datetime(place.created_at) < created_after:
        return False

    if filters.category != "all" and place.category != filters.category:
        return False

    if filters.min_rating > 0:
        # A place nobody reviewed cannot meet a minimum rating
        if not place.reviews or place.average_rating < filters.min_rating:
            return False

    if filters.open_now and not is_open_now(place.visit_time_range, now):
        return False

    if filters.has_events and not place.events:
        return False

    return filters.bounding_box.contains(place.latitude, place.longitude)


def filter_places(
    places: Sequence[Place], filters: FilterState, now: Optional[datetime] = None
) -> List[Place]:
    """Keep the places that pass every active filter, in their original order."""
    created_after = window_start(filters.date_range, now)
    return [place for place in places if matches_filters(place, filters, now, created_after)]


def sort_places(
    places: Sequence[Place],
    sort: SortSpec,
    user_location: Optional[Coordinates] = None,
) -> List[Place]:
    """Order places by the requested criterion.

    - distance: ascending puts the nearest place first. Without a user
      location the input order is kept.
    - rating: average review rating; unreviewed places count as 0.
    - age: how long the place has been listed; ascending puts the most
      recently created place first.

    The sort is stable, so ties keep their relative input order.
    """
    descending = sort.order == SortOrder.DESC

    if sort.criterion == SortCriterion.DISTANCE:
        if user_location is None:
            logger.debug("No user location available, skipping distance sort")
            return list(places)
        return sorted(
            places,
            key=lambda place: haversine_km(user_location, place.coordinates),
            reverse=descending,
        )

    if sort.criterion == SortCriterion.RATING:
        return sorted(places, key=lambda place: place.average_rating, reverse=descending)

    # Age grows as the creation time recedes, so ascending age is newest first
    return sorted(
        places,
        key=lambda place: to_datetime(place.created_at),
        reverse=not descending,
    )


def total_pages(count: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(count / page_size)


def clamp_page(page: int, pages: int) -> int:
    """Pull a 1-based page index back into ``[1, max(1, pages)]``."""
    return min(max(1, page), max(1, pages))


def paginate(items: Sequence, page: int, page_size: int = PAGE_SIZE) -> list:
    """Return the 1-based ``page`` of ``items``. Out-of-range pages are empty."""
    start = (page - 1) * page_size
    return list(items[start : start + page_size])


def discover_places(
    places: Sequence[Place],
    filters: FilterState,
    page: int = 1,
    user_location: Optional[Coordinates] = None,
    now: Optional[datetime] = None,
    page_size: int = PAGE_SIZE,
) -> PlacePage:
    """Filter, sort and paginate the place listing.

    A page index left dangling after the result set shrank is clamped to the
    last available page.
    """
    matching = filter_places(places, filters, now)
    ranked = sort_places(matching, filters.sort, user_location)

    pages = total_pages(len(ranked), page_size)
    current = clamp_page(page, pages)
    if current != page:
        logger.debug(f"Clamped page {page} to {current} of {pages}")

    return PlacePage(
        items=paginate(ranked, current, page_size),
        page=current,
        total_pages=pages,
        total_count=len(ranked),
    )


def collect_events(places: Sequence[Place]) -> List[PlaceEvent]:
    """Flatten the events of every place, tagging each with its host place."""
    events = []
    for place in places:
        summary = PlaceSummary(
            id=place.id,
            name=place.name,
            category=place.category,
            latitude=place.latitude,
            longitude=place.longitude,
            cover_image=place.cover_image,
        )
        for event in place.events:
            events.append(PlaceEvent(**event.model_dump(), place=summary))
    return events


def _event_matches_search(event: PlaceEvent, search_term: str) -> bool:
    term = search_term.lower()
    if term in event.name.lower() or term in event.description.lower():
        return True
    return event.place is not None and term in event.place.name.lower()


def _event_in_range(event: PlaceEvent, date_range: EventDateRange, now: datetime) -> bool:
    if date_range == EventDateRange.ALL:
        return True
    # Events still running count as upcoming
    if is_past_date(event.end_date, now):
        return False
    if date_range == EventDateRange.THIS_WEEK:
        return not is_future_date(event.start_date, now + relativedelta(days=7))
    if date_range == EventDateRange.THIS_MONTH:
        return not is_future_date(event.start_date, now + relativedelta(months=1))
    return True


def filter_events(
    events: Sequence[PlaceEvent],
    filters: EventFilterState,
    search_term: str = "",
    now: Optional[datetime] = None,
) -> List[PlaceEvent]:
    """Filter the event listing and order it by start date."""
    now = to_datetime(now or utc_now())

    matching = [
        event
        for event in events
        if (not search_term or _event_matches_search(event, search_term))
        and (
            filters.category == "all"
            or (event.place is not None and event.place.category == filters.category)
        )
        and _event_in_range(event, filters.date_range, now)
    ]
    return sorted(
        matching,
        key=lambda event: to_datetime(event.start_date),
        reverse=filters.order == SortOrder.DESC,
    )

