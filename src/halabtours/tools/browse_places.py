"""
Place browser for HalabTours

Fetches the place list from the tourism backend and prints one page of the
discovery listing, using the same filters and sorting as the home page.
"""

import argparse
import logging
import sys
from functools import partial

from dotenv import load_dotenv
from pydantic import ValidationError

from halabtours.models.filters import BoundingBox, DateRange, FilterState, Range
from halabtours.models.place import Coordinates
from halabtours.services.api_client import ApiError
from halabtours.services.discovery import discover_places
from halabtours.services.geolocation import resolve_user_location
from halabtours.utils.general_utils import get_place_cache

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse HalabTours places")
    parser.add_argument("--search", default="", help="Search term for name and description")
    parser.add_argument("--sort", default="distance_asc", help="Sort as <criterion>_<order>")
    parser.add_argument("--category", default="all", help="Category code or 'all'")
    parser.add_argument("--min-rating", type=float, default=0, help="Minimum average rating")
    parser.add_argument("--photos-min", type=int, default=0, help="Minimum number of photos")
    parser.add_argument(
        "--date-range",
        choices=[choice.value for choice in DateRange],
        default=DateRange.ALL.value,
        help="Creation date window",
    )
    parser.add_argument("--has-events", action="store_true", help="Only places hosting events")
    parser.add_argument("--open-now", action="store_true", help="Only places open right now")
    parser.add_argument(
        "--bbox",
        nargs=4,
        type=float,
        metavar=("LAT_MIN", "LAT_MAX", "LNG_MIN", "LNG_MAX"),
        help="Restrict to a latitude/longitude box",
    )
    parser.add_argument("--lat", type=float, help="Your latitude (default: Aleppo)")
    parser.add_argument("--lng", type=float, help="Your longitude (default: Aleppo)")
    parser.add_argument("--page", type=int, default=1, help="1-based page number")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def filters_from_args(args: argparse.Namespace) -> FilterState:
    bounding_box = BoundingBox()
    if args.bbox:
        lat_min, lat_max, lng_min, lng_max = args.bbox
        bounding_box = BoundingBox(
            lat=Range(min=lat_min, max=lat_max), lng=Range(min=lng_min, max=lng_max)
        )
    return FilterState(
        search_term=args.search,
        sort=args.sort,
        photos_min=args.photos_min,
        date_range=args.date_range,
        category=args.category,
        min_rating=args.min_rating,
        has_events=args.has_events,
        open_now=args.open_now,
        bounding_box=bounding_box,
    )


def main(argv=None) -> int:
    # Load environment variables from .env file
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        filters = filters_from_args(args)
    except ValidationError as e:
        parser.error(str(e))

    locate = None
    if args.lat is not None and args.lng is not None:
        locate = partial(Coordinates, latitude=args.lat, longitude=args.lng)
    location = resolve_user_location(locate)

    try:
        places = get_place_cache().get_places()
    except ApiError as e:
        logger.error(f"Could not fetch places: {e.message}")
        return 1

    result = discover_places(places, filters, page=args.page, user_location=location)

    print(f"Page {result.page} of {result.total_pages} ({result.total_count} places)")
    for place in result.items:
        rating = f"{place.average_rating:.1f}" if place.reviews else "-"
        print(f"  [{place.id}] {place.name} ({place.category.value}) rating {rating}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
