"""Shared fixtures for HalabTours tests."""

import base64
import json
from datetime import datetime, timezone
from itertools import count

import pytest

from halabtours.models.place import Event, Place, PlacePhoto, Review

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

_ids = count(1)


def build_place(**overrides) -> Place:
    """Build a place with sensible defaults; ``ratings`` expands into reviews."""
    place_id = overrides.pop("id", next(_ids))
    ratings = overrides.pop("ratings", [])
    photo_count = overrides.pop("photo_count", 0)
    event_count = overrides.pop("event_count", 0)

    data = {
        "id": place_id,
        "name": f"Place {place_id}",
        "description": "A place in Aleppo",
        "category": "ARCHAEOLOGICAL",
        "latitude": 36.2,
        "longitude": 37.16,
        "cover_image": "https://example.com/cover.jpg",
        "created_at": NOW,
        "expected_peak_time": "Morning",
        "reviews": [
            Review(id=place_id * 100 + i, content="Nice", rating=rating, tourism_place_id=place_id)
            for i, rating in enumerate(ratings)
        ],
        "photos": [
            PlacePhoto(id=place_id * 100 + i, url=f"https://example.com/{i}.jpg")
            for i in range(photo_count)
        ],
        "events": [
            Event(
                id=place_id * 100 + i,
                name=f"Event {i}",
                description="Festival",
                start_date=NOW,
                end_date=NOW,
                tourism_place_id=place_id,
            )
            for i in range(event_count)
        ],
    }
    data.update(overrides)
    return Place(**data)


def make_token(claims) -> str:
    """Build an unsigned JWT carrying ``claims``."""

    def segment(data):
        raw = base64.urlsafe_b64encode(json.dumps(data).encode()).decode()
        return raw.rstrip("=")

    return f"{segment({'alg': 'HS256', 'typ': 'JWT'})}.{segment(claims)}.signature"


@pytest.fixture
def make_place():
    """Factory fixture for places."""
    return build_place


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def admin_token():
    return make_token({"id": 1, "email": "admin@example.com", "role": "ADMIN", "exp": 2000000000})


@pytest.fixture
def user_token():
    return make_token({"id": 3, "email": "lina@example.com", "role": "USER"})
