"""Unit tests for typed mutation commands."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from halabtours.models.commands import (
    AddPhotosCommand,
    CreateEventCommand,
    CreatePlaceCommand,
    CreateReviewCommand,
    UpdatePlaceCommand,
    UpdateReviewCommand,
)
from halabtours.models.place import PlaceCategory

COVER = ("cover.jpg", b"\xff\xd8jpeg", "image/jpeg")


def test_create_place_form_fields_use_backend_names():
    command = CreatePlaceCommand(
        name="Khan al-Wazir",
        description="Caravanserai",
        category=PlaceCategory.ARCHAEOLOGICAL,
        latitude=36.2,
        longitude=37.16,
        expected_peak_time="Evening",
        visit_time_range="9:00 AM - 5:00 PM",
        cover_image=COVER,
    )

    assert command.to_form_fields() == {
        "name": "Khan al-Wazir",
        "description": "Caravanserai",
        "category": "ARCHAEOLOGICAL",
        "latitude": "36.2",
        "longitude": "37.16",
        "expectedPeakTime": "Evening",
        "visitTimeRange": "9:00 AM - 5:00 PM",
    }
    assert command.to_files() == {"coverImage": COVER}


def test_update_place_only_sends_set_fields():
    command = UpdatePlaceCommand(name="New name")
    assert command.to_form_fields() == {"name": "New name"}
    assert command.to_files() == {}
    assert command.to_json() == {"name": "New name"}


def test_update_place_from_changes_drops_unchanged_values(make_place):
    original = make_place(name="Souk al-Madina", description="Covered market")

    command = UpdatePlaceCommand.from_changes(
        original,
        name="Souk al-Madina",
        description="Covered market, restored",
        category="ARCHAEOLOGICAL",
        visit_time_range=None,
    )

    assert command.to_form_fields() == {"description": "Covered market, restored"}


def test_update_place_from_changes_keeps_new_cover(make_place):
    command = UpdatePlaceCommand.from_changes(make_place(), cover_image=COVER)
    assert command.to_files() == {"coverImage": COVER}
    assert not command.is_empty()


def test_update_place_from_changes_rejects_unknown_fields(make_place):
    with pytest.raises(ValueError):
        UpdatePlaceCommand.from_changes(make_place(), rating=5)


def test_empty_update_is_empty():
    assert UpdatePlaceCommand().is_empty()


def test_create_event_rejects_inverted_dates():
    with pytest.raises(ValidationError):
        CreateEventCommand(
            name="Festival",
            description="x",
            start_date=datetime(2024, 7, 2, tzinfo=timezone.utc),
            end_date=datetime(2024, 7, 1, tzinfo=timezone.utc),
            tourism_place_id=1,
        )


def test_create_event_form_fields():
    command = CreateEventCommand(
        name="Festival",
        description="Music",
        start_date=datetime(2024, 7, 1, 18, tzinfo=timezone.utc),
        end_date=datetime(2024, 7, 1, 23, tzinfo=timezone.utc),
        tourism_place_id=3,
    )
    fields = command.to_form_fields()
    assert fields["startDate"] == "2024-07-01T18:00:00+00:00"
    assert fields["tourismPlaceId"] == "3"
    assert command.to_files() == {}


def test_create_review_strips_content():
    command = CreateReviewCommand(content="  Lovely  ", rating=4, tourism_place_id=2)
    assert command.to_json() == {"content": "Lovely", "rating": 4, "tourismPlaceId": 2}


@pytest.mark.parametrize("content,rating", [("   ", 3), ("Good", 0), ("Good", 6)])
def test_create_review_validation(content, rating):
    with pytest.raises(ValidationError):
        CreateReviewCommand(content=content, rating=rating, tourism_place_id=1)


def test_update_review_partial():
    assert UpdateReviewCommand(rating=2).to_json() == {"rating": 2}


def test_add_photos_requires_at_least_one():
    with pytest.raises(ValidationError):
        AddPhotosCommand(photos=[])
    assert AddPhotosCommand(photos=[COVER]).to_files() == [("photos", COVER)]
