"""Unit tests for filter state models."""

import pytest
from pydantic import ValidationError

from halabtours.models.filters import (
    BoundingBox,
    FilterState,
    Range,
    SortCriterion,
    SortOrder,
    SortSpec,
)
from halabtours.models.place import PlaceCategory


def test_default_filter_state_is_inactive():
    filters = FilterState()

    assert filters.search_term == ""
    assert filters.sort == SortSpec(criterion=SortCriterion.DISTANCE, order=SortOrder.ASC)
    assert filters.photos_min == 0
    assert filters.category == "all"
    assert filters.min_rating == 0
    assert not filters.has_events
    assert not filters.open_now
    assert filters.bounding_box.contains(90, 180)
    assert filters.bounding_box.contains(-90, -180)


@pytest.mark.parametrize(
    "text,criterion,order",
    [
        ("distance_asc", SortCriterion.DISTANCE, SortOrder.ASC),
        ("rating_desc", SortCriterion.RATING, SortOrder.DESC),
        ("AGE_ASC", SortCriterion.AGE, SortOrder.ASC),
    ],
)
def test_sort_spec_parse(text, criterion, order):
    spec = SortSpec.parse(text)
    assert spec.criterion == criterion
    assert spec.order == order


@pytest.mark.parametrize("text", ["distance", "popularity_asc", "rating_up", ""])
def test_sort_spec_parse_rejects_unknown(text):
    with pytest.raises(ValueError):
        SortSpec.parse(text)


def test_sort_spec_str():
    assert str(SortSpec(criterion=SortCriterion.RATING, order=SortOrder.DESC)) == "rating_desc"


def test_filter_state_accepts_sort_string_and_category_code():
    filters = FilterState(sort="rating_desc", category="restaurant")
    assert filters.sort.criterion == SortCriterion.RATING
    assert filters.category == PlaceCategory.RESTAURANT


def test_filter_state_accepts_all_case_insensitively():
    assert FilterState(category="ALL").category == "all"


def test_filter_state_rejects_unknown_category():
    with pytest.raises(ValidationError):
        FilterState(category="nightlife")


def test_filter_state_rejects_negative_photo_minimum():
    with pytest.raises(ValidationError):
        FilterState(photos_min=-1)


def test_reset_restores_defaults():
    filters = FilterState(search_term="souk", open_now=True, min_rating=4)
    assert filters.reset() == FilterState()


def test_range_rejects_inverted_bounds():
    with pytest.raises(ValidationError):
        Range(min=10, max=5)


def test_bounding_box_is_inclusive():
    box = BoundingBox(lat=Range(min=36, max=37), lng=Range(min=37, max=38))
    assert box.contains(36, 38)
    assert not box.contains(35.99, 37.5)
