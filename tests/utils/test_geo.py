"""Unit tests for geospatial helpers using pytest."""

import math

import pytest

from halabtours.models.place import Coordinates
from halabtours.utils.geo import distance_between, haversine_km

ALEPPO = Coordinates(latitude=36.2021, longitude=37.1343)
DAMASCUS = Coordinates(latitude=33.5138, longitude=36.2765)


def test_identical_points_are_zero_apart():
    assert haversine_km(ALEPPO, ALEPPO) == 0.0


def test_distance_is_symmetric():
    assert haversine_km(ALEPPO, DAMASCUS) == pytest.approx(haversine_km(DAMASCUS, ALEPPO))


def test_aleppo_to_damascus():
    # Roughly 310 km as the crow flies
    assert haversine_km(ALEPPO, DAMASCUS) == pytest.approx(310, abs=5)


def test_one_degree_of_latitude():
    assert distance_between(0, 0, 1, 0) == pytest.approx(6371 * math.pi / 180)


def test_antipodes_are_half_the_circumference_apart():
    assert distance_between(0, 0, 0, 180) == pytest.approx(6371 * math.pi)


def test_nan_propagates():
    assert math.isnan(distance_between(float("nan"), 0, 0, 0))
