"""Unit tests for visitor location resolution."""

import threading

from halabtours.models.place import Coordinates
from halabtours.services.geolocation import FALLBACK_LOCATION, resolve_user_location

HOME = Coordinates(latitude=36.21, longitude=37.13)


def test_no_locator_uses_fallback():
    assert resolve_user_location() == FALLBACK_LOCATION


def test_located_position_is_returned():
    assert resolve_user_location(lambda: HOME) == HOME


def test_locator_returning_none_uses_fallback():
    assert resolve_user_location(lambda: None) == FALLBACK_LOCATION


def test_failing_locator_uses_fallback():
    def locate():
        raise PermissionError("denied")

    assert resolve_user_location(locate) == FALLBACK_LOCATION


def test_slow_locator_times_out():
    release = threading.Event()

    def locate():
        release.wait(5)
        return HOME

    try:
        assert resolve_user_location(locate, timeout=0.05) == FALLBACK_LOCATION
    finally:
        release.set()


def test_custom_fallback():
    assert resolve_user_location(lambda: None, fallback=HOME) == HOME
