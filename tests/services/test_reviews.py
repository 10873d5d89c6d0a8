"""Unit tests for the review service."""

from unittest.mock import MagicMock

import pytest

from halabtours.models.api import AuthResponse
from halabtours.services.reviews import NotSignedInError, ReviewService
from halabtours.services.session import AuthSession


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def cache():
    return MagicMock()


@pytest.fixture
def session(user_token):
    session = AuthSession()
    session.login(AuthResponse(id=3, name="Lina", email="lina@example.com", token=user_token))
    return session


@pytest.fixture
def service(client, cache, session):
    return ReviewService(client, cache, session)


def test_add_review_sends_command_and_invalidates(service, client, cache):
    service.add_review(2, "  Wonderful view  ", 5)

    command = client.create_review.call_args[0][0]
    assert command.content == "Wonderful view"
    assert command.rating == 5
    assert command.tourism_place_id == 2
    cache.invalidate.assert_called_once()


def test_add_review_requires_sign_in(client, cache):
    service = ReviewService(client, cache, AuthSession())

    with pytest.raises(NotSignedInError):
        service.add_review(2, "Nice", 4)

    client.create_review.assert_not_called()


def test_edit_review_sends_only_changes(service, client, cache):
    service.edit_review(8, rating=3)

    review_id, command = client.update_review.call_args[0]
    assert review_id == 8
    assert command.to_json() == {"rating": 3}
    cache.invalidate.assert_called_once()


def test_edit_review_without_changes_is_a_no_op(service, client, cache):
    assert service.edit_review(8, content="   ") is None
    client.update_review.assert_not_called()
    cache.invalidate.assert_not_called()


def test_delete_review(service, client, cache):
    service.delete_review(8)
    client.delete_review.assert_called_once_with(8)
    cache.invalidate.assert_called_once()


def test_my_reviews_uses_signed_in_user(service, client):
    client.list_user_reviews.return_value = []
    assert service.my_reviews() == []
    client.list_user_reviews.assert_called_once_with(3)


def test_get_review_is_public(client, cache):
    service = ReviewService(client, cache, AuthSession())
    service.get_review(1)
    client.get_review.assert_called_once_with(1)
