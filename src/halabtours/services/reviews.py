"""Visitor reviews of places."""

import logging
from typing import List, Optional

from ..models.commands import CreateReviewCommand, UpdateReviewCommand
from ..models.place import Review
from .api_client import TourismApiClient
from .place_cache import PlaceCache
from .session import AuthSession

logger = logging.getLogger(__name__)


class NotSignedInError(Exception):
    """Raised when an action needs a signed-in user"""


class ReviewService:
    def __init__(self, client: TourismApiClient, cache: PlaceCache, session: AuthSession):
        self.client = client
        self.cache = cache
        self.session = session

    def _require_user(self) -> int:
        if self.session.user is None or not self.session.is_authenticated:
            raise NotSignedInError("Sign in to manage reviews")
        return self.session.user.id

    def add_review(self, place_id: int, content: str, rating: int) -> Optional[Review]:
        self._require_user()
        command = CreateReviewCommand(content=content, rating=rating, tourism_place_id=place_id)
        review = self.client.create_review(command)
        # Place ratings are derived from reviews, so the listing must be refetched
        self.cache.invalidate()
        return review

    def get_review(self, review_id: int) -> Review:
        return self.client.get_review(review_id)

    def edit_review(
        self, review_id: int, content: Optional[str] = None, rating: Optional[int] = None
    ) -> Optional[Review]:
        self._require_user()
        # Blank content leaves the stored text untouched
        content = content.strip() if content else None
        command = UpdateReviewCommand(content=content or None, rating=rating)
        if command.is_empty():
            return None
        review = self.client.update_review(review_id, command)
        self.cache.invalidate()
        return review

    def delete_review(self, review_id: int) -> None:
        self._require_user()
        self.client.delete_review(review_id)
        self.cache.invalidate()
        logger.info(f"Deleted review {review_id}")

    def my_reviews(self) -> List[Review]:
        user_id = self._require_user()
        return self.client.list_user_reviews(user_id)
