"""Place-related models for HalabTours."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class BackendModel(BaseModel):
    """Base model for camelCase JSON payloads, from the backend or to handler callers.

    The backend speaks camelCase JSON; fields are declared in snake_case and
    accept either spelling on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlaceCategory(str, Enum):
    """Fixed set of place categories"""

    ARCHAEOLOGICAL = "ARCHAEOLOGICAL"
    RESTAURANT = "RESTAURANT"
    ENTERTAINMENT = "ENTERTAINMENT"
    RELIGIOUS = "RELIGIOUS"
    EDUCATIONAL = "EDUCATIONAL"

    @classmethod
    def parse(cls, value: str) -> "PlaceCategory":
        """Parse a category code, mapping the legacy HISTORICAL code to ARCHAEOLOGICAL."""
        code = value.strip().upper()
        if code == "HISTORICAL":
            return cls.ARCHAEOLOGICAL
        return cls(code)


class Coordinates(BaseModel):
    """A latitude/longitude pair in degrees"""

    latitude: float
    longitude: float


class PlacePhoto(BackendModel):
    """Photo attached to a place"""

    id: int
    url: str
    tourism_place_id: Optional[int] = None
    created_at: Optional[datetime] = None


class ReviewAuthor(BackendModel):
    id: int
    name: str
    email: Optional[str] = None


class Review(BackendModel):
    """Visitor review of a place"""

    id: int
    content: str
    rating: int = Field(..., ge=1, le=5)
    user_id: Optional[int] = None
    tourism_place_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[ReviewAuthor] = None


class Event(BackendModel):
    """Event hosted at a place"""

    id: int
    name: str
    description: str = ""
    start_date: datetime
    end_date: datetime
    image: Optional[str] = None
    tourism_place_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_dates(self) -> "Event":
        if self.end_date < self.start_date:
            raise ValueError("Event end date must not be before its start date")
        return self


class Place(BackendModel):
    """Tourist place as served by the backend"""

    id: int
    name: str
    description: str = ""
    category: PlaceCategory
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    cover_image: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    admin_id: Optional[int] = None
    photos: List[PlacePhoto] = Field(default_factory=list)
    reviews: List[Review] = Field(default_factory=list)
    events: List[Event] = Field(default_factory=list)
    expected_peak_time: Optional[str] = None
    visit_time_range: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, value):
        if isinstance(value, str):
            return PlaceCategory.parse(value)
        return value

    @field_validator("photos", "reviews", "events", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        # The backend omits relations it did not join
        return [] if value is None else value

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    @property
    def average_rating(self) -> float:
        """Mean review rating, 0.0 when the place has no reviews."""
        if not self.reviews:
            return 0.0
        return sum(review.rating for review in self.reviews) / len(self.reviews)


class PlaceSummary(BackendModel):
    """Subset of a place carried alongside each of its events"""

    id: int
    name: str
    category: PlaceCategory
    latitude: float
    longitude: float
    cover_image: Optional[str] = None


class PlaceEvent(Event):
    """Event enriched with a summary of the place hosting it"""

    place: Optional[PlaceSummary] = None


class PlacePage(BackendModel):
    """One page of the discovery listing"""

    items: List[Place]
    page: int
    total_pages: int
    total_count: int
