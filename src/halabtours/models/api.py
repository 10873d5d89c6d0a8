"""API models for the HalabTours backend client and listing handlers."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.filters import (
    BoundingBox,
    CategorySelector,
    DateRange,
    EventDateRange,
    EventFilterState,
    FilterState,
    Range,
    SortOrder,
    SortSpec,
)
from ..models.place import BackendModel, Coordinates, PlaceEvent, PlacePage


class User(BackendModel):
    """Signed-in visitor or administrator"""

    id: int
    name: str
    email: str


class AuthResponse(User):
    """Body returned by the login and register endpoints"""

    token: str


class TokenClaims(BaseModel):
    """Claims read from the payload segment of an access token"""

    id: Optional[int] = None
    email: Optional[str] = None
    role: Optional[str] = None
    exp: Optional[int] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class BaseRequest(BaseModel):
    """Base request model with request context information"""

    request_id: Optional[str] = Field(None, description="Unique request identifier")
    access_token: Optional[str] = Field(None, description="Bearer token forwarded by the caller")
    timestamp: Optional[datetime] = Field(None, description="Request timestamp")

    @model_validator(mode="before")
    @classmethod
    def extract_context_data(cls, data: Dict) -> Dict:
        """Extract context data from the raw event if available"""
        if isinstance(data, dict) and "requestContext" in data:
            request_context = data.get("requestContext") or {}
            headers = data.get("headers") or {}
            authorization = headers.get("Authorization") or headers.get("authorization") or ""
            if authorization.lower().startswith("bearer "):
                data["access_token"] = authorization[7:].strip()
            data["request_id"] = request_context.get("requestId")
            data["timestamp"] = datetime.now()
        return data


class ListPlacesRequest(BaseRequest):
    """Request model for one page of the place listing"""

    search: str = Field("", description="Free-text search over name and description")
    sort_by: str = Field("distance_asc", description="Sort as <criterion>_<order>")
    photos_min: int = Field(0, ge=0, description="Minimum number of photos")
    date_range: DateRange = Field(DateRange.ALL, description="Creation date window")
    category: CategorySelector = Field("all", description="Category code or 'all'")
    min_rating: float = Field(0, ge=0, le=5, description="Minimum average rating")
    has_events: bool = Field(False, description="Only places hosting events")
    open_now: bool = Field(False, description="Only places open right now")
    lat_min: float = Field(-90, ge=-90, le=90)
    lat_max: float = Field(90, ge=-90, le=90)
    lng_min: float = Field(-180, ge=-180, le=180)
    lng_max: float = Field(180, ge=-180, le=180)
    page: int = Field(1, description="1-based page index")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Caller latitude")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Caller longitude")

    @field_validator("sort_by")
    @classmethod
    def check_sort_by(cls, value: str) -> str:
        return str(SortSpec.parse(value))

    def to_filter_state(self) -> FilterState:
        return FilterState(
            search_term=self.search,
            sort=self.sort_by,
            photos_min=self.photos_min,
            date_range=self.date_range,
            category=self.category,
            min_rating=self.min_rating,
            has_events=self.has_events,
            open_now=self.open_now,
            bounding_box=BoundingBox(
                lat=Range(min=self.lat_min, max=self.lat_max),
                lng=Range(min=self.lng_min, max=self.lng_max),
            ),
        )

    def user_location(self) -> Optional[Coordinates]:
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)


class ListPlacesResponse(BackendModel):
    """Response model for one page of the place listing"""

    result: PlacePage
    is_authenticated: bool = Field(False, description="Whether the request carried a token")


class ListEventsRequest(BaseRequest):
    """Request model for the event listing"""

    search: str = ""
    order: SortOrder = SortOrder.ASC
    category: CategorySelector = "all"
    date_range: EventDateRange = EventDateRange.ALL

    def to_filter_state(self) -> EventFilterState:
        return EventFilterState(
            order=self.order, category=self.category, date_range=self.date_range
        )


class ListEventsResponse(BackendModel):
    events: List[PlaceEvent]
    total_count: int
    is_authenticated: bool = False
