"""Filter state models for the place and event listings."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, BeforeValidator, Field, model_validator

from .place import PlaceCategory


class SortCriterion(str, Enum):
    """Criteria the place listing can be sorted by"""

    DISTANCE = "distance"
    RATING = "rating"
    AGE = "age"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortSpec(BaseModel):
    """Sort criterion plus direction.

    The UI exchanges sort specs as ``"<criterion>_<order>"`` strings, e.g.
    ``"distance_asc"``. For distance, ascending means nearest first.
    """

    criterion: SortCriterion = SortCriterion.DISTANCE
    order: SortOrder = SortOrder.ASC

    @classmethod
    def parse(cls, value: str) -> "SortSpec":
        """Parse a ``"<criterion>_<order>"`` string.

        Raises:
            ValueError: If either part is not a known criterion or order.
        """
        criterion, sep, order = value.strip().lower().rpartition("_")
        if not sep:
            raise ValueError(f"Invalid sort specification: {value!r}")
        return cls(criterion=SortCriterion(criterion), order=SortOrder(order))

    def __str__(self) -> str:
        return f"{self.criterion.value}_{self.order.value}"


class DateRange(str, Enum):
    """Relative creation-date windows"""

    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class Range(BaseModel):
    min: float
    max: float

    @model_validator(mode="after")
    def check_bounds(self) -> "Range":
        if self.min > self.max:
            raise ValueError(f"Range minimum {self.min} exceeds maximum {self.max}")
        return self

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


class BoundingBox(BaseModel):
    """Latitude/longitude box; the default spans the whole globe"""

    lat: Range = Field(default_factory=lambda: Range(min=-90, max=90))
    lng: Range = Field(default_factory=lambda: Range(min=-180, max=180))

    def contains(self, latitude: float, longitude: float) -> bool:
        return self.lat.contains(latitude) and self.lng.contains(longitude)


def parse_category_selector(value):
    """Accept "all" or any category code, case-insensitively."""
    if isinstance(value, str):
        if value.strip().lower() == "all":
            return "all"
        return PlaceCategory.parse(value)
    return value


CategorySelector = Annotated[
    Union[Literal["all"], PlaceCategory], BeforeValidator(parse_category_selector)
]


def parse_sort_spec(value):
    if isinstance(value, str):
        return SortSpec.parse(value)
    return value


class FilterState(BaseModel):
    """Ephemeral filter configuration of the place listing.

    Every field defaults to its inactive value, so ``FilterState()`` lets
    every place through.
    """

    search_term: str = ""
    sort: Annotated[SortSpec, BeforeValidator(parse_sort_spec)] = Field(default_factory=SortSpec)
    photos_min: int = Field(0, ge=0)
    date_range: DateRange = DateRange.ALL
    category: CategorySelector = "all"
    min_rating: float = Field(0, ge=0, le=5)
    has_events: bool = False
    open_now: bool = False
    bounding_box: BoundingBox = Field(default_factory=BoundingBox)

    def reset(self) -> "FilterState":
        """Return a fresh state with every filter back at its default."""
        return FilterState()


class EventDateRange(str, Enum):
    ALL = "all"
    UPCOMING = "upcoming"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"


class EventFilterState(BaseModel):
    """Filter configuration of the event listing"""

    order: SortOrder = SortOrder.ASC
    category: CategorySelector = "all"
    date_range: EventDateRange = EventDateRange.ALL
