"""Typed mutation commands sent to the tourism backend.

Each command names exactly the fields a mutation may carry. Unset optional
fields are left out of the request, so an update only touches what changed.
"""

from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .place import Place, PlaceCategory

# (filename, content, content type) as accepted by requests' ``files=``
Upload = Tuple[str, bytes, str]


class Command(BaseModel):
    """Base class for backend mutations"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    upload_fields: ClassVar[Tuple[str, ...]] = ()

    def to_form_fields(self) -> Dict[str, str]:
        """Text fields of the request body, camelCase keys, unset fields dropped."""
        data = self.model_dump(
            by_alias=True, exclude_none=True, exclude=set(self.upload_fields)
        )
        return {key: _form_value(value) for key, value in data.items()}

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude=set(self.upload_fields),
        )

    def to_files(self) -> Dict[str, Upload]:
        files = {}
        for name in self.upload_fields:
            upload = getattr(self, name)
            if upload is not None:
                files[to_camel(name)] = upload
        return files

    def is_empty(self) -> bool:
        return not self.to_form_fields() and not self.to_files()


def _form_value(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, PlaceCategory):
        return value.value
    return str(value)


class CreatePlaceCommand(Command):
    upload_fields: ClassVar[Tuple[str, ...]] = ("cover_image",)

    name: str
    description: str
    category: PlaceCategory
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    expected_peak_time: str
    visit_time_range: Optional[str] = None
    admin_id: Optional[int] = None
    cover_image: Optional[Upload] = None


class UpdatePlaceCommand(Command):
    upload_fields: ClassVar[Tuple[str, ...]] = ("cover_image",)

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[PlaceCategory] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    expected_peak_time: Optional[str] = None
    visit_time_range: Optional[str] = None
    admin_id: Optional[int] = None
    cover_image: Optional[Upload] = None

    @classmethod
    def from_changes(cls, original: Place, **edits: Any) -> "UpdatePlaceCommand":
        """Build an update holding only the edits that differ from ``original``.

        A new cover image is always kept since the stored one is only a URL.
        """
        changed = {}
        for name, value in edits.items():
            if name == "cover_image":
                if value is not None:
                    changed[name] = value
            elif name not in cls.model_fields:
                raise ValueError(f"Unknown place field: {name}")
            elif value is not None and getattr(original, name, None) != value:
                changed[name] = value
        return cls(**changed)


class AddPhotosCommand(BaseModel):
    photos: List[Upload] = Field(..., min_length=1)

    def to_files(self) -> List[Tuple[str, Upload]]:
        return [("photos", upload) for upload in self.photos]


class CreateEventCommand(Command):
    upload_fields: ClassVar[Tuple[str, ...]] = ("image",)

    name: str
    description: str
    start_date: datetime
    end_date: datetime
    tourism_place_id: int
    image: Optional[Upload] = None

    @model_validator(mode="after")
    def check_dates(self) -> "CreateEventCommand":
        if self.end_date < self.start_date:
            raise ValueError("Event end date must not be before its start date")
        return self


class UpdateEventCommand(Command):
    upload_fields: ClassVar[Tuple[str, ...]] = ("image",)

    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    tourism_place_id: Optional[int] = None
    image: Optional[Upload] = None

    @model_validator(mode="after")
    def check_dates(self) -> "UpdateEventCommand":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("Event end date must not be before its start date")
        return self


class CreateReviewCommand(Command):
    content: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    tourism_place_id: int

    @model_validator(mode="before")
    @classmethod
    def strip_content(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("content"), str):
            data = {**data, "content": data["content"].strip()}
        return data


class UpdateReviewCommand(Command):
    content: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
