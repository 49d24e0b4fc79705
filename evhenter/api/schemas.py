"""Request bodies for the write endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..utils.timezone import ensure_oslo_timezone

class EventSubmission(BaseModel):
    """An event submitted by a user. Stored as pending until moderated."""
    title: str = Field(..., min_length=1, max_length=300)
    description: Optional[str] = None
    event_type: Optional[str] = Field(None, description="Event type slug")
    city: Optional[str] = Field(None, max_length=100)
    venue_name: Optional[str] = Field(None, max_length=200)
    venue_address: Optional[str] = Field(None, max_length=300)
    start_date: datetime
    end_date: Optional[datetime] = None
    original_url: Optional[str] = None
    ticket_url: Optional[str] = None
    image_url: Optional[str] = None
    organizer_name: Optional[str] = Field(None, max_length=200)
    organizer_url: Optional[str] = None
    price_min: Optional[float] = Field(None, ge=0)
    price_max: Optional[float] = Field(None, ge=0)
    is_free: bool = False
    capacity: Optional[int] = Field(None, ge=0)

    @field_validator('title')
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('title must not be blank')
        return v

    @field_validator('start_date', 'end_date')
    @classmethod
    def to_oslo_time(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_oslo_timezone(v)

    @model_validator(mode='after')
    def check_ranges(self):
        """end_date after start_date, price_max not below price_min."""
        if self.end_date and self.end_date < self.start_date:
            raise ValueError('end_date must be after start_date')
        if self.price_min is not None and self.price_max is not None and self.price_max < self.price_min:
            raise ValueError('price_max must be greater than or equal to price_min')
        return self

class ParseUrlRequest(BaseModel):
    url: Optional[str] = None
    text: Optional[str] = Field(None, max_length=50000)

class ImageRequest(BaseModel):
    title: str = Field(..., min_length=1)
    eventType: str = Field(..., min_length=1)
    city: Optional[str] = None
    description: Optional[str] = None
