from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional

# Local date-time without fraction or offset, e.g. 2026-05-01T20:00:00
DATE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

class EventRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    start_date: datetime
    end_date: datetime
    location: Optional[str] = Field(default=None, max_length=255)
    organizer_id: Optional[int] = None
    category_id: Optional[int] = None
    url: Optional[str] = Field(default=None, max_length=500)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_date_time(cls, value):
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            raise ValueError("must be a date-time string")
        try:
            return datetime.strptime(value, DATE_TIME_FORMAT)
        except ValueError:
            raise ValueError("must match the pattern yyyy-MM-dd'T'HH:mm:ss") from None

    @field_serializer("start_date", "end_date", when_used="json")
    def format_date_time(self, value: datetime) -> str:
        return value.strftime(DATE_TIME_FORMAT)

    @model_validator(mode="after")
    def check_date_range(self):
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self

class EventResponse(EventRequest):
    event_id: int
