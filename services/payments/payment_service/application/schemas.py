from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from decimal import Decimal
from typing import Optional

class CamelModel(BaseModel):
    """Payloads use camelCase on the wire, like the other Eventra services."""
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class PaymentRequest(CamelModel):
    reservation_id: int
    amount: float = Field(ge=0)
    payment_method: str = Field(min_length=1, max_length=50)
    status_id: int
    payment_date: datetime

class StatusResponse(CamelModel):
    status_id: int
    description: str

# Read-only views of the reservation service payloads

class EventView(CamelModel):
    event_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None

class TicketView(CamelModel):
    ticket_id: Optional[int] = None
    description: Optional[str] = None
    price: Optional[float] = None
    event: Optional[EventView] = None

class UserView(CamelModel):
    user_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

class ReservationResponse(CamelModel):
    reservation_id: Optional[int] = None
    user: Optional[UserView] = None
    ticket: Optional[TicketView] = None
    quantity: Optional[int] = None
    reservation_date: Optional[datetime] = None

class PaymentResponse(CamelModel):
    payment_id: int
    # None when not fetched; every field None when the reservation service was unavailable
    reservation: Optional[ReservationResponse] = None
    amount: float
    payment_method: str
    status: StatusResponse
    payment_date: datetime

class PreferenceItem(CamelModel):
    """One line of a checkout preference."""
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    quantity: int
    currency_id: str
    unit_price: Decimal

class PreferenceResponse(CamelModel):
    """The checkout session fields exposed to API clients."""
    id: str
    url: Optional[str] = None
    status: Optional[str] = None
    payment_status: Optional[str] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    expires_at: Optional[int] = None
