from sqlalchemy import select
from sqlalchemy.orm import Session
from events_service.domain.models import Event
from events_service.domain.errors import EventNotFound
from shared.core import get_logger
from .schemas import EventRequest, EventResponse

logger = get_logger(__name__)

class EventService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, event_id: int) -> Event:
        event = self.db.get(Event, event_id)
        if event is None:
            raise EventNotFound(event_id)
        return event

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def add_event(self, data: EventRequest) -> EventResponse:
        event = Event(**data.model_dump())
        self.db.add(event)
        self._commit()
        self.db.refresh(event)
        logger.info(f"Event added: {event!r}")
        return EventResponse.model_validate(event)

    def get_all_events(self) -> list[EventResponse]:
        events = self.db.scalars(select(Event).order_by(Event.start_date, Event.event_id)).all()
        return [EventResponse.model_validate(e) for e in events]

    def get_event_by_id(self, event_id: int) -> EventResponse:
        return EventResponse.model_validate(self._get(event_id))

    def update_event(self, event_id: int, data: EventRequest) -> EventResponse:
        event = self._get(event_id)
        for field, value in data.model_dump().items():
            setattr(event, field, value)
        self._commit()
        self.db.refresh(event)
        logger.info(f"Updated Event: {event!r}")
        return EventResponse.model_validate(event)

    def delete_event(self, event_id: int) -> None:
        event = self._get(event_id)
        self.db.delete(event)
        self._commit()
        logger.info(f"Deleted Event with id: {event_id}")
