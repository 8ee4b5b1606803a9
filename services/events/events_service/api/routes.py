from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from events_service.infrastructure.db import get_db
from events_service.application.service import EventService
from events_service.application.schemas import EventRequest, EventResponse

router = APIRouter(prefix="/api/v1/events", tags=["events"])

@router.post("/", response_model=EventResponse, status_code=201)
def create_event(payload: EventRequest, db: Session = Depends(get_db)):
    return EventService(db).add_event(payload)

@router.get("/", response_model=list[EventResponse])
def list_events(db: Session = Depends(get_db)):
    """List all events ordered by start date."""
    return EventService(db).get_all_events()

@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: int, db: Session = Depends(get_db)):
    return EventService(db).get_event_by_id(event_id)

@router.put("/{event_id}", response_model=EventResponse)
def update_event(event_id: int, payload: EventRequest, db: Session = Depends(get_db)):
    return EventService(db).update_event(event_id, payload)

@router.delete("/{event_id}", status_code=204)
def delete_event(event_id: int, db: Session = Depends(get_db)):
    EventService(db).delete_event(event_id)
    return None
