import os

# Must be set before events_service modules build their engine and settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS"] = "false"

import pytest
from fastapi.testclient import TestClient

from events_service.domain.models import Base
from events_service.infrastructure.db import engine, SessionLocal
from events_service.main import app as fastapi_app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    with TestClient(fastapi_app) as c:
        yield c


@pytest.fixture
def event_payload():
    return {
        "title": "Lima Jazz Night",
        "description": "Live jazz at the park",
        "startDate": "2026-05-01T20:00:00",
        "endDate": "2026-05-01T23:30:00",
        "location": "Parque Kennedy, Miraflores",
        "organizerId": 4,
        "categoryId": 2,
        "url": "https://eventra.example/events/lima-jazz-night",
    }
