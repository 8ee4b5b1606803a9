import os

# Must be set before payment_service modules build their engine and settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"

from datetime import datetime

import httpx
import pytest
from fastapi.testclient import TestClient

from payment_service.domain.models import Base
from payment_service.infrastructure.db import engine, SessionLocal, seed_statuses
from payment_service.infrastructure.reservation_client import ReservationClient
from payment_service.infrastructure.payment_gateway import PaymentGateway
from payment_service.api.dependencies import get_reservation_client, get_payment_gateway
from payment_service.main import app as fastapi_app

RESERVATIONS_URL = "http://reservations.test"


def reservation_payload(reservation_id: int, price: float = 150.5, quantity: int = 2) -> dict:
    return {
        "reservationId": reservation_id,
        "user": {"userId": 7, "firstName": "Ana", "lastName": "Quispe", "email": "ana@example.com"},
        "ticket": {
            "ticketId": 3,
            "description": "VIP access",
            "price": price,
            "event": {"eventId": 11, "title": "Lima Jazz Night", "description": "Live jazz"},
        },
        "quantity": quantity,
        "reservationDate": "2026-05-01T18:00:00",
    }


class ReservationServiceStub:
    """In-process stand-in for the reservation service, served via httpx.MockTransport."""

    def __init__(self):
        self.reservations = {}
        self.available = True
        self.requests = []

    def add(self, reservation_id: int, **kwargs) -> dict:
        payload = reservation_payload(reservation_id, **kwargs)
        self.reservations[reservation_id] = payload
        return payload

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.available:
            raise httpx.ConnectError("reservation service unreachable", request=request)
        reservation_id = int(request.url.path.rsplit("/", 1)[-1])
        if reservation_id not in self.reservations:
            return httpx.Response(404, json={"message": "Reservation not found"})
        payload = self.reservations[reservation_id]
        if isinstance(payload, str):
            return httpx.Response(200, text=payload)
        return httpx.Response(200, json=payload)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_statuses(db)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def reservation_service():
    stub = ReservationServiceStub()
    stub.add(1)
    return stub


@pytest.fixture
def reservation_client(reservation_service):
    client = ReservationClient(RESERVATIONS_URL, transport=httpx.MockTransport(reservation_service.handler))
    yield client
    client.close()


@pytest.fixture
def gateway():
    return PaymentGateway(
        api_key="sk_test_dummy",
        success_url="http://localhost/success",
        cancel_url="http://localhost/cancel",
    )


@pytest.fixture
def client(reservation_client, gateway):
    fastapi_app.dependency_overrides[get_reservation_client] = lambda: reservation_client
    fastapi_app.dependency_overrides[get_payment_gateway] = lambda: gateway
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def payment_payload():
    return {
        "reservationId": 1,
        "amount": 301.0,
        "paymentMethod": "CARD",
        "statusId": 1,
        "paymentDate": datetime(2026, 5, 2, 10, 30).isoformat(),
    }
