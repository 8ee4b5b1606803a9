from datetime import datetime
from decimal import Decimal

import httpx
import pytest

from payment_service.application.schemas import PaymentRequest, ReservationResponse
from payment_service.application.service import PaymentService
from payment_service.domain.errors import (
    GatewayError,
    IncompleteReservation,
    PaymentNotFound,
    ReservationNotFound,
    StatusNotFound,
)
from payment_service.domain.models import Payment
from payment_service.infrastructure.payment_gateway import GatewayAPIError, GatewayClientError


def make_request(**overrides) -> PaymentRequest:
    data = dict(
        reservation_id=1,
        amount=301.0,
        payment_method="CARD",
        status_id=1,
        payment_date=datetime(2026, 5, 2, 10, 30),
    )
    data.update(overrides)
    return PaymentRequest(**data)


@pytest.fixture
def service(db, reservation_client, gateway):
    return PaymentService(db, reservation_client, gateway)


def count_payments(db) -> int:
    return db.query(Payment).count()


def test_add_payment_persists_one_record(service, db):
    response = service.add_payment(make_request())

    assert count_payments(db) == 1
    assert response.payment_id is not None
    assert response.status.status_id == 1
    assert response.status.description == "PENDING"
    assert response.amount == 301.0
    assert response.payment_method == "CARD"
    assert response.reservation is None


def test_add_payment_unknown_reservation_does_not_write(service, db):
    with pytest.raises(ReservationNotFound) as exc_info:
        service.add_payment(make_request(reservation_id=99))

    assert exc_info.value.reservation_id == 99
    assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)
    assert count_payments(db) == 0


def test_add_payment_reservation_service_down(service, db, reservation_service):
    reservation_service.available = False

    with pytest.raises(ReservationNotFound) as exc_info:
        service.add_payment(make_request())

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert count_payments(db) == 0


def test_add_payment_unreadable_reservation_does_not_write(service, db, reservation_service):
    reservation_service.reservations[1] = "<html>upstream error</html>"

    with pytest.raises(ReservationNotFound) as exc_info:
        service.add_payment(make_request())

    assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
    assert count_payments(db) == 0


def test_add_payment_unknown_status_does_not_write(service, db):
    with pytest.raises(StatusNotFound) as exc_info:
        service.add_payment(make_request(status_id=42))

    assert exc_info.value.status_id == 42
    assert count_payments(db) == 0


def test_get_payment_by_id_includes_reservation(service):
    created = service.add_payment(make_request())

    fetched = service.get_payment_by_id(created.payment_id)

    assert fetched.payment_id == created.payment_id
    assert fetched.reservation.reservation_id == 1
    assert fetched.reservation.ticket.event.title == "Lima Jazz Night"


def test_get_payment_by_id_missing(service):
    with pytest.raises(PaymentNotFound):
        service.get_payment_by_id(12345)


def test_get_all_payments_degrades_when_reservations_unreachable(service, reservation_service, caplog):
    service.add_payment(make_request())
    service.add_payment(make_request(amount=10.0, status_id=2))
    reservation_service.available = False

    payments = service.get_all_payments()

    assert len(payments) == 2
    for payment in payments:
        assert payment.reservation is not None
        assert payment.reservation.reservation_id is None
        assert payment.reservation.ticket is None
        assert payment.reservation.quantity is None
    assert "unable to fetch details" in caplog.text


def test_get_payment_by_id_degrades_on_missing_reservation(service, reservation_service):
    created = service.add_payment(make_request())
    reservation_service.reservations.clear()

    fetched = service.get_payment_by_id(created.payment_id)

    assert fetched.reservation.reservation_id is None
    assert fetched.status.description == "PENDING"


def test_get_all_payments_degrades_on_unreadable_reservation(service, reservation_service):
    service.add_payment(make_request())
    reservation_service.reservations[1] = "<html>upstream error</html>"

    payments = service.get_all_payments()

    assert len(payments) == 1
    assert payments[0].reservation.reservation_id is None
    assert payments[0].reservation.ticket is None
    assert payments[0].status.description == "PENDING"


def test_update_payment_overwrites_fields(service, reservation_service):
    created = service.add_payment(make_request())
    reservation_service.add(2)

    updated = service.update_payment(
        created.payment_id,
        make_request(reservation_id=2, amount=99.9, payment_method="YAPE", status_id=2,
                     payment_date=datetime(2026, 6, 1, 9, 0)),
    )

    assert updated.payment_id == created.payment_id
    assert updated.reservation.reservation_id == 2
    assert updated.amount == pytest.approx(99.9)
    assert updated.payment_method == "YAPE"
    assert updated.status.description == "COMPLETED"
    assert updated.payment_date == datetime(2026, 6, 1, 9, 0)


def test_update_missing_payment_leaves_store_unchanged(service, db):
    created = service.add_payment(make_request())

    with pytest.raises(PaymentNotFound):
        service.update_payment(created.payment_id + 1, make_request(amount=1.0))

    db.expire_all()
    stored = db.get(Payment, created.payment_id)
    assert float(stored.amount) == 301.0
    assert count_payments(db) == 1


def test_update_payment_unknown_reservation(service):
    created = service.add_payment(make_request())

    with pytest.raises(ReservationNotFound):
        service.update_payment(created.payment_id, make_request(reservation_id=77))


def test_update_payment_fails_when_reservation_lost_after_save(service, db, reservation_client, mocker):
    created = service.add_payment(make_request())
    mocker.patch.object(
        reservation_client,
        "get_reservation_by_id",
        side_effect=[ReservationResponse(reservation_id=1), httpx.ConnectError("reservation service down")],
    )

    with pytest.raises(ReservationNotFound):
        service.update_payment(
            created.payment_id,
            make_request(amount=55.5, payment_method="YAPE", status_id=2),
        )

    db.expire_all()
    stored = db.get(Payment, created.payment_id)
    assert float(stored.amount) == 55.5
    assert stored.payment_method == "YAPE"
    assert stored.status_id == 2


def test_update_payment_unknown_status(service):
    created = service.add_payment(make_request())

    with pytest.raises(StatusNotFound):
        service.update_payment(created.payment_id, make_request(status_id=9))


def test_delete_payment_then_read_fails(service, db):
    created = service.add_payment(make_request())

    service.delete_payment(created.payment_id)

    assert count_payments(db) == 0
    with pytest.raises(PaymentNotFound):
        service.get_payment_by_id(created.payment_id)


def test_delete_missing_payment(service, db):
    service.add_payment(make_request())

    with pytest.raises(PaymentNotFound):
        service.delete_payment(999)

    assert count_payments(db) == 1


def test_process_payment_builds_single_line_item(service, mocker):
    preference = object()
    create = mocker.patch.object(service.gateway, "create_preference", return_value=preference)

    result = service.process_payment(make_request())

    assert result is preference
    (items,), _ = create.call_args
    assert len(items) == 1
    item = items[0]
    assert item.id == "1"
    assert item.title == "Lima Jazz Night"
    assert item.description == "VIP access"
    assert item.quantity == 2
    assert item.unit_price == Decimal("150.5")
    assert item.currency_id == "PEN"


def test_process_payment_does_not_persist(service, db, mocker):
    mocker.patch.object(service.gateway, "create_preference", return_value=object())

    service.process_payment(make_request())

    assert count_payments(db) == 0


def test_process_payment_unknown_reservation(service, mocker):
    create = mocker.patch.object(service.gateway, "create_preference")

    with pytest.raises(ReservationNotFound):
        service.process_payment(make_request(reservation_id=5))

    create.assert_not_called()


@pytest.mark.parametrize("reservation, missing", [
    ({"reservationId": 1}, "ticket"),
    ({"reservationId": 1, "quantity": 2, "ticket": {"ticketId": 3, "description": "VIP access"}}, "ticket price"),
    ({"reservationId": 1, "ticket": {"ticketId": 3, "price": 150.5}}, "quantity"),
])
def test_process_payment_incomplete_reservation(service, reservation_service, mocker, reservation, missing):
    reservation_service.reservations[1] = reservation
    create = mocker.patch.object(service.gateway, "create_preference")

    with pytest.raises(IncompleteReservation) as exc_info:
        service.process_payment(make_request())

    assert isinstance(exc_info.value, ReservationNotFound)
    assert exc_info.value.missing == missing
    create.assert_not_called()


@pytest.mark.parametrize("failure", [
    GatewayAPIError("card_declined", http_status=402, code="card_declined"),
    GatewayClientError("connection refused"),
])
def test_process_payment_gateway_failures_collapse(service, mocker, failure):
    mocker.patch.object(service.gateway, "create_preference", side_effect=failure)

    with pytest.raises(GatewayError) as exc_info:
        service.process_payment(make_request())

    assert exc_info.value.cause is failure
    assert exc_info.value.__cause__ is failure
