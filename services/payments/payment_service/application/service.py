from decimal import Decimal
from typing import List

import httpx
from sqlalchemy.orm import Session

from shared.core import get_logger
from payment_service.domain.models import Payment, Status
from payment_service.domain.errors import (
    GatewayError,
    IncompleteReservation,
    PaymentNotFound,
    ReservationNotFound,
    StatusNotFound,
)
from payment_service.infrastructure.repositories import PaymentRepository, StatusRepository
from payment_service.infrastructure.reservation_client import ReservationClient
from payment_service.infrastructure.payment_gateway import (
    GatewayAPIError,
    GatewayClientError,
    PaymentGateway,
)
from .schemas import (
    PaymentRequest,
    PaymentResponse,
    PreferenceItem,
    ReservationResponse,
    StatusResponse,
)

logger = get_logger(__name__)

DEFAULT_CURRENCY = "PEN"


class PaymentService:
    """
    Payment use cases.

    Preconditions (reservation and status existence) are checked before any
    write. Reservation data is never stored locally: every response mapping
    fetches a fresh copy from the reservation service.
    """

    def __init__(
        self,
        db: Session,
        reservations: ReservationClient,
        gateway: PaymentGateway,
        currency: str = DEFAULT_CURRENCY,
    ):
        self.payments = PaymentRepository(db)
        self.statuses = StatusRepository(db)
        self.reservations = reservations
        self.gateway = gateway
        self.currency = currency

    def _fetch_reservation(self, reservation_id: int) -> ReservationResponse:
        try:
            return self.reservations.get_reservation_by_id(reservation_id)
        except httpx.HTTPError as e:
            raise ReservationNotFound(reservation_id) from e

    def _require_status(self, status_id: int) -> Status:
        status = self.statuses.find_by_id(status_id)
        if status is None:
            raise StatusNotFound(status_id)
        return status

    def _require_payment(self, payment_id: int) -> Payment:
        payment = self.payments.find_by_id(payment_id)
        if payment is None:
            raise PaymentNotFound(payment_id)
        return payment

    def add_payment(self, data: PaymentRequest) -> PaymentResponse:
        self._fetch_reservation(data.reservation_id)
        status = self._require_status(data.status_id)

        payment = Payment(
            reservation_id=data.reservation_id,
            amount=data.amount,
            payment_method=data.payment_method,
            status=status,
            payment_date=data.payment_date,
        )
        saved = self.payments.save(payment)
        logger.info(f"Payment added: {saved!r}")
        return self._to_response(saved, reservation=None)

    def process_payment(self, data: PaymentRequest):
        """Create a hosted checkout preference for the reservation. Nothing is persisted."""
        reservation = self._fetch_reservation(data.reservation_id)
        item = self.build_preference_item(reservation)
        try:
            return self.gateway.create_preference([item])
        except (GatewayAPIError, GatewayClientError) as e:
            raise GatewayError(f"Payment gateway failure: {e}", cause=e) from e

    def build_preference_item(self, reservation: ReservationResponse) -> PreferenceItem:
        ticket = reservation.ticket
        if ticket is None:
            raise IncompleteReservation(reservation.reservation_id, "ticket")
        if ticket.price is None:
            raise IncompleteReservation(reservation.reservation_id, "ticket price")
        if not reservation.quantity:
            raise IncompleteReservation(reservation.reservation_id, "quantity")
        return PreferenceItem(
            id=str(reservation.reservation_id),
            title=ticket.event.title if ticket.event else None,
            description=ticket.description,
            quantity=reservation.quantity,
            currency_id=self.currency,
            unit_price=Decimal(str(ticket.price)),
        )

    def get_all_payments(self) -> List[PaymentResponse]:
        return [self._to_response_degraded(p) for p in self.payments.find_all()]

    def get_payment_by_id(self, payment_id: int) -> PaymentResponse:
        return self._to_response_degraded(self._require_payment(payment_id))

    def update_payment(self, payment_id: int, data: PaymentRequest) -> PaymentResponse:
        payment = self._require_payment(payment_id)
        self._fetch_reservation(data.reservation_id)
        status = self._require_status(data.status_id)

        payment.reservation_id = data.reservation_id
        payment.amount = data.amount
        payment.payment_method = data.payment_method
        payment.status = status
        payment.payment_date = data.payment_date

        updated = self.payments.save(payment)
        logger.info(f"Updated Payment: {updated!r}")
        # Not degraded: a reservation failure here surfaces after the commit
        return self._to_response(updated, reservation=self._fetch_reservation(updated.reservation_id))

    def delete_payment(self, payment_id: int) -> None:
        if not self.payments.exists_by_id(payment_id):
            raise PaymentNotFound(payment_id)
        self.payments.delete_by_id(payment_id)
        logger.info(f"Deleted Payment with id: {payment_id}")

    def _to_response_degraded(self, payment: Payment) -> PaymentResponse:
        try:
            reservation = self.reservations.get_reservation_by_id(payment.reservation_id)
        except httpx.HTTPError:
            logger.error("Reservation service is unavailable, unable to fetch details", exc_info=True)
            reservation = ReservationResponse()
        return self._to_response(payment, reservation)

    @staticmethod
    def _to_response(payment: Payment, reservation) -> PaymentResponse:
        return PaymentResponse(
            payment_id=payment.payment_id,
            reservation=reservation,
            amount=float(payment.amount),
            payment_method=payment.payment_method,
            status=StatusResponse(
                status_id=payment.status.status_id,
                description=payment.status.description,
            ),
            payment_date=payment.payment_date,
        )
