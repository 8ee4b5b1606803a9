"""Domain exceptions raised by the payment service.

Each exception keeps the identifier that could not be resolved so the API
layer can build its error body without parsing messages.
"""

from typing import Optional


class PaymentServiceError(Exception):
    """Base class for every failure the payment service reports to callers."""


class ReservationNotFound(PaymentServiceError):
    """The reservation service could not return the referenced reservation."""

    def __init__(self, reservation_id: int, message: Optional[str] = None):
        self.reservation_id = reservation_id
        super().__init__(message or f"Reservation not found with id: {reservation_id}")


class IncompleteReservation(ReservationNotFound):
    """The reservation came back without the ticket data a checkout line needs."""

    def __init__(self, reservation_id: int, missing: str):
        self.missing = missing
        super().__init__(reservation_id, f"Reservation {reservation_id} has no {missing}")


class StatusNotFound(PaymentServiceError):
    def __init__(self, status_id: int):
        self.status_id = status_id
        super().__init__(f"Status not found with id: {status_id}")


class PaymentNotFound(PaymentServiceError):
    def __init__(self, payment_id: int):
        self.payment_id = payment_id
        super().__init__(f"Payment not found with id: {payment_id}")


class GatewayError(PaymentServiceError):
    """
    The payment gateway refused or could not be reached.

    API-level and client-level gateway failures both surface as this single
    kind; the original exception stays available as ``cause`` (and as
    ``__cause__`` through exception chaining).
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


__all__ = [
    "PaymentServiceError",
    "ReservationNotFound",
    "IncompleteReservation",
    "StatusNotFound",
    "PaymentNotFound",
    "GatewayError",
]
