import httpx
from typing import Optional
from pydantic import ValidationError
from payment_service.application.schemas import ReservationResponse

class ReservationClient:
    """
    HTTP stub for the reservation service.

    One instance (and its connection pool) is built at startup and shared by
    all requests. ``get_reservation_by_id`` raises ``httpx.HTTPStatusError``
    for any non-2xx answer, 404 included, and ``httpx.RequestError`` when the
    service cannot be reached. A body that is not a reservation document
    raises ``httpx.DecodingError``.
    """

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def get_reservation_by_id(self, reservation_id: int) -> ReservationResponse:
        response = self._client.get(f"/api/v1/reservations/{reservation_id}")
        response.raise_for_status()
        try:
            return ReservationResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise httpx.DecodingError(
                f"Unreadable reservation payload for id {reservation_id}: {e}",
                request=response.request,
            ) from e

    def close(self) -> None:
        self._client.close()
