"""
Stripe Checkout wrapper.

A "preference" is a hosted checkout session built from line items. The
gateway converts ``PreferenceItem`` rows into Stripe ``price_data`` entries
and returns the created session unchanged.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

import stripe

from payment_service.application.schemas import PreferenceItem
from shared.core import get_logger

logger = get_logger(__name__)


class GatewayAPIError(Exception):
    """Stripe received the request and rejected it."""

    def __init__(self, message: str, http_status: Optional[int] = None, code: Optional[str] = None):
        self.http_status = http_status
        self.code = code
        super().__init__(message)


class GatewayClientError(Exception):
    """The request never got a Stripe answer (connection or configuration problem)."""


def to_minor_units(amount: Decimal) -> int:
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentGateway:
    def __init__(self, api_key: str, success_url: str, cancel_url: str):
        self.api_key = api_key
        self.success_url = success_url
        self.cancel_url = cancel_url

    def _line_items(self, items: Iterable[PreferenceItem]) -> List[dict]:
        line_items = []
        for item in items:
            product_data = {"name": item.title or item.id, "metadata": {"item_id": item.id}}
            if item.description:
                product_data["description"] = item.description
            line_items.append({
                "price_data": {
                    "currency": item.currency_id.lower(),
                    "unit_amount": to_minor_units(item.unit_price),
                    "product_data": product_data,
                },
                "quantity": item.quantity,
            })
        return line_items

    def create_preference(self, items: List[PreferenceItem]):
        if not items:
            raise GatewayClientError("A preference needs at least one item")
        if not self.api_key:
            raise GatewayClientError("STRIPE_SECRET_KEY is not configured")

        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                line_items=self._line_items(items),
                success_url=self.success_url,
                cancel_url=self.cancel_url,
                client_reference_id=items[0].id,
            )
        except stripe.APIConnectionError as e:
            raise GatewayClientError(f"Could not reach Stripe: {e}") from e
        except stripe.StripeError as e:
            raise GatewayAPIError(
                str(e),
                http_status=getattr(e, "http_status", None),
                code=getattr(e, "code", None),
            ) from e

        logger.info(f"Checkout preference created: {session.id}")
        return session
