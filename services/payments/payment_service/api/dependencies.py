from fastapi import Depends, Request
from sqlalchemy.orm import Session
from payment_service.core_settings import get_settings
from payment_service.infrastructure.db import get_db
from payment_service.infrastructure.reservation_client import ReservationClient
from payment_service.infrastructure.payment_gateway import PaymentGateway
from payment_service.application.service import PaymentService

# Both clients are built once in the application lifespan and kept on app.state

def get_reservation_client(request: Request) -> ReservationClient:
    return request.app.state.reservation_client

def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway

def get_payment_service(
    db: Session = Depends(get_db),
    reservations: ReservationClient = Depends(get_reservation_client),
    gateway: PaymentGateway = Depends(get_payment_gateway),
) -> PaymentService:
    return PaymentService(db, reservations, gateway, currency=get_settings().CHECKOUT_CURRENCY)
