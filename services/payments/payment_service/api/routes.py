from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from payment_service.infrastructure.db import get_db
from payment_service.infrastructure.repositories import StatusRepository
from payment_service.application.service import PaymentService
from payment_service.application.schemas import (
    PaymentRequest,
    PaymentResponse,
    PreferenceResponse,
    StatusResponse,
)
from .dependencies import get_payment_service

router = APIRouter(prefix="/api/v1/payments", tags=["payments"])
status_router = APIRouter(prefix="/api/v1/statuses", tags=["statuses"])

@router.post("/", response_model=PaymentResponse, status_code=201)
def add_payment(payload: PaymentRequest, service: PaymentService = Depends(get_payment_service)):
    return service.add_payment(payload)

@router.post("/process", response_model=PreferenceResponse)
def process_payment(payload: PaymentRequest, service: PaymentService = Depends(get_payment_service)):
    """Create a hosted checkout preference for the reservation."""
    return service.process_payment(payload)

@router.get("/", response_model=list[PaymentResponse])
def get_all_payments(service: PaymentService = Depends(get_payment_service)):
    return service.get_all_payments()

@router.get("/{payment_id}", response_model=PaymentResponse)
def get_payment(payment_id: int, service: PaymentService = Depends(get_payment_service)):
    return service.get_payment_by_id(payment_id)

@router.put("/{payment_id}", response_model=PaymentResponse)
def update_payment(payment_id: int, payload: PaymentRequest, service: PaymentService = Depends(get_payment_service)):
    return service.update_payment(payment_id, payload)

@router.delete("/{payment_id}", status_code=204)
def delete_payment(payment_id: int, service: PaymentService = Depends(get_payment_service)):
    service.delete_payment(payment_id)
    return None

@status_router.get("/", response_model=list[StatusResponse])
def list_statuses(db: Session = Depends(get_db)):
    return StatusRepository(db).find_all()

@status_router.get("/{status_id}", response_model=StatusResponse)
def get_status(status_id: int, db: Session = Depends(get_db)):
    status = StatusRepository(db).find_by_id(status_id)
    if not status:
        raise HTTPException(status_code=404, detail="Status not found")
    return status
