"""
Data access for payments and payment statuses.

Repositories only read and write rows; validation and orchestration stay in
``PaymentService``. Every mutating call commits its own transaction.
"""

from typing import List, Optional

from sqlalchemy import delete, exists, select
from sqlalchemy.orm import Session

from payment_service.domain.models import Payment, Status


class PaymentRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Payment]:
        return list(self.db.scalars(select(Payment).order_by(Payment.payment_id)).unique().all())

    def find_by_id(self, payment_id: int) -> Optional[Payment]:
        return self.db.get(Payment, payment_id)

    def exists_by_id(self, payment_id: int) -> bool:
        return bool(self.db.scalar(select(exists().where(Payment.payment_id == payment_id))))

    def save(self, payment: Payment) -> Payment:
        """Insert a new payment or flush changes of a loaded one."""
        self.db.add(payment)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(payment)
        return payment

    def delete_by_id(self, payment_id: int) -> None:
        try:
            self.db.execute(delete(Payment).where(Payment.payment_id == payment_id))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


class StatusRepository:
    """Read-only view over the payment_statuses lookup table."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, status_id: int) -> Optional[Status]:
        return self.db.get(Status, status_id)

    def find_all(self) -> List[Status]:
        return list(self.db.scalars(select(Status).order_by(Status.status_id)).all())
