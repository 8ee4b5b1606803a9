from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import String, Numeric, ForeignKey, DateTime
from datetime import datetime

# Rows inserted into payment_statuses by the initial migration and by init_models
DEFAULT_STATUSES = (
    (1, "PENDING"),
    (2, "COMPLETED"),
    (3, "FAILED"),
    (4, "REFUNDED"),
)

class Base(DeclarativeBase):
    pass

class Status(Base):
    __tablename__ = "payment_statuses"
    status_id: Mapped[int] = mapped_column(primary_key=True)
    description: Mapped[str] = mapped_column(String(50))

    def __repr__(self) -> str:
        return f"Status(status_id={self.status_id!r}, description={self.description!r})"

class Payment(Base):
    __tablename__ = "payments"
    payment_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # Reservation lives in the reservation service (no FK - microservices pattern)
    reservation_id: Mapped[int] = mapped_column(index=True)
    amount: Mapped[float] = mapped_column(Numeric(10, 2))
    payment_method: Mapped[str] = mapped_column(String(50))
    status_id: Mapped[int] = mapped_column(ForeignKey("payment_statuses.status_id"))
    payment_date: Mapped[datetime] = mapped_column(DateTime)
    status: Mapped[Status] = relationship("Status", lazy="joined")

    def __repr__(self) -> str:
        return (
            f"Payment(payment_id={self.payment_id!r}, reservation_id={self.reservation_id!r}, "
            f"amount={self.amount!r}, payment_method={self.payment_method!r}, "
            f"status_id={self.status_id!r}, payment_date={self.payment_date!r})"
        )
