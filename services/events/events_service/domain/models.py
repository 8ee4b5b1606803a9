from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Text, DateTime
from datetime import datetime
from typing import Optional

class Base(DeclarativeBase):
    pass

class Event(Base):
    __tablename__ = "events"
    event_id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime)
    end_date: Mapped[datetime] = mapped_column(DateTime)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Organizers and categories are owned by other services (no FK - microservices pattern)
    organizer_id: Mapped[Optional[int]] = mapped_column(nullable=True, index=True)
    category_id: Mapped[Optional[int]] = mapped_column(nullable=True, index=True)
    url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"Event(event_id={self.event_id!r}, title={self.title!r}, start_date={self.start_date!r})"
