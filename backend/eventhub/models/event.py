"""
Event model with attendee membership.

Key design decisions:
- Attendees live in the ``event_attendees`` association table; the
  (event_id, user_id) primary key stops a user joining twice
- ``max_attendees`` is optional; NULL means unlimited
- Index on ``date`` for the upcoming-events listing
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Index, CheckConstraint, Table,
)
from sqlalchemy.orm import relationship

from eventhub.db.base import Base, TimestampMixin

event_attendees = Table(
    "event_attendees",
    Base.metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=True)
    category = Column(String(50), nullable=False, default="Other")
    date = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(255), nullable=True)
    image = Column(String(1024), nullable=True)
    max_attendees = Column(Integer, nullable=True)
    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    organizer = relationship("User", lazy="selectin")
    attendees = relationship(
        "User",
        secondary=event_attendees,
        lazy="selectin",
        order_by="User.id",
    )

    __table_args__ = (
        CheckConstraint(
            "max_attendees IS NULL OR max_attendees > 0",
            name="check_max_attendees_positive",
        ),
        Index("ix_events_date", "date"),
        Index("ix_events_category_date", "category", "date"),
    )

    @property
    def attendee_count(self) -> int:
        return len(self.attendees)

    @property
    def is_full(self) -> bool:
        return self.max_attendees is not None and self.attendee_count >= self.max_attendees

    def has_attendee(self, user_id: int) -> bool:
        return any(attendee.id == user_id for attendee in self.attendees)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, attendees={self.attendee_count}/{self.max_attendees})>"
