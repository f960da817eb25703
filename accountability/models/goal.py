"""Goal ORM — one committed goal inside a user's cycle.

Invariants:
    - user_id and created_at are immutable after insert
    - allocated_minutes is a positive integer (validated at the API boundary)
    - completed only changes through a toggle
    - Rows leave the table by a windowed delete or by the streak purge

Design Decisions:
    - user_name denormalized: listings show the owner without a JOIN
    - ON DELETE CASCADE on user_id: removing a user never strands goals
    - created_at indexed: the 3-day listing filters and sorts on it
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from accountability.db.base import Base


class Goal(Base):
    """Goal entity: text, time budget and completion flag."""
    __tablename__ = "goals"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_name: Mapped[str] = mapped_column(String(100), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    allocated_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    def __repr__(self):
        return f"<Goal text={self.text!r} completed={self.completed} user_id={self.user_id}>"
