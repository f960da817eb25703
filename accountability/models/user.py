"""User ORM — display name, streak counter and current cycle start.

Invariants:
    - name is unique (it is the login key)
    - profile_ref is written once at registration and never updated
    - streak is a non-negative integer starting at 0
    - cycle_start is NULL exactly when no goal was created since the last reset

Design Decisions:
    - No relationship() to goals: goals hold a weak back-reference by user_id
    - cycle_start persisted, countdown derived on read (core/cycle_engine.py)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from accountability.db.base import Base


class User(Base):
    """Accountability participant."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    profile_ref: Mapped[str | None] = mapped_column(String(255), nullable=True)
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cycle_start: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self):
        return f"<User name={self.name} streak={self.streak} cycle_start={self.cycle_start}>"
