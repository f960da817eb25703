"""Time Windows — the three fixed durations and UTC instant normalization.

Invariants:
    - CYCLE_DURATION, DELETION_WINDOW, RETENTION_WINDOW are constants, never per-user
    - Every instant compared in core/ passes through as_utc() first
    - Retention is a visibility filter; nothing here deletes anything

Design Decisions:
    - Naive datetimes are read as UTC: SQLite drops tzinfo on round-trip while
      PostgreSQL keeps it, and the domain only deals in UTC instants
"""

from datetime import datetime, timedelta, timezone

CYCLE_DURATION = timedelta(hours=24)
DELETION_WINDOW = timedelta(minutes=30)
RETENTION_WINDOW = timedelta(days=3)


def as_utc(instant: datetime) -> datetime:
    """Return instant as an aware UTC datetime."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def retention_cutoff(now: datetime) -> datetime:
    """Oldest creation instant still surfaced in listings."""
    return as_utc(now) - RETENTION_WINDOW


def is_within_retention(created_at: datetime, now: datetime) -> bool:
    return as_utc(created_at) >= retention_cutoff(now)
