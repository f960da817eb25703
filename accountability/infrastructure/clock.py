"""System Clock — the production Clock implementation."""

from datetime import datetime, timezone


class SystemClock:
    """Wall-clock UTC instants."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
