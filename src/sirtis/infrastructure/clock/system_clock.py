"""System clock adapter."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo


class SystemClock:
    """Reads wall-clock time in the configured timezone."""

    def __init__(self, timezone: str = "UTC") -> None:
        self._tz = UTC if timezone.upper() == "UTC" else ZoneInfo(timezone)

    def now(self) -> datetime:
        return datetime.now(self._tz)
