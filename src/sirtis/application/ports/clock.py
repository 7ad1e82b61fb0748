"""Clock port - current time source."""

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Port for reading the current time (timezone-aware)."""

    def now(self) -> datetime: ...
