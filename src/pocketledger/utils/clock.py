"""Clock abstraction, the single source of "today"."""

from datetime import date, datetime
from typing import Optional


class Clock:
    """System clock using the local calendar day."""

    def today(self) -> date:
        return date.today()

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock frozen at a given day, for tests and replays."""

    def __init__(self, today: date, now: Optional[datetime] = None):
        self._today = today
        self._now = now or datetime.combine(today, datetime.min.time().replace(hour=12))

    def today(self) -> date:
        return self._today

    def now(self) -> datetime:
        return self._now
