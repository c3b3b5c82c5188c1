"""Wall clock abstraction so time-windowed queries can be tested."""

from datetime import datetime, timedelta


def to_local_naive(moment: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


class Clock:
    """Returns the current local time as a naive datetime."""

    def now(self) -> datetime:
        return datetime.now()

    def start_of_day(self, moment: datetime | None = None) -> datetime:
        """Truncate ``moment`` (default: now) to local midnight."""
        moment = to_local_naive(moment or self.now())
        return moment.replace(hour=0, minute=0, second=0, microsecond=0)


class FrozenClock(Clock):
    """Clock pinned to a fixed instant; ``advance`` moves it forward."""

    def __init__(self, moment: datetime):
        self._moment = moment

    def now(self) -> datetime:
        return self._moment

    def advance(self, **kwargs) -> None:
        self._moment = self._moment + timedelta(**kwargs)


system_clock = Clock()


def get_clock() -> Clock:
    """Dependency returning the process clock; overridden in tests."""
    return system_clock
