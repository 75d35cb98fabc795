import pendulum


class SystemClock:
    """Wall clock, in unix seconds."""

    def now(self) -> int:
        return pendulum.now("UTC").int_timestamp


class FrozenClock:
    """
    Clock that only moves when told to.

    Used by tests and scenario tooling the way chain time is advanced on a
    local node.
    """

    def __init__(self, start: int | pendulum.DateTime | None = None):
        if start is None:
            start = pendulum.datetime(2024, 1, 1, tz="UTC")
        if isinstance(start, pendulum.DateTime):
            start = start.int_timestamp
        self._now = int(start)

    def now(self) -> int:
        return self._now

    def travel(self, days: int = 0, hours: int = 0, minutes: int = 0, seconds: int = 0) -> int:
        delta = pendulum.duration(days=days, hours=hours, minutes=minutes, seconds=seconds)
        if delta.total_seconds() < 0:
            raise ValueError("Clock cannot go backwards.")
        self._now += int(delta.total_seconds())
        return self._now

    def travel_to(self, timestamp: int) -> int:
        if timestamp < self._now:
            raise ValueError("Clock cannot go backwards.")
        self._now = int(timestamp)
        return self._now

    def as_datetime(self) -> pendulum.DateTime:
        return pendulum.from_timestamp(self._now, tz="UTC")
