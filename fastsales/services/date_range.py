# fastsales/services/date_range.py

from typing import NamedTuple, Optional

from fastsales.core.context import Clock


class DateRange(NamedTuple):
    start: str
    end: str


class DateRangeResolver:
    """Fills in missing report bounds.

    A missing or empty ``start`` becomes the first day of the current month
    and a missing or empty ``end`` becomes today, both in the reference time
    zone. Supplied values pass through untouched: a malformed date simply
    matches nothing downstream.
    """

    def __init__(self, clock: Clock):
        self.clock = clock

    def resolve(self, start: Optional[str] = None, end: Optional[str] = None) -> DateRange:
        today = self.clock.today()

        if not start:
            start = today.replace(day=1).isoformat()

        if not end:
            end = today.isoformat()

        return DateRange(start=start, end=end)
