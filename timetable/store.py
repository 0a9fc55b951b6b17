"""
Result store for resolved intervals.

Intervals are keyed by their start minute. Two intervals that start at the same
minute occupy the same slot, whatever their source or end time:

- insert() is a no-op when the slot is taken (first writer wins)
- remove_by_start() clears a slot, whichever interval is in it
- iteration yields intervals in ascending start order
"""

from __future__ import annotations

import bisect
from typing import Iterator, Optional

from timetable.model import Interval, TimetableError


class StoreFrozenError(TimetableError, RuntimeError):
    """
    Raised when a frozen ResultStore is mutated.
    """


class ResultStore:
    def __init__(self) -> None:
        self._by_start: dict[int, Interval] = {}
        # Sorted list of occupied start minutes
        self._starts: list[int] = []
        self._frozen = False

    def insert(self, interval: Interval) -> bool:
        """
        Store the interval unless its start slot is taken. Returns True if stored.
        """
        self._check_mutable()
        key = interval.start_of_day
        if key in self._by_start:
            return False
        self._by_start[key] = interval
        bisect.insort(self._starts, key)
        return True

    def remove_by_start(self, start_of_day: int) -> Optional[Interval]:
        """
        Remove whatever occupies the given start slot. Returns the removed interval.
        """
        self._check_mutable()
        removed = self._by_start.pop(start_of_day, None)
        if removed is not None:
            del self._starts[bisect.bisect_left(self._starts, start_of_day)]
        return removed

    def get(self, start_of_day: int) -> Optional[Interval]:
        return self._by_start.get(start_of_day)

    def iter_ordered(self) -> Iterator[Interval]:
        for key in self._starts:
            yield self._by_start[key]

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise StoreFrozenError("ResultStore is read-only after resolution")

    def __iter__(self) -> Iterator[Interval]:
        return self.iter_ordered()

    def __len__(self) -> int:
        return len(self._starts)

    def __contains__(self, item: object) -> bool:
        # Slot semantics: any interval with the same start counts
        if not isinstance(item, Interval):
            return False
        return item.start_of_day in self._by_start

    def __repr__(self) -> str:
        return f"ResultStore({[str(iv) for iv in self.iter_ordered()]})"
