"""
Central data model definitions used across the project.

An Interval is one validated timetable record: a source (the company that runs
the service) plus a start and end clock time on a single day. Times are plain
minute-of-day values, there is no date and no wraparound past midnight.
"""

from __future__ import annotations

from dataclasses import dataclass


# Longest accepted service, in minutes
MAX_DURATION_MIN = 60


class TimetableError(Exception):
    """
    Base class for all errors raised by the timetable package.
    """


class InvalidIntervalError(TimetableError, ValueError):
    """
    Raised when an Interval is constructed with out-of-range fields.
    """


def _check_clock(hour: int, minute: int) -> bool:
    return 0 <= hour <= 23 and 0 <= minute <= 59


@dataclass(frozen=True)
class Interval:
    """
    Represents one timetable entry (single service of one source).

    Construction rejects out-of-range clock values and services longer than
    MAX_DURATION_MIN. Only the upper bound is checked: an end before the start
    gives a negative duration, which is accepted.
    """

    source: str
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int

    def __post_init__(self) -> None:
        if not _check_clock(self.start_hour, self.start_minute):
            raise InvalidIntervalError(f"Invalid start time: {self.start_hour}:{self.start_minute}")
        if not _check_clock(self.end_hour, self.end_minute):
            raise InvalidIntervalError(f"Invalid end time: {self.end_hour}:{self.end_minute}")
        if self.duration > MAX_DURATION_MIN:
            raise InvalidIntervalError(f"Service longer than {MAX_DURATION_MIN} minutes: {self}")

    @classmethod
    def from_times(cls, source: str, start: tuple[int, int], end: tuple[int, int]) -> Interval:
        return cls(source, start[0], start[1], end[0], end[1])

    @property
    def start_of_day(self) -> int:
        return self.start_hour * 60 + self.start_minute

    @property
    def end_of_day(self) -> int:
        return self.end_hour * 60 + self.end_minute

    @property
    def duration(self) -> int:
        return self.end_of_day - self.start_of_day

    @property
    def sort_key(self) -> int:
        # Not unique: different shapes can share a key
        return self.start_of_day + self.end_of_day

    def __str__(self) -> str:
        return (
            f"{self.source} {self.start_hour:02d}:{self.start_minute:02d} "
            f"{self.end_hour:02d}:{self.end_minute:02d}"
        )
