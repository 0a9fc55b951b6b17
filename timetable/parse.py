"""
Parsing (text lines -> Intervals).

Each input line is expected to look like

    Posh 10:15 11:10

i.e. exactly three space separated fields: source, start time, end time.
Anything else is dropped without raising: malformed lines are normal input,
not errors.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from timetable.config import TimetableConfig
from timetable.model import Interval, InvalidIntervalError

logger = logging.getLogger(__name__)


def _split_fields(text: str, sep: str) -> List[str]:
    """
    Split on sep and drop trailing empty fields ("a b " -> ["a", "b"]).
    Leading and interior empty fields are kept.
    """
    fields = text.split(sep)
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def _parse_int(token: str) -> Optional[int]:
    # Decimal digits with an optional sign ("09", "9", "+9" and "-0" are all fine)
    digits = token[1:] if token[:1] in ("+", "-") else token
    if not digits or not (digits.isascii() and digits.isdigit()):
        return None
    return int(token)


def parse_time(text: str) -> Optional[Tuple[int, int]]:
    """
    Parse 'HH:MM' into (hour, minute). Returns None on bad syntax or range.
    """
    parts = _split_fields(text, ":")
    if len(parts) != 2:
        return None
    hour = _parse_int(parts[0])
    minute = _parse_int(parts[1])
    if hour is None or minute is None:
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


def parse_line(line: str, config: TimetableConfig) -> Optional[Interval]:
    """
    Parse exactly one timetable line into exactly one Interval, or None.
    """
    data = _split_fields(line.rstrip("\r\n"), " ")
    if len(data) != 3:
        return None

    source, start_s, end_s = data
    start = parse_time(start_s)
    if start is None:
        return None
    end = parse_time(end_s)
    if end is None:
        return None

    if not config.knows(source):
        return None

    # Construction enforces the duration limit on top of the syntax checks above
    try:
        return Interval.from_times(source, start, end)
    except InvalidIntervalError:
        return None


def parse_lines(lines: Iterable[str], config: TimetableConfig) -> List[Interval]:
    """
    Parse all lines, keep valid Intervals in input order.
    """
    out: List[Interval] = []
    dropped = 0
    for lineno, line in enumerate(lines, start=1):
        interval = parse_line(line, config)
        if interval is None:
            dropped += 1
            logger.debug("Dropped line %d: %r", lineno, line)
            continue
        out.append(interval)

    logger.info("Parsed %d intervals (%d lines dropped)", len(out), dropped)
    return out
