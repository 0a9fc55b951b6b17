"""
Timetable text export.

Output layout: one block per source, in the configured display order. Each
block lists the source's intervals in start order and ends with a blank line,
so an empty block is just the blank line.
"""

from __future__ import annotations

from pathlib import Path

from timetable.config import TimetableConfig
from timetable.model import Interval
from timetable.storage import write_text
from timetable.store import ResultStore


def format_interval(interval: Interval) -> str:
    """
    Render one interval as 'Source HH:MM HH:MM'.
    """
    return str(interval)


def format_timetable(store: ResultStore, config: TimetableConfig) -> list[str]:
    lines: list[str] = []
    for source in config.display_order:
        lines.extend(format_interval(iv) for iv in store.iter_ordered() if iv.source == source)
        lines.append("")
    return lines


def render_timetable(store: ResultStore, config: TimetableConfig) -> str:
    return "".join(line + "\n" for line in format_timetable(store, config))


def write_timetable(store: ResultStore, config: TimetableConfig, out_path: str | Path) -> int:
    """
    Write the grouped timetable to out_path. Returns number of intervals written.
    """
    write_text(out_path, render_timetable(store, config))
    return sum(1 for iv in store if iv.source in config.display_order)
