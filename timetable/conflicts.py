"""
Conflict resolution.

Intervals are sorted by sort_key (start minute + end minute) and folded pairwise:
the winner of each comparison becomes `current` for the next one. A pair is only
compared when the keys are close:

    current.sort_key == next.sort_key OR current.sort_key + 59 >= next.sort_key

This is a proximity heuristic on the key sum, not an exact overlap test.

Rules for a close pair (first match wins):
    1. same start and end   -> lower configured priority wins
    2. same start           -> earlier end wins
    3. same end             -> later start wins
    4. next nested strictly -> next wins
    5. anything else        -> next is stored, no removal

When `current` wins it is inserted into the store. When `next` wins in rules 1-4,
the slot of `current` is cleared first. Rule 5 always inserts `next`.

A single valid interval never reaches the store: with fewer than two intervals
no comparison happens at all.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from timetable.config import TimetableConfig
from timetable.model import Interval
from timetable.store import ResultStore

logger = logging.getLogger(__name__)


CLOSENESS_WINDOW_MIN = 59


def sort_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    # sorted() is stable, equal keys keep input order
    return sorted(intervals, key=lambda iv: iv.sort_key)


def is_close(current: Interval, nxt: Interval) -> bool:
    return current.sort_key == nxt.sort_key or current.sort_key + CLOSENESS_WINDOW_MIN >= nxt.sort_key


def _keep_current(current: Interval, store: ResultStore, rule: str) -> Interval:
    store.insert(current)
    logger.debug("%s: kept %s", rule, current)
    return current


def _replace_current(current: Interval, nxt: Interval, store: ResultStore, rule: str) -> Interval:
    store.remove_by_start(current.start_of_day)
    store.insert(nxt)
    logger.debug("%s: %s replaces %s", rule, nxt, current)
    return nxt


def resolve_pair(current: Interval, nxt: Interval, store: ResultStore, config: TimetableConfig) -> Interval:
    """
    Decide between two neighbouring intervals, update the store, return the winner.
    """
    if is_close(current, nxt):
        same_start = current.start_of_day == nxt.start_of_day
        same_end = current.end_of_day == nxt.end_of_day

        if same_start and same_end:
            if config.priority_of(current.source) < config.priority_of(nxt.source):
                return _keep_current(current, store, "same shape")
            return _replace_current(current, nxt, store, "same shape")

        if same_start:
            if current.end_of_day < nxt.end_of_day:
                return _keep_current(current, store, "same start")
            return _replace_current(current, nxt, store, "same start")

        if same_end:
            if current.start_of_day < nxt.start_of_day:
                return _replace_current(current, nxt, store, "same end")
            return _keep_current(current, store, "same end")

        if nxt.start_of_day > current.start_of_day and nxt.end_of_day < current.end_of_day:
            return _replace_current(current, nxt, store, "nested")

    store.insert(nxt)
    logger.debug("no conflict: added %s", nxt)
    return nxt


def resolve_conflicts(intervals: Iterable[Interval], config: TimetableConfig) -> ResultStore:
    """
    Resolve all intervals into a new, frozen ResultStore.
    """
    store = ResultStore()
    ordered = sort_intervals(intervals)

    if len(ordered) == 0:
        store.freeze()
        return store

    if len(ordered) == 1:
        # Nothing to compare against: the lone interval is not committed
        logger.info("Only one valid interval (%s), nothing resolved", ordered[0])
        store.freeze()
        return store

    current = ordered[0]
    for nxt in ordered[1:]:
        current = resolve_pair(current, nxt, store, config)

    store.freeze()
    logger.info("Resolved %d intervals into %d", len(ordered), len(store))
    return store
