"""
Source configuration.

Holds the priority table (source name -> priority, lower wins ties) and the
display order used when writing the timetable. Both are ordered and both are
observable in the output, so they are kept as tuples rather than a plain dict.

The configuration can be loaded from a JSON file:

    {
      "sources": [
        {"name": "Posh", "priority": 0},
        {"name": "Grotty", "priority": 1}
      ],
      "display_order": ["Posh", "Grotty"]
    }

"display_order" is optional and defaults to ascending priority.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

from timetable.model import TimetableError

logger = logging.getLogger(__name__)


# Path to a JSON config file, used when no --config is given
CONFIG_ENV_VAR = "TIMETABLE_CONFIG"

DEFAULT_PRIORITIES: tuple[tuple[str, int], ...] = (("Posh", 0), ("Grotty", 1))


class ConfigError(TimetableError, ValueError):
    """
    Raised for an invalid or unreadable configuration. Always fatal.
    """


@dataclass(frozen=True)
class TimetableConfig:
    priorities: tuple[tuple[str, int], ...]
    display_order: tuple[str, ...]

    @classmethod
    def create(
        cls,
        priorities: Iterable[tuple[str, int]],
        display_order: Optional[Sequence[str]] = None,
    ) -> TimetableConfig:
        """
        Build a validated config. Raises ConfigError on any inconsistency.
        """
        pairs = tuple((name, prio) for name, prio in priorities)
        if not pairs:
            raise ConfigError("No sources configured")

        seen_names: set[str] = set()
        seen_prios: dict[int, str] = {}
        for name, prio in pairs:
            if not isinstance(name, str) or not name.strip():
                raise ConfigError(f"Invalid source name: {name!r}")
            if " " in name:
                raise ConfigError(f"Source name must not contain spaces: {name!r}")
            # bool is an int subclass, reject it explicitly
            if isinstance(prio, bool) or not isinstance(prio, int):
                raise ConfigError(f"Priority of {name!r} must be an integer, got {prio!r}")
            if name in seen_names:
                raise ConfigError(f"Duplicate source: {name!r}")
            if prio in seen_prios:
                raise ConfigError(f"Sources {seen_prios[prio]!r} and {name!r} share priority {prio}")
            seen_names.add(name)
            seen_prios[prio] = name

        if display_order is None:
            order = tuple(name for name, _ in sorted(pairs, key=lambda p: p[1]))
        else:
            order = tuple(display_order)
            if len(set(order)) != len(order):
                raise ConfigError(f"Duplicate source in display order: {list(order)}")
            unknown = [s for s in order if s not in seen_names]
            if unknown:
                raise ConfigError(f"Display order lists unknown sources: {unknown}")
            missing = [name for name, _ in pairs if name not in order]
            if missing:
                raise ConfigError(f"Sources missing from display order: {missing}")

        return cls(priorities=pairs, display_order=order)

    @property
    def sources(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.priorities)

    def knows(self, source: str) -> bool:
        return any(name == source for name, _ in self.priorities)

    def priority_of(self, source: str) -> int:
        for name, prio in self.priorities:
            if name == source:
                return prio
        raise KeyError(source)


def default_config() -> TimetableConfig:
    return TimetableConfig.create(DEFAULT_PRIORITIES)


def _config_from_data(data: Any, origin: str) -> TimetableConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"{origin}: expected a JSON object")
    sources = data.get("sources")
    if not isinstance(sources, list):
        raise ConfigError(f"{origin}: 'sources' must be a list")

    pairs: list[tuple[str, int]] = []
    for entry in sources:
        if not isinstance(entry, dict) or "name" not in entry or "priority" not in entry:
            raise ConfigError(f"{origin}: each source needs 'name' and 'priority', got {entry!r}")
        pairs.append((entry["name"], entry["priority"]))

    display_order = data.get("display_order")
    if display_order is not None and not isinstance(display_order, list):
        raise ConfigError(f"{origin}: 'display_order' must be a list")

    try:
        return TimetableConfig.create(pairs, display_order)
    except ConfigError as e:
        raise ConfigError(f"{origin}: {e}") from e


def load_config(path: str | Path) -> TimetableConfig:
    """
    Load and validate a JSON config file.
    """
    config_path = Path(path)
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e.strerror or e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Malformed config file {config_path}: {e}") from e

    config = _config_from_data(data, str(config_path))
    logger.info("Loaded %d sources from %s", len(config.priorities), config_path)
    return config


def resolve_config(path: str | Path | None = None) -> TimetableConfig:
    """
    Pick the config: explicit path, then $TIMETABLE_CONFIG, then the built-in default.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return default_config()
    return load_config(path)
