import tempfile
import unittest
from pathlib import Path

from timetable.config import TimetableConfig, default_config
from timetable.conflicts import resolve_conflicts
from timetable.export import format_timetable, render_timetable, write_timetable
from timetable.model import Interval
from timetable.store import ResultStore


class TestFormatTimetable(unittest.TestCase):
    def _store(self) -> ResultStore:
        store = ResultStore()
        store.insert(Interval("Grotty", 10, 0, 10, 45))
        store.insert(Interval("Posh", 14, 0, 14, 20))
        store.insert(Interval("Posh", 9, 5, 9, 30))
        return store

    def test_groups_by_display_order(self) -> None:
        lines = format_timetable(self._store(), default_config())
        self.assertEqual(
            lines,
            ["Posh 09:05 09:30", "Posh 14:00 14:20", "", "Grotty 10:00 10:45", ""],
        )

    def test_custom_display_order(self) -> None:
        cfg = TimetableConfig.create([("Posh", 0), ("Grotty", 1)], ["Grotty", "Posh"])
        lines = format_timetable(self._store(), cfg)
        self.assertEqual(lines[0], "Grotty 10:00 10:45")

    def test_empty_store_emits_one_blank_line_per_source(self) -> None:
        self.assertEqual(render_timetable(ResultStore(), default_config()), "\n\n")

    def test_rendering_is_idempotent(self) -> None:
        store = self._store()
        store.freeze()
        cfg = default_config()
        self.assertEqual(render_timetable(store, cfg), render_timetable(store, cfg))


class TestWriteTimetable(unittest.TestCase):
    def test_end_to_end_scenario(self) -> None:
        cfg = default_config()
        store = resolve_conflicts(
            [
                Interval("Posh", 9, 0, 9, 30),
                Interval("Grotty", 9, 0, 9, 45),
                Interval("Posh", 14, 0, 14, 20),
            ],
            cfg,
        )
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "nested" / "timetable.txt"
            n = write_timetable(store, cfg, out)
            self.assertEqual(n, 2)
            self.assertEqual(
                out.read_text(encoding="utf-8"),
                "Posh 09:00 09:30\nPosh 14:00 14:20\n\n\n",
            )


if __name__ == "__main__":
    unittest.main()
