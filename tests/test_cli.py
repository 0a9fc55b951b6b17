"""
Tests for CLI entry points.

These tests focus on:
- the run command writing the grouped timetable file
- fatal errors (missing input, bad config) exiting with code 1
- argument validation
"""

import contextlib
import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from timetable.cli import build_timetable, main
from timetable.config import CONFIG_ENV_VAR, default_config

SAMPLE_INPUT = "Posh 09:00 09:30\nGrotty 09:00 09:45\nPosh 14:00 14:20\n"


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch.dict(os.environ)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop(CONFIG_ENV_VAR, None)

        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)

    def _main(self, argv: list[str]) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                main(argv)
        return ctx.exception.code, out.getvalue(), err.getvalue()

    def test_run_writes_timetable(self) -> None:
        src = self.tmp / "in.txt"
        dst = self.tmp / "out.txt"
        src.write_text(SAMPLE_INPUT, encoding="utf-8")

        code, out, _ = self._main(["run", str(src), str(dst)])
        self.assertEqual(code, 0)
        self.assertIn("Wrote 2 intervals", out)
        self.assertEqual(dst.read_text(encoding="utf-8"), "Posh 09:00 09:30\nPosh 14:00 14:20\n\n\n")

    def test_single_record_gives_empty_output(self) -> None:
        src = self.tmp / "in.txt"
        dst = self.tmp / "out.txt"
        src.write_text("Posh 09:00 09:30\n", encoding="utf-8")

        code, _, _ = self._main(["run", str(src), str(dst)])
        self.assertEqual(code, 0)
        self.assertEqual(dst.read_text(encoding="utf-8"), "\n\n")

    def test_run_with_config_file(self) -> None:
        src = self.tmp / "in.txt"
        dst = self.tmp / "out.txt"
        cfg = self.tmp / "config.json"
        src.write_text("Red 10:00 10:30\nBlue 10:00 10:30\nRed 15:00 15:10\n", encoding="utf-8")
        cfg.write_text(
            json.dumps({"sources": [{"name": "Red", "priority": 1}, {"name": "Blue", "priority": 0}]}),
            encoding="utf-8",
        )

        code, _, _ = self._main(["run", str(src), str(dst), "--config", str(cfg)])
        self.assertEqual(code, 0)
        self.assertEqual(dst.read_text(encoding="utf-8"), "Blue 10:00 10:30\n\nRed 15:00 15:10\n\n")

    def test_missing_input_exits_with_error(self) -> None:
        code, _, err = self._main(["run", str(self.tmp / "missing.txt"), str(self.tmp / "out.txt")])
        self.assertEqual(code, 1)
        self.assertIn("could not read", err)
        self.assertIn("missing.txt", err)

    def test_bad_config_exits_with_error(self) -> None:
        cfg = self.tmp / "config.json"
        cfg.write_text(json.dumps({"sources": [], "display_order": []}), encoding="utf-8")
        code, _, err = self._main(["sources", "--config", str(cfg)])
        self.assertEqual(code, 1)
        self.assertIn("config.json", err)

    def test_show_and_sources(self) -> None:
        src = self.tmp / "in.txt"
        src.write_text(SAMPLE_INPUT, encoding="utf-8")

        code, out, _ = self._main(["show", str(src)])
        self.assertEqual(code, 0)
        self.assertIn("14:20", out)
        self.assertNotIn("09:45", out)

        code, out, _ = self._main(["sources"])
        self.assertEqual(code, 0)
        self.assertIn("Grotty", out)

    def test_missing_command_is_usage_error(self) -> None:
        code, _, _ = self._main([])
        self.assertEqual(code, 2)


class TestBuildTimetable(unittest.TestCase):
    def test_malformed_lines_do_not_affect_resolution(self) -> None:
        lines = [
            "Unknown 09:00 09:30",
            "Posh 09:00 09:30",
            "Posh 24:00 09:30",
            "Grotty 09:00 09:45",
            "Posh 14:00 14:20",
        ]
        store = build_timetable(lines, default_config())
        self.assertEqual([str(iv) for iv in store], ["Posh 09:00 09:30", "Posh 14:00 14:20"])


if __name__ == "__main__":
    unittest.main()
