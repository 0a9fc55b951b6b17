"""
File access for timetable input and output.

Any OS-level failure is wrapped in a ResourceError that records which file
failed and whether it was being read or written. Nothing is retried.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from timetable.model import TimetableError


class ResourceError(TimetableError):
    """
    Raised when an input or output file cannot be accessed.
    """

    def __init__(self, path: Path, action: str, reason: str) -> None:
        super().__init__(f"could not {action} {path}: {reason}")
        self.path = path
        self.action = action
        self.reason = reason


def _reason(err: BaseException) -> str:
    if isinstance(err, OSError) and err.strerror:
        return err.strerror
    return str(err)


def read_lines(path: str | Path) -> List[str]:
    """
    Read a UTF-8 text file and return its lines without line endings.

    Only "\\n", "\\r" and "\\r\\n" end a line; other control characters such as
    form feeds stay inside the line they appear in.
    """
    in_path = Path(path)
    try:
        # Universal newlines: "\r\n" and "\r" arrive as "\n"
        text = in_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceError(in_path, "read", _reason(e)) from e

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def write_text(path: str | Path, text: str) -> Path:
    """
    Write text as UTF-8, creating parent directories if needed.
    """
    out_path = Path(path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps "\n" as-is on every platform
        with open(out_path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise ResourceError(out_path, "write", _reason(e)) from e
    return out_path
