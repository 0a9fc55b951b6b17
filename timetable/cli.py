"""
CLI (Command Line Interface).

    timetable run <input> <output>     resolve input and write the timetable file
    timetable show <input>             resolve input and print it as a table
    timetable sources                  print the configured sources

Every command accepts --config <file.json>; without it $TIMETABLE_CONFIG or the
built-in Posh/Grotty table is used. Add -v / -vv for progress / debug logging.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from timetable.config import TimetableConfig, resolve_config
from timetable.conflicts import resolve_conflicts
from timetable.export import format_interval, write_timetable
from timetable.model import TimetableError
from timetable.parse import parse_lines
from timetable.storage import read_lines
from timetable.store import ResultStore

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


def build_timetable(lines: Iterable[str], config: TimetableConfig) -> ResultStore:
    """
    Parse raw lines and resolve conflicts.
    """
    return resolve_conflicts(parse_lines(lines, config), config)


def run(input_path: str | Path, output_path: str | Path, config: TimetableConfig) -> int:
    """
    Full batch pass: read input, resolve, write output. Returns intervals written.
    """
    lines = read_lines(input_path)
    logger.info("Read %d lines from %s", len(lines), input_path)
    store = build_timetable(lines, config)
    return write_timetable(store, config, output_path)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _cmd_run(args: argparse.Namespace, config: TimetableConfig) -> int:
    n = run(args.input, args.output, config)
    console.print(f"Wrote {n} intervals to: {args.output}")
    return 0


def _cmd_show(args: argparse.Namespace, config: TimetableConfig) -> int:
    store = build_timetable(read_lines(args.input), config)
    if not len(store):
        console.print("No intervals resolved.")
        return 0

    table = Table(title="Timetable", box=box.SIMPLE_HEAVY)
    table.add_column("Source", style="bold")
    table.add_column("Start")
    table.add_column("End")
    for source in config.display_order:
        for iv in store:
            if iv.source == source:
                _, start, end = format_interval(iv).split(" ")
                table.add_row(source, start, end)
        table.add_section()

    console.print(table)
    return 0


def _cmd_sources(args: argparse.Namespace, config: TimetableConfig) -> int:
    table = Table(title="Sources", box=box.SIMPLE_HEAVY)
    table.add_column("Display #", justify="right")
    table.add_column("Source", style="bold")
    table.add_column("Priority", justify="right")
    for i, source in enumerate(config.display_order, start=1):
        table.add_row(str(i), source, str(config.priority_of(source)))
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    # Shared options, accepted after any sub-command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-v info, -vv debug)")
    common.add_argument("--config", type=str, default=None, help="JSON file with source priorities")

    parser = argparse.ArgumentParser(prog="timetable", description="Timetable conflict resolver")
    sub = parser.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", parents=[common], help="Resolve input file and write the timetable")
    p_run.add_argument("input", type=str, help="Input file, one 'Source HH:MM HH:MM' per line")
    p_run.add_argument("output", type=str, help="Output file path")

    p_show = sub.add_parser("show", parents=[common], help="Resolve input file and print the result")
    p_show.add_argument("input", type=str, help="Input file, one 'Source HH:MM HH:MM' per line")

    sub.add_parser("sources", parents=[common], help="Show configured sources and priorities")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = resolve_config(args.config)

        if args.command == "run":
            raise SystemExit(_cmd_run(args, config))
        if args.command == "show":
            raise SystemExit(_cmd_show(args, config))
        if args.command == "sources":
            raise SystemExit(_cmd_sources(args, config))
    except TimetableError as e:
        print(f"error: {e}", file=sys.stderr)
        raise SystemExit(1) from e

    raise SystemExit(2)
