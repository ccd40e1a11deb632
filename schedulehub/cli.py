"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    schedulehub search <initials>
    schedulehub ingest <file.txt>
    schedulehub show
    schedulehub clear
    schedulehub interactive

Note:
- The interactive UI lives in schedulehub/interactive.py
- This CLI prints plain text (no rich formatting)
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from schedulehub.gemini import get_lecturer_advice, parse_raw_schedule
from schedulehub.model import AppView, RoleFilter
from schedulehub.render import empty_tab_lines, entry_card, preview_lines, stats_lines, tabs_line
from schedulehub.state import (
    AppState,
    begin_ingestion,
    clear_data,
    finish_ingestion,
    initial_state,
    submit_search,
    switch_tab,
)

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "SCHEDULEHUB_LOG_LEVEL"


def _print_dashboard(state: AppState) -> None:
    result = state.result
    if result is None:
        return

    print(f"=== Presentation Hub: {state.initials} ===")
    for line in stats_lines(result.stats):
        print(line)
    print()
    print(tabs_line(result.stats, state.role_filter))
    print(f"Showing {state.role_filter.value.lower()} sessions")

    shown = state.displayed()
    if not shown:
        for line in empty_tab_lines(state.role_filter):
            print(line)
        return

    for entry in shown:
        print()
        for line in entry_card(entry, state.initials):
            print(line)


def _cmd_search(args: argparse.Namespace, state: AppState) -> int:
    """
    Show all sessions of one lecturer.
    """
    initials = (args.initials or "").strip()
    if not initials:
        print("Please provide initials.")
        return 1

    if not state.entries:
        print("No schedule data. Import one first: schedulehub ingest <file>")
        return 1

    state = submit_search(state, initials)
    if state.view is not AppView.DASHBOARD:
        print(state.notice)
        return 1

    if args.tab:
        state = switch_tab(state, RoleFilter(args.tab.upper()))

    if not args.advice:
        _print_dashboard(state)
        return 0

    # dashboard first, advice when the call returns
    if state.result is None:
        return 1
    with ThreadPoolExecutor(max_workers=1) as pool:
        task = pool.submit(get_lecturer_advice, state.initials, state.result.entries)
        _print_dashboard(state)
        advice = task.result()

    if advice:
        print()
        print(f'"{advice}"')
    return 0


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _cmd_ingest(args: argparse.Namespace, state: AppState) -> int:
    """
    Replace the stored schedule with rows parsed from pasted text.
    """
    try:
        raw_text = _read_input(args.source)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read {args.source}: {e}")
        return 1

    state = begin_ingestion(state, raw_text)
    if not state.processing:
        print("Nothing to import.")
        return 1

    print("Parsing schedule...")
    state = finish_ingestion(state, parse_raw_schedule(raw_text))
    print(state.notice)
    return 0 if state.view is AppView.LANDING else 1


def _cmd_show(args: argparse.Namespace, state: AppState) -> int:
    for line in preview_lines(state.entries):
        print(line)
    return 0


def _cmd_clear(args: argparse.Namespace, state: AppState) -> int:
    """
    Delete the stored schedule after confirmation.
    """
    if not state.entries:
        print("No schedule data stored.")
        return 0

    confirmed = args.yes
    if not confirmed:
        answer = input("Are you sure you want to clear all schedule data? [y/N]: ").strip().lower()
        confirmed = answer in ("y", "yes")

    state = clear_data(state, confirmed)
    if not confirmed:
        print("Aborted.")
        return 1
    print(state.notice)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="schedulehub", description="ScheduleHub – lecturer presentation timetable")
    parser.add_argument("--data", type=str, default=None, help="Schedule JSON file (default: package data dir)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_search = sub.add_parser("search", help="Show the sessions of a lecturer")
    p_search.add_argument("initials", type=str, help="Initials or name part (e.g. AJ)")
    p_search.add_argument(
        "--tab", choices=["all", "examiner", "supervisor"], default=None, help="Role tab to show (default: auto)"
    )
    p_search.add_argument("--advice", action="store_true", help="Also ask Gemini for a short summary")

    p_ingest = sub.add_parser("ingest", help="Import a schedule from pasted spreadsheet text")
    p_ingest.add_argument("source", type=str, help="Text file with the pasted rows, or - for stdin")

    sub.add_parser("show", help="Preview the stored schedule")

    p_clear = sub.add_parser("clear", help="Delete all stored schedule data")
    p_clear.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def _setup_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    state = initial_state(args.data)

    if args.command == "search":
        raise SystemExit(_cmd_search(args, state))
    if args.command == "ingest":
        raise SystemExit(_cmd_ingest(args, state))
    if args.command == "show":
        raise SystemExit(_cmd_show(args, state))
    if args.command == "clear":
        raise SystemExit(_cmd_clear(args, state))

    if args.command == "interactive":
        from schedulehub.interactive import run_interactive

        run_interactive(state)
        raise SystemExit(0)

    raise SystemExit(2)
