from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from schedulehub.gemini import get_lecturer_advice, parse_raw_schedule
from schedulehub.model import AppView, Role, RoleFilter
from schedulehub.query import classify_role, normalize_query
from schedulehub.render import (
    DEFAULT_PROJECT_TITLE,
    PREVIEW_ROWS,
    empty_tab_lines,
    stats_lines,
    tabs_line,
    time_slot,
)
from schedulehub.state import (
    AppState,
    attach_advice,
    begin_ingestion,
    clear_data,
    collect_advice,
    finish_ingestion,
    navigate,
    submit_search,
    switch_tab,
)

logger = logging.getLogger(__name__)

console = Console()

PASTE_END = "."


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg)


def run_interactive(state: AppState, pool: Optional[ThreadPoolExecutor] = None) -> AppState:
    """
    Interactive menu loop over the three views (search, dashboard, admin).

    Gemini calls run on a worker thread; the advice for a dashboard is picked
    up on the next loop iteration once it is ready.
    """
    own_pool = pool is None
    if pool is None:
        pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="gemini")

    try:
        while True:
            state = collect_advice(state)
            if state.notice:
                _println(f"[yellow]{escape(state.notice)}[/]")
                state = _clear_notice(state)

            if state.view is AppView.LANDING:
                state, done = _screen_landing(state, pool)
            elif state.view is AppView.DASHBOARD:
                state, done = _screen_dashboard(state)
            else:
                state, done = _screen_admin(state, pool)

            if done:
                if state.advice_task is not None and not state.advice_task.done():
                    _println("Waiting for the pending summary request to finish...")
                _println("Bye.")
                return state
    finally:
        if own_pool:
            pool.shutdown(wait=False, cancel_futures=True)


def _clear_notice(state: AppState) -> AppState:
    return replace(state, notice="")


# ---------------------------------------------------------------------------
# Landing
# ---------------------------------------------------------------------------


def _screen_landing(state: AppState, pool: ThreadPoolExecutor) -> tuple[AppState, bool]:
    _println("\n=== Lecturer Timetable Access ===")

    if not state.entries:
        _println("[bold]System Ready, Data Missing[/]")
        _println("Please upload the presentation schedule (Excel/Sheets text) to begin.")
        choice = _prompt("\n[1] Initial data setup\n[0] Exit\nSelect: ").strip()
        if choice == "0":
            return state, True
        if choice == "1":
            return navigate(state, AppView.ADMIN), False
        _println("Invalid choice.")
        return state, False

    _println("Enter your initials to view your examination slots and student presentations.")
    choice = _prompt("\n[1] Search by initials\n[2] Schedule management\n[0] Exit\nSelect: ").strip()

    if choice == "0":
        return state, True
    if choice == "2":
        return navigate(state, AppView.ADMIN), False
    if choice != "1":
        _println("Invalid choice.")
        return state, False

    initials = _prompt("Initials (e.g. 'Dr. AJ' or 'Prof. Z') [blank = back]: ")
    state = submit_search(state, initials)
    if state.view is AppView.DASHBOARD and state.result is not None:
        task = pool.submit(get_lecturer_advice, state.initials, state.result.entries)
        state = attach_advice(state, task)
    return state, False


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


def _sessions_table(state: AppState) -> Table:
    query = normalize_query(state.initials)
    table = Table(box=box.SIMPLE, title=f"Showing {state.role_filter.value.lower()} sessions")
    table.add_column("Date")
    table.add_column("Student")
    table.add_column("Role")
    table.add_column("Time slot")
    table.add_column("Venue")
    table.add_column("Panel")

    for entry in state.displayed():
        if classify_role(entry, query) is Role.SUPERVISOR:
            role = "[magenta]Supervisor Role[/]"
        else:
            role = "[green]Examiner Role[/]"
        student = f"[bold]{escape(entry.student_name)}[/]\n{escape(entry.project_title or DEFAULT_PROJECT_TITLE)}"
        people = [f"Sup: {escape(entry.supervisor)}", f"Ex 1: {escape(entry.examiner1)}"]
        if entry.examiner2:
            people.append(f"Ex 2: {escape(entry.examiner2)}")
        table.add_row(
            escape(entry.date), student, role, escape(time_slot(entry)), escape(entry.location), "\n".join(people)
        )
    return table


def _print_dashboard(state: AppState) -> None:
    result = state.result
    if result is None:
        return

    _println(f"\n=== Presentation Hub | Lecturer [bold cyan]{escape(state.initials)}[/] ===")
    for line in stats_lines(result.stats):
        _println(escape(line))
    _println()
    _println(escape(tabs_line(result.stats, state.role_filter)))

    if state.role_filter is RoleFilter.ALL:
        if state.advice:
            console.print(Panel(f'[italic]"{escape(state.advice)}"[/]', title="Summary"))
        elif state.advice_task is not None:
            _println("[dim]Generating summary...[/]")

    if state.displayed():
        console.print(_sessions_table(state))
    else:
        for line in empty_tab_lines(state.role_filter):
            _println(escape(line))


def _screen_dashboard(state: AppState) -> tuple[AppState, bool]:
    _print_dashboard(state)

    choice = _prompt(
        "\n[1] Examine tab\n"
        "[2] Supervise tab\n"
        "[3] All tab\n"
        "[4] New search\n"
        "[5] Schedule management\n"
        "[0] Exit\n"
        "Select: "
    ).strip()

    if choice == "0":
        return state, True
    if choice == "1":
        return switch_tab(state, RoleFilter.EXAMINER), False
    if choice == "2":
        return switch_tab(state, RoleFilter.SUPERVISOR), False
    if choice == "3":
        return switch_tab(state, RoleFilter.ALL), False
    if choice == "4":
        return navigate(state, AppView.LANDING), False
    if choice == "5":
        return navigate(state, AppView.ADMIN), False

    _println("Invalid choice.")
    return state, False


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


def _print_preview(state: AppState) -> None:
    entries = state.entries
    if not entries:
        _println("No schedule data stored.")
        return

    table = Table(title=f"Active database preview ({len(entries)} records total)", box=box.SIMPLE)
    table.add_column("Student candidate")
    table.add_column("Supervisor")
    table.add_column("Examiner")
    table.add_column("Session details")
    for e in entries[:PREVIEW_ROWS]:
        table.add_row(
            escape(e.student_name),
            escape(e.supervisor),
            escape(e.examiner1),
            f"[bold]{escape(e.date)}[/] {escape(e.start_time)} @ {escape(e.location)}",
        )
    console.print(table)

    if len(entries) > PREVIEW_ROWS:
        _println(f"+ {len(entries) - PREVIEW_ROWS} additional sessions in memory")


def _read_paste() -> str:
    _println(
        "Copy all rows from Excel or Google Sheets (including headers) and paste them here.\n"
        f"Finish with a line containing only '{PASTE_END}' (or Ctrl-D)."
    )
    lines: list[str] = []
    while True:
        try:
            line = _prompt("")
        except EOFError:
            break
        if line.strip() == PASTE_END:
            break
        lines.append(line)
    return "\n".join(lines)


def _flow_ingest(state: AppState, pool: ThreadPoolExecutor) -> AppState:
    raw_text = _read_paste()
    state = begin_ingestion(state, raw_text)
    if not state.processing:
        _println("Nothing pasted.")
        return state

    with console.status("Parsing schedule..."):
        entries = pool.submit(parse_raw_schedule, raw_text).result()

    return finish_ingestion(state, entries)


def _flow_clear(state: AppState) -> AppState:
    if not state.entries:
        _println("No schedule data stored.")
        return state
    answer = _prompt("Are you sure you want to clear all schedule data? [y/N]: ").strip().lower()
    return clear_data(state, answer in ("y", "yes"))


def _screen_admin(state: AppState, pool: ThreadPoolExecutor) -> tuple[AppState, bool]:
    _println("\n=== Schedule Management ===")
    _print_preview(state)

    choice = _prompt(
        "\n[1] Paste import (replaces all data)\n"
        "[2] Clear database\n"
        "[3] Back to search\n"
        "[0] Exit\n"
        "Select: "
    ).strip()

    if choice == "0":
        return state, True
    if choice == "1":
        return _flow_ingest(state, pool), False
    if choice == "2":
        return _flow_clear(state), False
    if choice == "3":
        return navigate(state, AppView.LANDING), False

    _println("Invalid choice.")
    return state, False
