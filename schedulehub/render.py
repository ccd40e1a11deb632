"""
Plain-text building blocks shared by the CLI and the interactive menu.
"""

from __future__ import annotations

from schedulehub.model import LecturerStats, Role, RoleFilter, ScheduleEntry
from schedulehub.query import classify_role, normalize_query

DEFAULT_PROJECT_TITLE = "Research Proposal Presentation"
PREVIEW_ROWS = 5

TAB_LABELS = {
    RoleFilter.EXAMINER: "Examine",
    RoleFilter.SUPERVISOR: "Supervise",
    RoleFilter.ALL: "All",
}


def tab_counts(stats: LecturerStats) -> dict[RoleFilter, int]:
    return {
        RoleFilter.EXAMINER: stats.examiner_count,
        RoleFilter.SUPERVISOR: stats.supervisor_count,
        RoleFilter.ALL: stats.total_presentations,
    }


def tabs_line(stats: LecturerStats, active: RoleFilter) -> str:
    counts = tab_counts(stats)
    parts = []
    for tab in (RoleFilter.EXAMINER, RoleFilter.SUPERVISOR, RoleFilter.ALL):
        label = f"{TAB_LABELS[tab]} ({counts[tab]})"
        parts.append(f"[{label}]" if tab is active else label)
    return "  ".join(parts)


def role_label(entry: ScheduleEntry, initials: str) -> str:
    if classify_role(entry, normalize_query(initials)) is Role.SUPERVISOR:
        return "Supervisor Role"
    return "Examiner Role"


def time_slot(entry: ScheduleEntry) -> str:
    if entry.end_time:
        return f"{entry.start_time} — {entry.end_time}"
    return entry.start_time


def entry_card(entry: ScheduleEntry, initials: str) -> list[str]:
    """
    Lines describing one session on the dashboard.
    """
    lines = [
        f"{entry.date} | {entry.student_name} | {role_label(entry, initials)}",
        f"  {entry.project_title or DEFAULT_PROJECT_TITLE}",
        f"  Time: {time_slot(entry)} | Venue: {entry.location}",
    ]
    people = [f"Sup: {entry.supervisor}", f"Ex 1: {entry.examiner1}"]
    if entry.examiner2:
        people.append(f"Ex 2: {entry.examiner2}")
    lines.append("  " + " | ".join(people))
    return lines


def empty_tab_lines(role_filter: RoleFilter) -> list[str]:
    name = role_filter.value.lower()
    return [
        f"No {name} slots",
        f"You don't have any presentations scheduled as a {name} in the current record.",
    ]


def stats_lines(stats: LecturerStats) -> list[str]:
    return [
        f"As Examiner: {stats.examiner_count} | As Supervisor: {stats.supervisor_count}",
        f"Total Duty: {stats.total_presentations} | Ratio: {stats.supervisor_ratio}% Sup",
        "Venues: " + (", ".join(stats.locations) if stats.locations else "-"),
    ]


def preview_row(entry: ScheduleEntry) -> str:
    return (
        f"{entry.student_name} | {entry.supervisor} | {entry.examiner1} | "
        f"{entry.date} {entry.start_time} @ {entry.location}"
    )


def preview_lines(entries: list[ScheduleEntry]) -> list[str]:
    """
    Short overview of the stored schedule (first rows only).
    """
    if not entries:
        return ["No schedule data stored."]

    lines = [f"{len(entries)} records total"]
    lines.extend(preview_row(e) for e in entries[:PREVIEW_ROWS])
    if len(entries) > PREVIEW_ROWS:
        lines.append(f"+ {len(entries) - PREVIEW_ROWS} additional sessions in memory")
    return lines
