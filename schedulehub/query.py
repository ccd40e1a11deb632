"""
Lecturer lookup over the schedule.

Definition used here:
- A lecturer matches an entry if the lower-cased, trimmed initials are a
  substring of the supervisor, examiner1 or examiner2 field.
- An entry counts as SUPERVISOR if the initials are found in the supervisor
  field, otherwise as EXAMINER. Each entry gets exactly one role.
"""

from __future__ import annotations

from typing import Iterable, Optional

from schedulehub.model import LecturerStats, Role, RoleFilter, ScheduleEntry, SearchResult


def normalize_query(initials: str | None) -> str:
    return (initials or "").strip().lower()


def _contains(field: Optional[str], query: str) -> bool:
    return bool(field) and query in field.lower()


def matches(entry: ScheduleEntry, query: str) -> bool:
    """
    True if the normalized query appears in any of the three name fields.
    """
    return (
        _contains(entry.supervisor, query)
        or _contains(entry.examiner1, query)
        or _contains(entry.examiner2, query)
    )


def classify_role(entry: ScheduleEntry, query: str) -> Role:
    # supervisor wins even if the initials also appear as examiner
    if _contains(entry.supervisor, query):
        return Role.SUPERVISOR
    return Role.EXAMINER


def compute_stats(matched: list[ScheduleEntry], query: str) -> LecturerStats:
    supervisor_count = sum(1 for e in matched if classify_role(e, query) is Role.SUPERVISOR)

    # dict keeps insertion order -> first-seen order
    locations = list(dict.fromkeys(e.location for e in matched))

    return LecturerStats(
        total_presentations=len(matched),
        supervisor_count=supervisor_count,
        examiner_count=len(matched) - supervisor_count,
        locations=locations,
    )


def initial_filter(matched: list[ScheduleEntry], query: str) -> RoleFilter:
    """
    Show the examiner tab first if there is at least one examiner slot.
    """
    if any(classify_role(e, query) is Role.EXAMINER for e in matched):
        return RoleFilter.EXAMINER
    return RoleFilter.SUPERVISOR


def search(entries: Iterable[ScheduleEntry], initials: str) -> SearchResult | None:
    """
    Find all sessions of a lecturer.

    Returns None if nothing matches. Blank initials are rejected with
    ValueError; callers must treat them as a no-op instead of searching.
    """
    query = normalize_query(initials)
    if not query:
        raise ValueError("initials must not be blank")

    matched = [e for e in entries if matches(e, query)]
    if not matched:
        return None

    return SearchResult(
        initials=initials,
        entries=matched,
        stats=compute_stats(matched, query),
        initial_filter=initial_filter(matched, query),
    )


def project(entries: list[ScheduleEntry], role_filter: RoleFilter, initials: str) -> list[ScheduleEntry]:
    """
    Return the entries shown on one role tab, keeping store order.
    """
    if role_filter is RoleFilter.ALL:
        return list(entries)

    query = normalize_query(initials)
    wanted = Role.SUPERVISOR if role_filter is RoleFilter.SUPERVISOR else Role.EXAMINER
    return [e for e in entries if classify_role(e, query) is wanted]
