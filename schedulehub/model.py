"""
Central data model definitions used across the project.

This module defines the canonical structure of schedule entries and the
values derived from them so that:
- the store, the query engine and the UI layers share the same field names
- the JSON file keeps the camelCase keys produced by the schedule parser
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class AppView(str, Enum):
    LANDING = "LANDING"
    DASHBOARD = "DASHBOARD"
    ADMIN = "ADMIN"


class Role(str, Enum):
    SUPERVISOR = "SUPERVISOR"
    EXAMINER = "EXAMINER"


class RoleFilter(str, Enum):
    ALL = "ALL"
    EXAMINER = "EXAMINER"
    SUPERVISOR = "SUPERVISOR"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


@dataclass
class ScheduleEntry:
    """
    Represents one scheduled presentation as stored in schedule.json.

    The date and times are kept as the parser returned them; they are
    displayed, never parsed into calendar types.
    """

    id: str
    student_name: str
    supervisor: str
    examiner1: str
    date: str
    start_time: str
    location: str
    end_time: str = ""
    examiner2: Optional[str] = None
    project_title: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleEntry":
        return cls(
            id=_text(data.get("id")),
            student_name=_text(data.get("studentName")),
            supervisor=_text(data.get("supervisor")),
            examiner1=_text(data.get("examiner1")),
            date=_text(data.get("date")),
            start_time=_text(data.get("startTime")),
            location=_text(data.get("location")),
            end_time=_text(data.get("endTime")),
            examiner2=_optional_text(data.get("examiner2")),
            project_title=_optional_text(data.get("projectTitle")),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "studentName": self.student_name,
            "supervisor": self.supervisor,
            "examiner1": self.examiner1,
            "examiner2": self.examiner2 or "",
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "location": self.location,
        }
        if self.project_title:
            out["projectTitle"] = self.project_title
        return out


@dataclass
class LecturerStats:
    """
    Aggregate numbers for one lecturer search. Recomputed on every search.
    """

    total_presentations: int
    supervisor_count: int
    examiner_count: int
    locations: List[str] = field(default_factory=list)

    @property
    def supervisor_ratio(self) -> int:
        """Share of supervisor sessions in percent (rounded)."""
        if not self.total_presentations:
            return 0
        return round(self.supervisor_count / self.total_presentations * 100)


@dataclass
class SearchResult:
    initials: str
    entries: List[ScheduleEntry]
    stats: LecturerStats
    initial_filter: RoleFilter
