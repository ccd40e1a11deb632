"""
Application state and its transitions.

AppState is the single owner of everything the UI shows: the current view,
the loaded schedule and the last search. Every function here takes a state
and returns a new one; nothing is mutated in place, so the transitions can
be tested without any rendering.

Views:

    LANDING   --search ok-->   DASHBOARD
    LANDING   --not found-->   LANDING (notice)
    any       --navigate-->    LANDING / ADMIN
    ADMIN     --ingest ok-->   LANDING
    ADMIN     --ingest fail--> ADMIN (notice)
    ADMIN     --clear-->       ADMIN
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional

from schedulehub.model import AppView, RoleFilter, ScheduleEntry, SearchResult
from schedulehub.query import normalize_query, project, search
from schedulehub.storage import clear_schedule, load_schedule, save_schedule

logger = logging.getLogger(__name__)


class IngestionBusy(RuntimeError):
    """Raised when an ingestion is submitted while another one is running."""


@dataclass(frozen=True)
class AppState:
    view: AppView = AppView.LANDING
    entries: List[ScheduleEntry] = field(default_factory=list)
    store_path: Optional[Path] = None
    initials: str = ""
    result: Optional[SearchResult] = None
    role_filter: RoleFilter = RoleFilter.EXAMINER
    advice: str = ""
    advice_task: Optional[Future] = None
    processing: bool = False
    notice: str = ""

    def displayed(self) -> list[ScheduleEntry]:
        """Entries on the active role tab."""
        if self.result is None:
            return []
        return project(self.result.entries, self.role_filter, self.initials)


def initial_state(store_path: str | Path | None = None) -> AppState:
    path = Path(store_path) if store_path is not None else None
    return AppState(entries=load_schedule(path), store_path=path)


def navigate(state: AppState, view: AppView) -> AppState:
    if view is AppView.DASHBOARD and state.result is None:
        return state
    if view is AppView.DASHBOARD:
        return replace(state, view=view, notice="")
    # the pending advice belongs to the dashboard being left
    return replace(state, view=view, advice="", advice_task=None, notice="")


def submit_search(state: AppState, initials: str) -> AppState:
    """
    Search the loaded schedule. Blank initials leave the state untouched.
    """
    if not normalize_query(initials):
        return state

    result = search(state.entries, initials)
    if result is None:
        return replace(state, view=AppView.LANDING, notice=f"No schedule found for initials: {initials}")

    logger.debug("Found %d sessions for %r", result.stats.total_presentations, initials)
    return replace(
        state,
        view=AppView.DASHBOARD,
        initials=initials,
        result=result,
        role_filter=result.initial_filter,
        advice="",
        advice_task=None,
        notice="",
    )


def switch_tab(state: AppState, role_filter: RoleFilter) -> AppState:
    if state.view is not AppView.DASHBOARD:
        return state
    return replace(state, role_filter=role_filter)


def attach_advice(state: AppState, task: Future) -> AppState:
    return replace(state, advice_task=task)


def collect_advice(state: AppState) -> AppState:
    """
    Move a finished advice result into the state.

    The task is dropped when the view no longer is the dashboard it was
    started for, so late results are discarded.
    """
    task = state.advice_task
    if task is None or not task.done():
        return state
    if state.view is not AppView.DASHBOARD:
        return replace(state, advice_task=None)

    try:
        advice = task.result()
    except Exception as e:
        logger.warning("Advice task failed: %s", e)
        advice = ""
    return replace(state, advice=advice or "", advice_task=None)


def begin_ingestion(state: AppState, raw_text: str) -> AppState:
    if not raw_text.strip():
        return state
    if state.processing:
        raise IngestionBusy("an ingestion is already in progress")
    return replace(state, processing=True, notice="")


def finish_ingestion(state: AppState, entries: list[ScheduleEntry]) -> AppState:
    """
    Replace the whole schedule with the parsed entries.

    An empty parse result or a failed write leaves the store as it was and
    stays on ADMIN.
    """
    if not entries:
        return replace(
            state,
            view=AppView.ADMIN,
            processing=False,
            notice="Failed to extract valid schedule data. Please check your text format.",
        )

    try:
        save_schedule(entries, state.store_path)
    except OSError as e:
        logger.warning("Failed to save schedule: %s", e)
        return replace(
            state,
            view=AppView.ADMIN,
            processing=False,
            notice=f"An error occurred while saving the schedule: {e}",
        )

    return replace(
        state,
        view=AppView.LANDING,
        entries=list(entries),
        result=None,
        initials="",
        advice="",
        advice_task=None,
        processing=False,
        notice=f"Imported {len(entries)} sessions.",
    )


def clear_data(state: AppState, confirmed: bool) -> AppState:
    if not confirmed:
        return state
    clear_schedule(state.store_path)
    return replace(
        state,
        view=AppView.ADMIN,
        entries=[],
        result=None,
        initials="",
        advice="",
        advice_task=None,
        notice="All schedule data cleared.",
    )
