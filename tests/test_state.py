"""
Tests for the view state machine.

Every transition returns a new AppState; the input state is never changed.
Store-touching transitions use a temporary schedule file.
"""

import tempfile
import unittest
from concurrent.futures import Future
from dataclasses import replace
from pathlib import Path

from schedulehub.model import AppView, RoleFilter
from schedulehub.state import (
    AppState,
    IngestionBusy,
    attach_advice,
    begin_ingestion,
    clear_data,
    collect_advice,
    finish_ingestion,
    initial_state,
    navigate,
    submit_search,
    switch_tab,
)
from schedulehub.storage import load_schedule, save_schedule
from tests.helpers import make_entry


def _done(value):
    f = Future()
    f.set_result(value)
    return f


class TestSearchTransitions(unittest.TestCase):
    def setUp(self) -> None:
        self.state = AppState(entries=[make_entry("1", "Dr. A", "Dr. B")])

    def test_blank_initials_is_noop(self) -> None:
        self.assertIs(submit_search(self.state, "   "), self.state)
        self.assertIs(submit_search(self.state, ""), self.state)

    def test_not_found_stays_on_landing(self) -> None:
        new = submit_search(self.state, "zz")
        self.assertIs(new.view, AppView.LANDING)
        self.assertIsNone(new.result)
        self.assertEqual(new.entries, self.state.entries)
        self.assertIn("zz", new.notice)

    def test_found_opens_dashboard_with_initial_tab(self) -> None:
        new = submit_search(self.state, "b")
        self.assertIs(new.view, AppView.DASHBOARD)
        self.assertIs(new.role_filter, RoleFilter.EXAMINER)
        self.assertEqual([e.id for e in new.displayed()], ["1"])
        # input state untouched
        self.assertIs(self.state.view, AppView.LANDING)

        sup = submit_search(self.state, "a")
        self.assertIs(sup.role_filter, RoleFilter.SUPERVISOR)

    def test_switch_tab(self) -> None:
        dash = submit_search(self.state, "b")
        sup_tab = switch_tab(dash, RoleFilter.SUPERVISOR)
        self.assertEqual(sup_tab.displayed(), [])
        all_tab = switch_tab(dash, RoleFilter.ALL)
        self.assertEqual(len(all_tab.displayed()), 1)

        # tabs only exist on the dashboard
        self.assertIs(switch_tab(self.state, RoleFilter.ALL), self.state)


class TestNavigation(unittest.TestCase):
    def test_dashboard_needs_a_result(self) -> None:
        state = AppState()
        self.assertIs(navigate(state, AppView.DASHBOARD), state)

    def test_any_view_to_admin_and_landing(self) -> None:
        state = submit_search(AppState(entries=[make_entry("1", "Dr. A", "Dr. B")]), "a")
        admin = navigate(state, AppView.ADMIN)
        self.assertIs(admin.view, AppView.ADMIN)
        self.assertIs(navigate(admin, AppView.LANDING).view, AppView.LANDING)


class TestAdvice(unittest.TestCase):
    def setUp(self) -> None:
        self.dash = submit_search(AppState(entries=[make_entry("1", "Dr. A", "Dr. B")]), "a")

    def test_pending_task_is_kept(self) -> None:
        state = attach_advice(self.dash, Future())
        self.assertIs(collect_advice(state), state)

    def test_finished_task_fills_advice(self) -> None:
        state = collect_advice(attach_advice(self.dash, _done("Busy day ahead.")))
        self.assertEqual(state.advice, "Busy day ahead.")
        self.assertIsNone(state.advice_task)

    def test_failed_task_gives_no_advice(self) -> None:
        f = Future()
        f.set_exception(RuntimeError("boom"))
        state = collect_advice(attach_advice(self.dash, f))
        self.assertEqual(state.advice, "")

    def test_result_discarded_after_leaving_dashboard(self) -> None:
        state = attach_advice(self.dash, Future())
        left = navigate(state, AppView.LANDING)
        self.assertIsNone(left.advice_task)
        self.assertEqual(collect_advice(left).advice, "")


class TestIngestionAndClear(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "schedule.json"
        save_schedule([make_entry("old", "Dr. A", "Dr. B")], self.path)
        self.state = navigate(initial_state(self.path), AppView.ADMIN)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_initial_state_loads_store(self) -> None:
        self.assertEqual([e.id for e in self.state.entries], ["old"])

    def test_blank_text_is_noop(self) -> None:
        self.assertIs(begin_ingestion(self.state, "  \n "), self.state)

    def test_only_one_ingestion_in_flight(self) -> None:
        busy = begin_ingestion(self.state, "rows")
        self.assertTrue(busy.processing)
        with self.assertRaises(IngestionBusy):
            begin_ingestion(busy, "more rows")

    def test_successful_ingestion_replaces_store(self) -> None:
        busy = begin_ingestion(self.state, "rows")
        new = finish_ingestion(busy, [make_entry("n1", "Dr. C", "Dr. D"), make_entry("n2", "Dr. E", "Dr. F")])

        self.assertIs(new.view, AppView.LANDING)
        self.assertFalse(new.processing)
        self.assertEqual([e.id for e in new.entries], ["n1", "n2"])
        self.assertEqual([e.id for e in load_schedule(self.path)], ["n1", "n2"])

    def test_failed_ingestion_keeps_store(self) -> None:
        busy = begin_ingestion(self.state, "rows")
        new = finish_ingestion(busy, [])

        self.assertIs(new.view, AppView.ADMIN)
        self.assertFalse(new.processing)
        self.assertTrue(new.notice)
        self.assertEqual([e.id for e in new.entries], ["old"])
        self.assertEqual([e.id for e in load_schedule(self.path)], ["old"])

    def test_unwritable_store_keeps_old_schedule(self) -> None:
        blocker = Path(self._tmp.name) / "not_a_dir"
        blocker.write_text("x", encoding="utf-8")
        state = replace(self.state, store_path=blocker / "schedule.json")

        new = finish_ingestion(begin_ingestion(state, "rows"), [make_entry("n1", "Dr. C", "Dr. D")])

        self.assertIs(new.view, AppView.ADMIN)
        self.assertFalse(new.processing)
        self.assertIn("error", new.notice)
        self.assertEqual([e.id for e in new.entries], ["old"])
        self.assertEqual([e.id for e in load_schedule(self.path)], ["old"])

    def test_clear_requires_confirmation(self) -> None:
        self.assertIs(clear_data(self.state, confirmed=False), self.state)
        self.assertTrue(self.path.exists())

        cleared = clear_data(self.state, confirmed=True)
        self.assertIs(cleared.view, AppView.ADMIN)
        self.assertEqual(cleared.entries, [])
        self.assertFalse(self.path.exists())


if __name__ == "__main__":
    unittest.main()
