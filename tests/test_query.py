"""
Unit tests for the lecturer lookup.

Definition used here:
- Matching is case-insensitive substring containment on a trimmed query.
- Supervisor match wins; every matched entry has exactly one role.
"""

import unittest

from schedulehub.model import Role, RoleFilter
from schedulehub.query import classify_role, matches, normalize_query, project, search
from tests.helpers import make_entry


class TestSearchScenarios(unittest.TestCase):
    def setUp(self) -> None:
        self.store = [make_entry("1", "Dr. A", "Dr. B")]

    def test_examiner_match(self) -> None:
        result = search(self.store, "b")
        self.assertIsNotNone(result)
        assert result is not None

        self.assertEqual(len(result.entries), 1)
        self.assertIs(classify_role(result.entries[0], "b"), Role.EXAMINER)
        self.assertEqual(result.stats.total_presentations, 1)
        self.assertEqual(result.stats.supervisor_count, 0)
        self.assertEqual(result.stats.examiner_count, 1)
        self.assertEqual(result.stats.locations, ["Hall A"])
        self.assertIs(result.initial_filter, RoleFilter.EXAMINER)

    def test_supervisor_match(self) -> None:
        result = search(self.store, "a")
        assert result is not None

        self.assertEqual(result.stats.supervisor_count, 1)
        self.assertEqual(result.stats.examiner_count, 0)
        self.assertIs(result.initial_filter, RoleFilter.SUPERVISOR)

    def test_no_match_returns_none(self) -> None:
        self.assertIsNone(search(self.store, "zz"))

    def test_blank_query_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            search(self.store, "   ")


class TestMatching(unittest.TestCase):
    def test_query_is_trimmed_and_case_insensitive(self) -> None:
        entry = make_entry("1", "Dr. AJ Lim", "Prof. K")
        self.assertTrue(matches(entry, normalize_query("  aj ")))

    def test_examiner2_is_searched(self) -> None:
        entry = make_entry("1", "Dr. S", "Prof. K", examiner2="Dr. AJ Smith")
        self.assertTrue(matches(entry, "aj"))

    def test_missing_examiner2_does_not_match(self) -> None:
        entry = make_entry("1", "Dr. S", "Prof. K", examiner2=None)
        self.assertFalse(matches(entry, "aj"))

    def test_supervisor_wins_over_examiner(self) -> None:
        entry = make_entry("1", "Dr. AJ", "Dr. AJ", examiner2="Dr. AJ")
        self.assertIs(classify_role(entry, "aj"), Role.SUPERVISOR)


class TestStatsAndProjection(unittest.TestCase):
    def setUp(self) -> None:
        self.store = [
            make_entry("1", "Dr. AJ", "Prof. K", location="Hall A"),
            make_entry("2", "Dr. S", "Dr. AJ", location="Room 2"),
            make_entry("3", "Prof. K", "Dr. S", examiner2="Dr. AJ", location="Hall A"),
            make_entry("4", "Prof. Z", "Dr. S", location="Room 9"),
            make_entry("5", "Dr. aj", "Dr. AJ", location="Lab 1"),
        ]
        result = search(self.store, "AJ")
        assert result is not None
        self.result = result

    def test_roles_add_up(self) -> None:
        stats = self.result.stats
        self.assertEqual(stats.total_presentations, 4)
        self.assertEqual(stats.supervisor_count, 2)
        self.assertEqual(stats.examiner_count, 2)
        self.assertEqual(stats.supervisor_count + stats.examiner_count, stats.total_presentations)
        self.assertEqual(stats.supervisor_ratio, 50)

    def test_locations_distinct_first_seen(self) -> None:
        self.assertEqual(self.result.stats.locations, ["Hall A", "Room 2", "Lab 1"])

    def test_all_keeps_store_order(self) -> None:
        shown = project(self.result.entries, RoleFilter.ALL, "AJ")
        self.assertEqual([e.id for e in shown], ["1", "2", "3", "5"])

    def test_role_tabs_partition_all(self) -> None:
        sup = project(self.result.entries, RoleFilter.SUPERVISOR, "AJ")
        exa = project(self.result.entries, RoleFilter.EXAMINER, "AJ")
        sup_ids = {e.id for e in sup}
        exa_ids = {e.id for e in exa}

        self.assertEqual(sup_ids & exa_ids, set())
        self.assertEqual(sup_ids | exa_ids, {e.id for e in self.result.entries})
        self.assertEqual(len(sup), self.result.stats.supervisor_count)
        self.assertEqual(len(exa), self.result.stats.examiner_count)


if __name__ == "__main__":
    unittest.main()
