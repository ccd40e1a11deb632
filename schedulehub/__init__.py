"""ScheduleHub – lecturer presentation timetable (CLI + interactive)."""
