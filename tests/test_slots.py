# tests/test_slots.py
import unittest
from datetime import date, datetime, timedelta
from types import SimpleNamespace

from mentorlink.domain.availability.slots import (
    bookable_slots,
    combine_slot,
    day_of_week,
    find_window_for,
    fits_window,
    intervals_overlap,
    resolve_windows,
    windows_overlap,
)
from mentorlink.shared.validators import parse_date, split_list_input, validate_time


def window(day, start, end, id=None):
    return SimpleNamespace(id=id or f"w-{day}-{start}", day_of_week=day, start_time=start, end_time=end)


class TestDayOfWeek(unittest.TestCase):

    def test_sunday_is_zero(self):
        self.assertEqual(day_of_week(date(2025, 3, 9)), 0)

    def test_monday_is_one(self):
        self.assertEqual(day_of_week(date(2025, 3, 10)), 1)

    def test_saturday_is_six(self):
        self.assertEqual(day_of_week(date(2025, 3, 15)), 6)


class TestResolveWindows(unittest.TestCase):

    def setUp(self):
        self.windows = [
            window(0, "10:00", "11:00"),
            window(1, "09:00", "10:00"),
            window(1, "14:00", "15:30"),
            window(3, "08:00", "09:00"),
            window(6, "12:00", "13:00"),
        ]

    def test_returns_exactly_matching_weekday_for_every_day(self):
        start = date(2025, 3, 9)
        for offset in range(14):
            target = start + timedelta(days=offset)
            weekday = (target.weekday() + 1) % 7
            expected = [w for w in self.windows if w.day_of_week == weekday]
            self.assertEqual(resolve_windows(self.windows, target), expected, target)

    def test_monday_windows_in_input_order(self):
        resolved = resolve_windows(self.windows, date(2025, 3, 10))
        self.assertEqual([w.start_time for w in resolved], ["09:00", "14:00"])

    def test_no_windows_gives_empty(self):
        self.assertEqual(resolve_windows([], date(2025, 3, 10)), [])

    def test_day_without_windows_gives_empty(self):
        self.assertEqual(resolve_windows(self.windows, date(2025, 3, 14)), [])

    def test_bookable_slots(self):
        self.assertEqual(
            bookable_slots(self.windows, date(2025, 3, 10)),
            [("09:00", "10:00"), ("14:00", "15:30")],
        )


class TestSlotHelpers(unittest.TestCase):

    def test_combine_slot_is_local_wall_clock(self):
        self.assertEqual(combine_slot(date(2025, 3, 10), "09:00"), datetime(2025, 3, 10, 9, 0))

    def test_fits_window(self):
        self.assertTrue(fits_window("09:00", "10:00", "09:00", 60))
        self.assertFalse(fits_window("09:00", "10:00", "09:00", 90))
        self.assertFalse(fits_window("09:00", "10:00", "08:30", 30))

    def test_find_window_for(self):
        windows = [window(1, "09:00", "10:00"), window(1, "14:00", "15:30")]
        self.assertIs(find_window_for(windows, date(2025, 3, 10), "14:00", 90), windows[1])
        self.assertIsNone(find_window_for(windows, date(2025, 3, 11), "09:00", 30))

    def test_touching_intervals_do_not_overlap(self):
        nine = datetime(2025, 3, 10, 9)
        ten = datetime(2025, 3, 10, 10)
        eleven = datetime(2025, 3, 10, 11)
        self.assertFalse(intervals_overlap(nine, ten, ten, eleven))
        self.assertTrue(intervals_overlap(nine, eleven, ten, eleven))

    def test_windows_overlap_same_day_only(self):
        self.assertTrue(windows_overlap(window(1, "09:00", "10:00"), window(1, "09:30", "11:00")))
        self.assertFalse(windows_overlap(window(1, "09:00", "10:00"), window(2, "09:30", "11:00")))
        self.assertFalse(windows_overlap(window(1, "09:00", "10:00"), window(1, "10:00", "11:00")))


class TestValidators(unittest.TestCase):

    def test_split_list_input_drops_blank_items(self):
        self.assertEqual(split_list_input(""), [])
        self.assertEqual(split_list_input("  "), [])
        self.assertEqual(split_list_input("Python, , Leadership "), ["Python", "Leadership"])
        self.assertEqual(split_list_input([" Go ", ""]), ["Go"])

    def test_validate_time(self):
        self.assertEqual(validate_time("09:00"), "09:00")
        self.assertEqual(validate_time("09:00:00"), "09:00")
        with self.assertRaises(ValueError):
            validate_time("25:00")

    def test_parse_date(self):
        self.assertEqual(parse_date("2025-03-10"), date(2025, 3, 10))
        self.assertIsNone(parse_date(""))
        with self.assertRaises(ValueError):
            parse_date("10/03/2025")


if __name__ == "__main__":
    unittest.main()
