"""Calculs de dates"""
from datetime import date

from utils.date_utils import add_months, last_n_months, month_start, months_between


class TestDateUtils:
    def test_add_months_end_of_month(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_month_start(self):
        assert month_start(date(2024, 6, 15)) == date(2024, 6, 1)

    def test_last_n_months(self):
        months = last_n_months(date(2024, 2, 10), 3)
        assert months == [date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1)]

    def test_months_between_counts_full_months(self):
        assert months_between(date(2023, 1, 1), date(2024, 1, 1)) == 12
        assert months_between(date(2023, 1, 1), date(2024, 1, 2)) == 12
        assert months_between(date(2024, 1, 15), date(2025, 1, 10)) == 11
