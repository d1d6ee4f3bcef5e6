"""Calendar month utilities"""

from datetime import date
from dateutil.relativedelta import relativedelta


def add_months(from_date: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the end of the target month"""
    return from_date + relativedelta(months=months)


def month_key(value: date) -> int:
    """Months elapsed since year 0, so consecutive months differ by exactly 1"""
    return value.year * 12 + value.month - 1


def same_month(a: date, b: date) -> bool:
    """True when both dates fall in the same calendar year and month (day ignored)"""
    return month_key(a) == month_key(b)
