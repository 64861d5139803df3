"""Date helpers for building availability windows"""
import datetime
from typing import Optional, Tuple

DATE_FORMAT = "%Y-%m-%d"


def utc_today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


def add_months(day: datetime.date, months: int) -> datetime.date:
    """Add calendar months to a date.

    Days past the end of the target month roll over into the following month,
    so 2023-12-31 plus two months is 2024-03-02.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1

    first_of_month = datetime.date(year, month, 1)
    return first_of_month + datetime.timedelta(days=day.day - 1)


def availability_window(
    months: int, today: Optional[datetime.date] = None
) -> Tuple[str, str]:
    """Return (start_date, end_date) formatted as YYYY-MM-DD"""
    if today is None:
        today = utc_today()

    end = add_months(today, months)
    return today.strftime(DATE_FORMAT), end.strftime(DATE_FORMAT)
