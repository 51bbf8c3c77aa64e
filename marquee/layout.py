import calendar
from datetime import date, timedelta

import marquee.settings as settings

WEEKS_SHOWN = 6
DAY_LABELS = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']


def first_weekday(week_start: str | None = None) -> int:
    week_start = (week_start or settings.WEEK_START).lower()
    return calendar.SUNDAY if week_start.startswith("sun") else calendar.MONDAY


def day_labels(week_start: str | None = None) -> list[str]:
    fw = first_weekday(week_start)
    return DAY_LABELS[fw:] + DAY_LABELS[:fw]


def month_matrix(year: int, month: int, week_start: str | None = None) -> list[list[date]]:
    """
    Six rows of seven dates covering `month`, starting on the configured week day.
    Leading and trailing days come from the neighbouring months.
    """
    first = date(year, month, 1)
    offset = (first.weekday() - first_weekday(week_start)) % 7
    cur = first - timedelta(days=offset)
    weeks = []
    for _ in range(WEEKS_SHOWN):
        row = []
        for _ in range(7):
            row.append(cur)
            cur += timedelta(days=1)
        weeks.append(row)
    return weeks
