import hashlib
from datetime import datetime

from loguru import logger

import marquee.settings as settings
from marquee.models import Event

DayIndex = dict[str, list[Event]]


def day_key(d, tz_local=None) -> str:
    """
    YYYY-MM-DD of `d` as seen on the viewer's wall calendar.
    Plain dates are keyed as they are.
    """
    if isinstance(d, datetime):
        if tz_local is None:
            tz_local = settings.TZ_LOCAL
        if d.tzinfo is not None:
            d = d.astimezone(tz_local)
        d = d.date()
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def build_day_index(events: list[Event], tz_local=None) -> DayIndex:
    """
    Group events by the local date they start on, keeping input order within a day.
    Events without a start date, or one with no local date, are left out.
    """
    by_day: DayIndex = {}
    for ev in events:
        if ev.start_date is None:
            continue
        try:
            key = day_key(ev.start_date, tz_local)
        except OverflowError:
            logger.warning("Start of {!r} has no local date, leaving it off the grid", ev.title)
            continue
        by_day.setdefault(key, []).append(ev)
    return by_day


def sort_day(events: list[Event]) -> list[Event]:
    """Display order within one cell: alphabetical by title."""
    return sorted(events, key=lambda e: e.title.casefold())


def events_in_month(index: DayIndex, year: int, month: int) -> DayIndex:
    prefix = f"{year:04d}-{month:02d}-"
    return {k: v for k, v in index.items() if k.startswith(prefix)}


def compute_events_hash(events: list[Event]) -> str:
    """
    Stable digest of the parsed feed, used to skip regeneration when nothing changed.
    """
    h = hashlib.sha256()
    for ev in events:
        for part in (ev.title, ev.description, ev.url, ev.location,
                     ev.poster or "", ev.start_raw or "", ev.end_raw or ""):
            h.update(part.encode("utf-8"))
            h.update(b"\x1f")
        h.update(b"\x1e")
    return h.hexdigest()
