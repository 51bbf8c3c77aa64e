"""
Feed date/time conversion.

Only two literal shapes are understood natively: ``YYYYMMDD`` and
``YYYYMMDDTHHMMSS`` with an optional ``Z``. A trailing ``Z`` means UTC;
anything else is read as wall-clock time in the viewer's zone. ``TZID``
parameters are not honoured. Everything that touches zones goes through
this module, so a zone-aware replacement only has to keep `parse_ics_time`.
"""
import re
import warnings
from datetime import datetime

import pytz
from dateutil import parser as duparser
from loguru import logger

import marquee.settings as settings
from marquee.errors import MalformedFieldWarning

ICS_TIME_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})(?:T(\d{2})(\d{2})(\d{2})(Z)?)?$")


def _localize(dt: datetime, tz_local) -> datetime:
    # Naive datetimes get local tzinfo attached
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz_local)
    return dt


def _malformed(value: str, reason) -> None:
    logger.warning("Unparseable date {!r}: {}", value, reason)
    warnings.warn(
        MalformedFieldWarning(f"Unparseable date {value!r}: {reason}"),
        stacklevel=3,
    )


def _representable(dt: datetime, value: str, tz_local):
    # Near year 1 or 9999 the UTC or local reading can leave the datetime range
    try:
        dt.astimezone(pytz.UTC)
        dt.astimezone(tz_local)
    except (OverflowError, ValueError) as e:
        _malformed(value, e)
        return None
    return dt


def parse_ics_time(value, tz_local=None):
    """
    Turn a feed date/time string into a timezone-aware datetime, or None.

    - ``20240315``         -> 2024-03-15 00:00 in `tz_local`
    - ``20240315T200000``  -> 2024-03-15 20:00 in `tz_local`
    - ``20240315T200000Z`` -> 2024-03-15 20:00 UTC
    - anything else is handed to dateutil; failures give None, never an exception.
    """
    if tz_local is None:
        tz_local = settings.TZ_LOCAL
    if not value:
        return None
    s = value.strip()

    m = ICS_TIME_RE.match(s)
    if m:
        y, mo, d, hh, mm, ss, z = m.groups()
        try:
            dt = datetime(int(y), int(mo), int(d), int(hh or 0), int(mm or 0), int(ss or 0))
        except ValueError as e:
            _malformed(value, e)
            return None
        dt = pytz.UTC.localize(dt) if z else _localize(dt, tz_local)
        return _representable(dt, value, tz_local)

    try:
        dt = duparser.parse(s)
    except (ValueError, OverflowError) as e:
        _malformed(value, e)
        return None
    return _representable(_localize(dt, tz_local), value, tz_local)
