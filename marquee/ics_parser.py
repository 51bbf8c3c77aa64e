import re
from loguru import logger

from marquee.dates import parse_ics_time
from marquee.models import Event, RawRecord
from marquee.posters import extract_poster

BEGIN_EVT = "BEGIN:VEVENT"
END_EVT = "END:VEVENT"

# A line break followed by one space or tab continues the previous line
FOLD_RE = re.compile(r"\r?\n[ \t]")
LINE_BREAK_RE = re.compile(r"\r?\n")


def unfold(text: str) -> str:
    """
    Join folded lines. Runs over the whole text at once, before splitting.
    """
    return FOLD_RE.sub("", text)


def split_lines(text: str) -> list[str]:
    return LINE_BREAK_RE.split(text)


def tokenize(text: str) -> list[RawRecord]:
    """
    Group the logical lines between BEGIN:VEVENT and END:VEVENT into raw records.

    Lines outside a block, stray END:VEVENT markers and lines without a colon
    are ignored. A block still open at end of input is dropped.
    """
    records: list[RawRecord] = []
    cur = None
    for raw in split_lines(unfold(text or "")):
        line = raw.strip()
        if line == BEGIN_EVT:
            cur = {}
        elif line == END_EVT:
            if cur is not None:
                records.append(cur)
            cur = None
        elif cur is not None:
            key_raw, sep, val = line.partition(":")
            if not sep:
                continue
            # KEY;PARAM=X -> KEY
            key = key_raw.split(";", 1)[0].upper()
            cur[key] = f"{cur[key]}\n{val}" if key in cur else val

    if cur is not None:
        logger.debug("Dropping unterminated VEVENT with fields {}", sorted(cur))
    return records


def normalize_record(record: RawRecord, tz_local=None) -> Event:
    """
    Map one raw record onto an Event. Every field has a fallback, so this never raises.
    """
    title = (record.get("SUMMARY") or "Untitled").strip()
    desc = (record.get("DESCRIPTION") or "").replace("\\n", "\n")
    url = (record.get("URL") or "").strip()
    loc = (record.get("LOCATION") or "").strip()
    # All-day DTSTART;VALUE=DATE lands under the bare name after tokenizing
    start = record.get("DTSTART")
    end = record.get("DTEND")

    if start is None:
        logger.debug("Event {!r} has no DTSTART; it will not be placed on the grid.", title)

    return Event(
        title=title,
        description=desc,
        url=url,
        location=loc,
        poster=extract_poster(desc, url),
        start_raw=start,
        end_raw=end,
        start_date=parse_ics_time(start, tz_local),
        end_date=parse_ics_time(end, tz_local),
    )


def parse_ics(text: str, tz_local=None) -> list[Event]:
    """
    Parse feed text into Events, in feed order. Malformed input yields fewer
    or emptier events, never an exception.
    """
    events = [normalize_record(rec, tz_local) for rec in tokenize(text)]
    logger.debug("Parsed {} events from feed", len(events))
    return events
