import calendar
import os
from datetime import date

from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger
from markupsafe import Markup, escape

import marquee.settings as settings
from marquee.config import classify, load_config
from marquee.event_processing import build_day_index, day_key, sort_day
from marquee.layout import day_labels, month_matrix
from marquee.models import Event
from marquee.posters import HTTP_URL_RE
from marquee.utils import fmt_long_date

_env = Environment(
    loader=FileSystemLoader(str(settings.TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def description_html(desc: str) -> Markup:
    """Escape the description and turn its line breaks into <br>."""
    return Markup("<br>").join(escape(line) for line in desc.split("\n"))


def _event_view(ev: Event, key: str, categories: list[dict], tz_local) -> dict:
    start = ev.start_date.astimezone(tz_local) if ev.start_date else None
    return {
        "title": ev.title,
        "poster": ev.poster,
        "cls": classify(ev.title, categories),
        "key": key,
        "when": fmt_long_date(start) if start else "",
        "location": ev.location,
        # only http(s) links may become an href
        "url": ev.url if HTTP_URL_RE.match(ev.url) else "",
        "desc_html": description_html(ev.description) if ev.description else "",
    }


def build_month_view(events: list[Event], reference: date, config: dict | None = None,
                     tz_local=None, week_start: str | None = None) -> dict:
    """
    Everything the month template needs for the month containing `reference`.
    """
    config = config or load_config()
    tz_local = tz_local or settings.TZ_LOCAL
    categories = config.get("categories", [])
    year, month = reference.year, reference.month

    by_day = build_day_index(events, tz_local)
    weeks = []
    n_items = 0
    for week in month_matrix(year, month, week_start):
        row = []
        for d in week:
            k = day_key(d)
            items = [_event_view(ev, k, categories, tz_local) for ev in sort_day(by_day.get(k, []))]
            n_items += len(items)
            row.append({
                "day": d.day,
                "key": k,
                "in_month": d.month == month,
                "events": items,
            })
        weeks.append(row)

    logger.debug("Month {}-{:02d}: {} events on the grid", year, month, n_items)
    return {
        "title": config.get("title") or "",
        "month_label": f"{calendar.month_name[month]} {year}",
        "categories": categories,
        "day_labels": day_labels(week_start),
        "weeks": weeks,
        "placeholder": settings.PLACEHOLDER_TEXT,
        "empty_description": settings.EMPTY_DESCRIPTION,
        "footer_note": settings.FOOTER_NOTE,
    }


def render_calendar_html(events: list[Event], reference: date, config: dict | None = None,
                         tz_local=None, week_start: str | None = None) -> str:
    view = build_month_view(events, reference, config, tz_local, week_start)
    return _env.get_template("calendar.html").render(**view)


def render_error_html(message: str) -> str:
    return _env.get_template("error.html").render(message=message)


def write_html(html: str, out_path: str) -> str:
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(html)
    return out_path
