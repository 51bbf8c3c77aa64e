import sys
from collections import Counter

from loguru import logger

import marquee.settings as settings
from marquee.config import classify, load_config
from marquee.meta import load_meta, save_meta
from marquee.calendar_loader import fetch_feed_text
from marquee.errors import MarqueeError
from marquee.ics_parser import parse_ics
from marquee.event_processing import build_day_index, compute_events_hash, events_in_month
from marquee.utils import parse_month
from marquee.renderers import render_calendar_html, render_error_html, write_html
from marquee.logger import configure_logging


def main() -> int:
    # 0) Set up logs
    configure_logging()

    # 1) Determine local timezone and target month
    tz_local = settings.TZ_LOCAL
    logger.debug("Timezone: {}", settings.TIMEZONE or "system local")
    try:
        reference = parse_month(settings.TARGET_MONTH, tz_local)
    except ValueError as e:
        logger.error("Invalid APP_TARGET_MONTH {!r}: {}", settings.TARGET_MONTH, e)
        return 1
    anchor = reference.strftime("%Y-%m")
    out_path = settings.OUTPUT_HTML

    # 2) Load config, metadata, and the feed
    config = load_config()
    meta = load_meta()
    try:
        events = parse_ics(fetch_feed_text(), tz_local)
    except MarqueeError as e:
        logger.error("Calendar error: {}", e)
        write_html(render_error_html(str(e)), out_path)
        return 1

    # 3) Change detection
    new_hash = compute_events_hash(events)
    last_anchor = meta.get("_last_anchor")
    prev_hash = meta.get("events_hash")

    if not settings.FORCE_REFRESH and last_anchor == anchor and prev_hash == new_hash:
        logger.info("No changes for {}, skipping generation.", anchor)
        return 0

    if settings.FORCE_REFRESH:
        logger.info("FORCE_REFRESH set, refreshing...")
    elif last_anchor != anchor:
        logger.info("Month changed: {} → {}, refreshing...", last_anchor, anchor)
    else:
        logger.info("Events changed, refreshing...")

    undated = sum(1 for ev in events if ev.start_date is None)
    if undated:
        logger.warning("{} event(s) without a usable start date were left off the grid", undated)

    in_month = events_in_month(build_day_index(events, tz_local), reference.year, reference.month)
    counts = Counter(classify(ev.title, config["categories"]) for day in in_month.values() for ev in day)
    logger.debug("Event count by category for {}:", anchor)
    for name, cnt in counts.items():
        logger.debug("   • {}: {} events", name, cnt)

    # 4) Render and write
    html = render_calendar_html(events, reference, config, tz_local)
    write_html(html, out_path)
    logger.info("Wrote calendar to {}", out_path)

    # 5) Persist metadata
    save_meta({"_last_anchor": anchor, "events_hash": new_hash})
    logger.info("✅ Completed generation for {}", anchor)
    return 0


if __name__ == '__main__':
    sys.exit(main())
