import sys
from datetime import date

from flask import Blueprint, Flask, Response, abort, request
from loguru import logger

import marquee.settings as settings
from marquee.calendar_loader import fetch_feed_text
from marquee.config import load_config
from marquee.errors import ConfigError, MarqueeError, UpstreamError
from marquee.ics_parser import parse_ics
from marquee.logger import configure_logging
from marquee.renderers import render_calendar_html, render_error_html
from marquee.utils import parse_month

feed = Blueprint('feed', __name__)


def _plain(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype="text/plain")


@feed.route("/ics")
def ics():
    """Relay the upstream feed so browsers can read it without knowing its address."""
    try:
        text = fetch_feed_text()
    except ConfigError as e:
        logger.error("{}", e)
        return _plain(
            "Missing CALENDAR_ICS_URL env var. Set it in the environment of the proxy.", 500
        )
    except UpstreamError as e:
        logger.warning("Feed fetch failed ({}): {}", e.status_code, e)
        return _plain(str(e), e.status_code)

    return Response(
        text,
        status=200,
        headers={
            "Content-Type": "text/calendar; charset=utf-8",
            "Access-Control-Allow-Origin": "*",
            "Cache-Control": f"public, max-age={settings.CACHE_MAX_AGE}",
        },
    )


@feed.route("/")
def month_page():
    month_arg = request.args.get("month", settings.TARGET_MONTH)
    try:
        reference: date = parse_month(month_arg, settings.TZ_LOCAL)
    except ValueError:
        abort(400, description=f"Invalid month {month_arg!r}, expected YYYY-MM.")

    try:
        events = parse_ics(fetch_feed_text())
    except MarqueeError as e:
        logger.error("Calendar error: {}", e)
        return render_error_html(str(e))
    return render_calendar_html(events, reference, load_config())


def create_app() -> Flask:
    configure_logging(level="WARNING", sink=sys.stderr)
    app = Flask(__name__)
    app.register_blueprint(feed)
    return app
