import re

import requests
from loguru import logger

import marquee.settings as settings
from marquee.errors import ConfigError, UpstreamError
from marquee.ics_parser import parse_ics

URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def download_calendar(source: str) -> str:
    """
    Fetch ICS text from a URL or file path.
    """
    if URL_RE.match(source):
        try:
            resp = requests.get(
                source,
                headers={"User-Agent": settings.USER_AGENT},
                timeout=settings.FETCH_TIMEOUT,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"Proxy error: {e}") from e
        if not resp.ok:
            raise UpstreamError(f"Upstream error: {resp.reason}", status_code=resp.status_code)
        return resp.text
    else:
        try:
            with open(source, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError as e:
            raise UpstreamError(f"Upstream error: {source} not found", status_code=404) from e
        except OSError as e:
            raise UpstreamError(f"Proxy error: {e}") from e


def fetch_feed_text(source: str | None = None) -> str:
    """
    Return the raw feed text from `source`, defaulting to CALENDAR_ICS_URL.

    Raises ConfigError when nothing is configured and UpstreamError when the
    source is unreachable or answers with a non-success status.
    """
    source = (source or settings.CALENDAR_ICS_URL or "").strip()
    if not source:
        raise ConfigError(
            "Missing CALENDAR_ICS_URL env var. Set it to the public ICS address of the calendar."
        )
    logger.debug("Fetching calendar feed...")
    text = download_calendar(source)
    logger.debug("Fetched {} bytes of feed text", len(text))
    return text


def load_events(source: str | None = None, tz_local=None) -> list:
    """Fetch and parse in one step."""
    return parse_ics(fetch_feed_text(source), tz_local)
