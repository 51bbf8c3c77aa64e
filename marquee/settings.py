import os
from dateutil import tz
from pathlib import Path


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# Project root
BASE_DIR = Path(__file__).resolve().parent.parent

# File paths
CONFIG_PATH  = Path(os.getenv("APP_CONFIG_PATH", str(BASE_DIR / "config.yaml")))
META_FILE    = Path(os.getenv("APP_META_FILE_PATH", str(BASE_DIR / "feeds_meta.yaml")))
OUTPUT_HTML  = os.getenv("APP_OUTPUT_HTML_PATH", "output/calendar.html")
TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

# Feed source
CALENDAR_ICS_URL = os.getenv("CALENDAR_ICS_URL", "").strip()
USER_AGENT       = os.getenv("FEED_USER_AGENT", "tpc-ics-proxy")
FETCH_TIMEOUT    = float(os.getenv("FEED_TIMEOUT", "30"))
CACHE_MAX_AGE    = int(os.getenv("FEED_CACHE_MAX_AGE", "300"))  # 5 min

# Empty TZ means the viewer's own zone
TIMEZONE = os.getenv("TZ", "")
TZ_LOCAL = (tz.gettz(TIMEZONE) if TIMEZONE else tz.tzlocal()) or tz.tzutc()
TARGET_MONTH = os.getenv("APP_TARGET_MONTH", "this month")

# Page
WEEK_START        = os.getenv("DOC_WEEK_START", "monday").lower()
PLACEHOLDER_TEXT  = os.getenv("DOC_PLACEHOLDER_TEXT", "TPC")
EMPTY_DESCRIPTION = os.getenv("DOC_EMPTY_DESCRIPTION", "Details to be announced.")
FOOTER_NOTE = os.getenv(
    "DOC_FOOTER_NOTE",
    "Private address — shared with approved invitees. Members free; $10 one-night; "
    "$25 monthly. Club approves memberships in person.",
)

# Behavior
FORCE_REFRESH = _flag("APP_FORCE_REFRESH", "false")
