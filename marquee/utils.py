from datetime import datetime, date
import re
from loguru import logger
import webcolors
from dateutil.relativedelta import relativedelta


def css_color_to_hex(name_or_hex: str) -> str:
    """
    Convert a CSS color name, functional gray(%), or hex code to a hex code.

    - Leaves hex codes (including 3-digit shorthand) unchanged.
    - Parses CSS4 gray(%) syntax.
    - Falls back to standard CSS color names via webcolors.
    """

    if name_or_hex.startswith("#"):
        return name_or_hex

    lower = name_or_hex.lower().strip()

    m_pct = re.fullmatch(r'gray\(\s*([0-9]+(?:\.[0-9]+)?)%\s*\)', lower)
    if m_pct:
        pct = float(m_pct.group(1))
        level = round(255 * pct / 100)
        return f"#{level:02X}{level:02X}{level:02X}"

    try:
        return webcolors.name_to_hex(lower)
    except ValueError:
        logger.error("Unknown CSS color '{}', passing through.", name_or_hex)
        return name_or_hex


def parse_month(s: str, tzinfo) -> date:
    """
    Resolve a month string to the first day of that month.

    Accepts "this month" / "month", "next month", "last month", "+N months"
    and explicit "YYYY-MM" (or "YYYY-MM-DD", the day is ignored).
    """
    s     = s.strip().strip('"').strip("'").lower()
    today = datetime.now(tz=tzinfo).date()
    first = today.replace(day=1)

    if s in ("", "month", "this month", "today"):
        return first
    if s == "next month":
        return first + relativedelta(months=1)
    if s in ("last month", "previous month"):
        return first - relativedelta(months=1)
    if (m := re.fullmatch(r'(?P<sign>[+-])\s*(?P<num>\d+)\s*months?', s)):
        num = int(m.group("num"))
        return first + relativedelta(months=num if m.group("sign") == "+" else -num)
    if re.fullmatch(r'\d{4}-\d{1,2}', s):
        return datetime.strptime(s, "%Y-%m").date()
    return datetime.strptime(s, "%Y-%m-%d").date().replace(day=1)


def fmt_long_date(dt) -> str:
    """'Friday, Mar 15' as shown in the detail overlay."""
    return f"{dt:%A}, {dt:%b} {dt.day}"
