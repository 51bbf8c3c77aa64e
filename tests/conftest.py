import pytest
from dateutil import tz


FRIDAY_FEED = (
    "BEGIN:VCALENDAR\r\n"
    "VERSION:2.0\r\n"
    "BEGIN:VEVENT\r\n"
    "SUMMARY:Friday Night\r\n"
    "DTSTART:20240315T200000Z\r\n"
    "DESCRIPTION:Poster: https://x.test/a.jpg\r\n"
    "END:VEVENT\r\n"
    "END:VCALENDAR\r\n"
)


@pytest.fixture
def utc():
    return tz.UTC


@pytest.fixture
def new_york():
    return tz.gettz("America/New_York")


@pytest.fixture
def friday_feed():
    return FRIDAY_FEED
