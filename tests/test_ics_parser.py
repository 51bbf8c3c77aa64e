from datetime import datetime

from dateutil import tz

from marquee.ics_parser import normalize_record, parse_ics, tokenize, unfold
from marquee.event_processing import build_day_index


def test_end_to_end_friday_night(friday_feed, utc):
    events = parse_ics(friday_feed, utc)
    assert len(events) == 1
    ev = events[0]
    assert ev.title == "Friday Night"
    assert ev.poster == "https://x.test/a.jpg"
    assert ev.start_date == datetime(2024, 3, 15, 20, 0, tzinfo=tz.UTC)
    assert ev.start_raw == "20240315T200000Z"
    assert ev.end_raw is None and ev.end_date is None
    assert list(build_day_index(events, utc)) == ["2024-03-15"]


def test_event_count_matches_balanced_blocks():
    feed = "\n".join(
        ["BEGIN:VCALENDAR"]
        + [f"BEGIN:VEVENT\nSUMMARY:Show {i}\nDTSTART:2024030{i}\nEND:VEVENT" for i in range(1, 5)]
        + ["END:VCALENDAR"]
    )
    assert [e.title for e in parse_ics(feed)] == ["Show 1", "Show 2", "Show 3", "Show 4"]


def test_unterminated_trailing_block_is_dropped():
    feed = "BEGIN:VEVENT\nSUMMARY:Kept\nEND:VEVENT\nBEGIN:VEVENT\nSUMMARY:Lost\n"
    assert [e.title for e in parse_ics(feed)] == ["Kept"]


def test_stray_end_and_outside_lines_are_ignored():
    feed = "SUMMARY:Outside\nEND:VEVENT\nBEGIN:VEVENT\nSUMMARY:Inside\nEND:VEVENT\nEND:VEVENT\n"
    events = parse_ics(feed)
    assert len(events) == 1
    assert events[0].title == "Inside"


def test_no_vevent_yields_empty_list():
    assert parse_ics("this is not a calendar at all") == []
    assert parse_ics("") == []


def test_folded_value_matches_unfolded_equivalent():
    folded = "BEGIN:VEVENT\r\nDESCRIPTION:A long line that\r\n  continues here\r\nEND:VEVENT\r\n"
    flat = "BEGIN:VEVENT\r\nDESCRIPTION:A long line that continues here\r\nEND:VEVENT\r\n"
    assert parse_ics(folded)[0].description == parse_ics(flat)[0].description
    assert parse_ics(folded)[0].description == "A long line that continues here"


def test_fold_with_tab_and_bare_newlines():
    assert unfold("SUMMARY:Mid\n\tnight\nURL:x") == "SUMMARY:Midnight\nURL:x"


def test_folded_poster_url_is_reassembled():
    feed = "BEGIN:VEVENT\nDESCRIPTION:Poster: https://x.te\n st/a.jpg\nEND:VEVENT\n"
    assert parse_ics(feed)[0].poster == "https://x.test/a.jpg"


def test_tokenize_strips_params_and_joins_repeats():
    feed = (
        "BEGIN:VEVENT\n"
        "dtstart;VALUE=DATE:20240315\n"
        "ATTENDEE;CN=A:mailto:a@example.com\n"
        "ATTENDEE;CN=B:mailto:b@example.com\n"
        "no colon here\n"
        "END:VEVENT\n"
    )
    [rec] = tokenize(feed)
    assert rec == {
        "DTSTART": "20240315",
        "ATTENDEE": "mailto:a@example.com\nmailto:b@example.com",
    }


def test_value_keeps_later_colons():
    [rec] = tokenize("BEGIN:VEVENT\nURL:https://example.org/a:b\nEND:VEVENT")
    assert rec["URL"] == "https://example.org/a:b"


def test_missing_summary_defaults_to_untitled():
    ev = normalize_record({"DTSTART": "20240315"})
    assert ev.title == "Untitled"


def test_fields_are_trimmed_and_description_unescaped():
    ev = normalize_record({
        "SUMMARY": "  Saturday Matinee ",
        "DESCRIPTION": "Line one\\nLine two",
        "URL": " https://club.test/e/1 ",
        "LOCATION": " Back room ",
    })
    assert ev.title == "Saturday Matinee"
    assert ev.description == "Line one\nLine two"
    assert ev.url == "https://club.test/e/1"
    assert ev.location == "Back room"
    assert ev.poster == "https://club.test/e/1"


def test_bad_date_keeps_event_without_start(recwarn):
    feed = "BEGIN:VEVENT\nSUMMARY:Mystery\nDTSTART:sometime soon\nEND:VEVENT\n"
    [ev] = parse_ics(feed)
    assert ev.title == "Mystery"
    assert ev.start_raw == "sometime soon"
    assert ev.start_date is None
    assert build_day_index([ev]) == {}


def test_all_day_event_lands_under_bare_key(new_york):
    feed = "BEGIN:VEVENT\nSUMMARY:Fest\nDTSTART;VALUE=DATE:20240316\nDTEND;VALUE=DATE:20240317\nEND:VEVENT\n"
    [ev] = parse_ics(feed, new_york)
    assert ev.start_raw == "20240316"
    assert ev.start_date == datetime(2024, 3, 16, tzinfo=new_york)
    assert ev.end_date == datetime(2024, 3, 17, tzinfo=new_york)


def test_edge_of_calendar_start_is_kept_off_the_grid(recwarn, new_york):
    feed = (
        "BEGIN:VEVENT\nSUMMARY:Ancient\nDTSTART:00010101T000000Z\nEND:VEVENT\n"
        "BEGIN:VEVENT\nSUMMARY:Friday Night\nDTSTART:20240315T200000Z\nEND:VEVENT\n"
    )
    ancient, friday = parse_ics(feed, new_york)
    assert ancient.start_date is None
    assert build_day_index([ancient, friday], new_york) == {"2024-03-15": [friday]}
