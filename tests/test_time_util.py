"""Tests for wait-time formatting and date parsing."""

from datetime import date, datetime, timedelta

import pytest

from clinic_queue.utils.time_util import format_wait_time, parse_datetime, parse_date

CHECK_IN = datetime(2026, 3, 2, 9, 0, 0)


class TestFormatWaitTime:

    def test_not_checked_in(self):
        assert format_wait_time(None, None, now=CHECK_IN) == 'Not checked in'

    def test_single_minute(self):
        assert format_wait_time(CHECK_IN, now=CHECK_IN + timedelta(seconds=90)) == '1 min'

    def test_minutes_round_down(self):
        assert format_wait_time(CHECK_IN, now=CHECK_IN + timedelta(minutes=45, seconds=59)) == '45 mins'

    def test_zero_minutes(self):
        assert format_wait_time(CHECK_IN, now=CHECK_IN) == '0 mins'

    def test_hours_and_minutes(self):
        assert format_wait_time(CHECK_IN, now=CHECK_IN + timedelta(hours=2, minutes=5)) == '2 hrs 5 mins'
        assert format_wait_time(CHECK_IN, now=CHECK_IN + timedelta(hours=1, minutes=1)) == '1 hr 1 min'
        assert format_wait_time(CHECK_IN, now=CHECK_IN + timedelta(hours=1)) == '1 hr 0 mins'

    def test_wait_stops_at_consultation_start(self):
        started = CHECK_IN + timedelta(minutes=20)
        later = CHECK_IN + timedelta(hours=3)
        assert format_wait_time(CHECK_IN, started, now=later) == '20 mins'

    def test_clock_skew_is_clamped(self):
        assert format_wait_time(CHECK_IN, now=CHECK_IN - timedelta(minutes=5)) == '0 mins'


class TestParsing:

    def test_parse_naive_datetime(self):
        assert parse_datetime('2026-03-02T10:30:00') == datetime(2026, 3, 2, 10, 30)

    def test_parse_zulu_datetime(self):
        assert parse_datetime('2026-03-02T10:30:00Z') == datetime(2026, 3, 2, 10, 30)

    def test_offset_is_converted_to_utc(self):
        assert parse_datetime('2026-03-02T12:30:00+02:00') == datetime(2026, 3, 2, 10, 30)

    def test_invalid_datetime(self):
        with pytest.raises(ValueError):
            parse_datetime('next tuesday')

    def test_parse_date_accepts_datetime_strings(self):
        assert parse_date('1980-05-15') == date(1980, 5, 15)
        assert parse_date('1980-05-15T00:00:00.000Z') == date(1980, 5, 15)
