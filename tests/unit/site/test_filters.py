#!/usr/bin/env python3
"""
test_filters.py
---------------
Tests for the Jinja2 site filters.
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from blog.site import filters


class TestTimeFilters:
    """Posting time formatting."""

    def test_friendly_time(self):
        """Weekday, month, day and year."""
        moment = datetime(2020, 1, 5, 12, 0, tzinfo=timezone.utc)
        assert filters.friendly_time(moment) == "Sunday January 5, 2020"

    def test_friendly_time_converts_to_utc(self):
        """Other offsets are shown in UTC."""
        moment = datetime(2020, 1, 5, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert filters.friendly_time(moment) == "Monday January 6, 2020"

    def test_friendly_time_none(self):
        """Unposted entries have a placeholder."""
        assert filters.friendly_time(None) == "Unposted"

    def test_datetime_attr(self):
        """Machine-readable UTC timestamp."""
        moment = datetime(2020, 2, 10, 8, 5, 3, tzinfo=timezone.utc)
        assert filters.datetime_attr(moment) == "2020-02-10T08:05:03Z"

    def test_datetime_attr_naive_and_date(self):
        """Naive datetimes are taken as UTC; dates as midnight."""
        assert filters.datetime_attr(datetime(2020, 2, 10, 8)) == "2020-02-10T08:00:00Z"
        assert filters.datetime_attr(date(2020, 2, 10)) == "2020-02-10T00:00:00Z"
        assert filters.datetime_attr(None) == ""


class TestPathFilters:
    """Archive and pagination URLs."""

    def test_month_display(self):
        assert filters.month_display(2020, 2) == "February 2020"

    def test_year_and_month_paths(self):
        """Months are zero-padded."""
        assert filters.year_path(2020) == "/entries/in/2020"
        assert filters.month_path(2020, 2) == "/entries/in/2020/02"
        assert filters.month_path(2020, 11) == "/entries/in/2020/11"

    def test_comments_url(self):
        assert filters.comments_url("/entry/hello") == "/entry/hello#disqus_thread"

    @pytest.mark.parametrize("page,expected", [(0, "/"), (1, "/"), (2, "/home/2"), (10, "/home/10")])
    def test_page_path(self, page, expected):
        """Page 1 is the site root."""
        assert filters.page_path(page) == expected
