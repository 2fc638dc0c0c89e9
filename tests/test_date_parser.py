"""Tests for date parser."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta

from valecashback.utils.date_parser import parse_date


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date(" Today ") == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    assert parse_date("yesterday") == date.today() - timedelta(days=1)


def test_parse_this_month():
    """Test parsing 'this month' as its first day."""
    assert parse_date("this month") == date.today().replace(day=1)


def test_parse_last_month():
    """Test parsing 'last month' as its first day."""
    expected = (date.today() - relativedelta(months=1)).replace(day=1)
    assert parse_date("last month") == expected


def test_parse_invalid_date():
    """Test unparseable dates raise ValueError."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")
