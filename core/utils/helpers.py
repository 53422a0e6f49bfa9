"""
leChef utility functions
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Dict, Optional, Union


# Slugs

def slugify(text: str) -> str:
    """Convert arbitrary text to a URL-friendly slug ("Pad Thai by Ann" -> "pad-thai-by-ann")."""
    s = str(text).lower().strip()
    s = re.sub(r"\s+", "-", s)
    s = re.sub(r"[^\w\-]+", "", s)
    s = re.sub(r"\-\-+", "-", s)
    s = s.strip("-")
    return s


# Week arithmetic

def week_start_for(day: Optional[Union[date, datetime]] = None) -> date:
    """Monday of the week containing ``day`` (today when omitted)."""
    if day is None:
        day = date.today()
    if isinstance(day, datetime):
        day = day.date()
    return day - timedelta(days=day.weekday())


def _short(day: date) -> str:
    return f"{day:%b} {day.day}"


def format_short_date(day: date) -> str:
    """'Jan 15'"""
    return _short(day)


def format_long_date(day: date) -> str:
    """'January 15, 2024'"""
    return f"{day:%B} {day.day}, {day.year}"


def format_week_date_range(week_start: date) -> Dict[str, str]:
    """Labels for a plan week: start ('Jan 15'), end ('Jan 21, 2024') and full start date."""
    end = week_start + timedelta(days=6)
    return {
        "start": format_short_date(week_start),
        "end": f"{_short(end)}, {end.year}",
        "full": format_long_date(week_start),
    }


def format_day_date(week_start: date, day_index: int) -> str:
    return format_short_date(week_start + timedelta(days=day_index))
