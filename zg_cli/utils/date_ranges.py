"""Date range parsing for history and export filters."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

import typer

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

EARLIEST = date(2000, 1, 1)


def validate_date(value: Optional[str]) -> Optional[str]:
    """Typer callback that validates YYYY-MM-DD format for date options."""
    if value is None:
        return value
    message = f"Invalid date '{value}'. Expected format: YYYY-MM-DD (e.g. 2026-01-15)"
    if not _DATE_RE.match(value):
        raise typer.BadParameter(message)
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise typer.BadParameter(message)
    return value


def parse_date(value: str) -> date:
    """Parse YYYY-MM-DD date string."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def resolve_date_range(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    last_days: Optional[int] = None,
    last_weeks: Optional[int] = None,
    this_week: bool = False,
    this_month: bool = False,
    today: Optional[date] = None,
) -> Tuple[date, date]:
    """Resolve CLI date flags into concrete start/end dates (default: everything)."""
    now = today or date.today()

    if start_date or end_date:
        start = parse_date(start_date) if start_date else EARLIEST
        end = parse_date(end_date) if end_date else now
        return start, end

    if last_days:
        return now - timedelta(days=max(last_days - 1, 0)), now
    if last_weeks:
        return now - timedelta(days=max(last_weeks * 7 - 1, 0)), now

    if this_week:
        start = now - timedelta(days=now.weekday())
        return start, start + timedelta(days=6)

    if this_month:
        start = date(now.year, now.month, 1)
        if now.month == 12:
            month_end = date(now.year + 1, 1, 1) - timedelta(days=1)
        else:
            month_end = date(now.year, now.month + 1, 1) - timedelta(days=1)
        return start, month_end

    return EARLIEST, now
