from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it easily.
    """
    return date.today()


def timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")
