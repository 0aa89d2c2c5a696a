from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from ..core.constants import ISO_DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def is_iso_date(value: str | None) -> bool:
    """True only for a real calendar date written exactly as YYYY-MM-DD."""
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        parse_iso_date(value)
    except ValueError:
        return False
    return True


def short_label(value: date) -> str:
    """Chart label, e.g. "Jan 5"."""
    return f"{value:%b} {value.day}"


def long_label(value: str) -> str:
    """Table label for an ISO date, e.g. "Jan 5, 2024"; unparseable input is returned as-is."""
    try:
        d = parse_iso_date(value)
    except (TypeError, ValueError):
        return value or ""
    return f"{d:%b} {d.day}, {d.year}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


class Clock(Protocol):
    def today(self) -> date:
        raise NotImplementedError


class SystemClock:
    """Local calendar date of the running process."""

    def today(self) -> date:
        return now_local().date()


@dataclass(frozen=True)
class FixedClock:
    fixed: date

    def today(self) -> date:
        return self.fixed
