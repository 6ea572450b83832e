"""Flexible parsing and formatting of dates, times of day and durations."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation

from dateutil import parser as _dateutil_parser

_WS = r"[\t\n\f\r ]"

_DAYS_AGO = re.compile(rf"([0-9]+){_WS}*days?{_WS}*ago")
_WEEKS_AGO = re.compile(rf"([0-9]+){_WS}*weeks?{_WS}*ago")
_MONTHS_AGO = re.compile(rf"([0-9]+){_WS}*months?{_WS}*ago")
_LAST_WEEKDAY = re.compile(
    rf"last{_WS}+(monday|tuesday|wednesday|thursday|friday|saturday|sunday)"
)

_TIME_OF_DAY = re.compile(rf"([0-9]{{1,2}}):([0-9]{{2}})(?:{_WS}*(am|pm))?")

_HOURS_MINUTES = re.compile(r"([0-9]+)h([0-9]+)m?")
_HOURS_ONLY = re.compile(r"([0-9]+(?:\.[0-9]+)?)h")
_MINUTES_ONLY = re.compile(r"([0-9]+)m")

_UNIT_PATTERN = "ns|us|\u00b5s|\u03bcs|ms|s|m|h"
_GO_COMPONENT = re.compile(rf"([0-9]*(?:\.[0-9]*)?)({_UNIT_PATTERN})")
_GO_DURATION = re.compile(rf"(?:[0-9]*(?:\.[0-9]*)?(?:{_UNIT_PATTERN}))+")
_GO_UNITS = {
    "ns": Decimal("1e-9"),
    "us": Decimal("1e-6"),
    "\u00b5s": Decimal("1e-6"),
    "\u03bcs": Decimal("1e-6"),
    "ms": Decimal("1e-3"),
    "s": Decimal(1),
    "m": Decimal(60),
    "h": Decimal(3600),
}

# Indexed the way the week is numbered elsewhere in the program: Sunday first.
_WEEKDAYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")


def _today() -> datetime:
    return datetime.combine(date.today(), time())


def _sunday_based_weekday(day: datetime) -> int:
    return (day.weekday() + 1) % 7


def _add_months(day: datetime, months: int) -> datetime:
    """Shift by whole months, letting an overflowing day roll into the next month."""
    year, month0 = divmod(day.year * 12 + day.month - 1 + months, 12)
    return datetime(year, month0 + 1, 1) + timedelta(days=day.day - 1)


def _last_weekday(today: datetime, target: int) -> datetime:
    days_back = _sunday_based_weekday(today) - target
    if days_back <= 0:
        days_back += 7
    return today - timedelta(days=days_back)


def _parse_relative(s: str, today: datetime) -> datetime | None:
    if s == "today":
        return today
    if s == "yesterday":
        return today - timedelta(days=1)
    if s == "tomorrow":
        return today + timedelta(days=1)
    if s == "last week":
        return today - timedelta(days=7)
    if s == "this week":
        weekday = _sunday_based_weekday(today) or 7
        return today - timedelta(days=weekday - 1)

    if match := _DAYS_AGO.fullmatch(s):
        return today - timedelta(days=int(match.group(1)))
    if match := _WEEKS_AGO.fullmatch(s):
        return today - timedelta(days=int(match.group(1)) * 7)
    if match := _MONTHS_AGO.fullmatch(s):
        return _add_months(today, -int(match.group(1)))
    if match := _LAST_WEEKDAY.fullmatch(s):
        return _last_weekday(today, _WEEKDAYS.index(match.group(1)))
    return None


def parse(s: str) -> datetime:
    """Parse a date given as a keyword, a relative phrase or a common format.

    Understands "today", "yesterday", "tomorrow", "last week", "this week",
    "N days/weeks/months ago", "last <weekday>" and anything the general
    date parser accepts, such as "2024-01-15". Raises ValueError otherwise.
    """
    s = s.lower().strip()
    try:
        result = _parse_relative(s, _today())
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"cannot parse date {s!r}: {exc}") from exc
    if result is not None:
        return result
    try:
        return _dateutil_parser.parse(s)
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"cannot parse date {s!r}: {exc}") from exc


def _parse_go_duration(s: str) -> timedelta:
    negative = s.startswith("-")
    body = s[1:] if s[:1] in ("+", "-") else s
    if body == "0":
        return timedelta(0)
    if not body or not _GO_DURATION.fullmatch(body):
        raise ValueError(f"cannot parse duration {s!r}")
    total = Decimal(0)
    for number, unit in _GO_COMPONENT.findall(body):
        if number in ("", "."):
            raise ValueError(f"cannot parse duration {s!r}")
        try:
            total += Decimal(number) * _GO_UNITS[unit]
        except InvalidOperation as exc:
            raise ValueError(f"cannot parse duration {s!r}") from exc
    if negative:
        total = -total
    try:
        return timedelta(seconds=float(total))
    except OverflowError as exc:
        raise ValueError(f"cannot parse duration {s!r}") from exc


def parse_duration(s: str) -> timedelta:
    """Parse "1.5h", "2h", "1h30m", "90m" or a unit-suffixed duration like "1h30m15s"."""
    s = s.lower().strip()

    if match := _HOURS_MINUTES.fullmatch(s):
        return timedelta(hours=int(match.group(1)), minutes=int(match.group(2)))
    if match := _HOURS_ONLY.fullmatch(s):
        return timedelta(hours=float(match.group(1)))
    if match := _MINUTES_ONLY.fullmatch(s):
        return timedelta(minutes=int(match.group(1)))
    return _parse_go_duration(s)


def format_date(t: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return f"{t.year:04d}-{t.month:02d}-{t.day:02d}"


def format_duration(d: timedelta) -> str:
    """Format a duration in hours, such as "2h" or "1.5h"."""
    hours = d.total_seconds() / 3600
    if hours == float(int(hours)):
        return f"{int(hours)}h"
    return "%.2gh" % hours


def parse_time_of_day(s: str) -> tuple[int, int]:
    """Parse "9:00", "9:00am" or "14:30" into an (hour, minute) pair."""
    s = s.lower().strip()
    match = _TIME_OF_DAY.fullmatch(s)
    if match is None:
        raise ValueError(f"cannot parse time {s!r}")

    hour = int(match.group(1))
    minute = int(match.group(2))
    ampm = match.group(3)

    if ampm == "pm" and hour < 12:
        hour += 12
    elif ampm == "am" and hour == 12:
        hour = 0

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"invalid time {s!r}")
    return hour, minute