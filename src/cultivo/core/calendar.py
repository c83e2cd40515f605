"""
Calendar capability used by the schedule engine.

Event rules are written in week offsets; every date operation they need goes
through a ``Calendar`` so the rules stay independent of date library details.
Display helpers render Spanish day and month names without touching the
process locale.
"""
from datetime import date, datetime, time, timedelta
from typing import Optional, Protocol, runtime_checkable, Union
from zoneinfo import ZoneInfo

from cultivo.core.types import Date, DateTime

MONTH_ABBREVIATIONS = (
    "ene", "feb", "mar", "abr", "may", "jun",
    "jul", "ago", "sept", "oct", "nov", "dic",
)

WEEKDAY_NAMES = (
    "lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo",
)


@runtime_checkable
class Calendar(Protocol):
    """Date arithmetic needed by the schedule rules"""

    def add_days(self, day: Date, days: int) -> Date:
        ...

    def add_weeks(self, day: Date, weeks: int) -> Date:
        ...

    def compare(self, a: Date, b: Date) -> int:
        """Negative, zero or positive like a classic cmp"""
        ...

    def weekday(self, day: Date) -> int:
        """0 = Monday ... 6 = Sunday"""
        ...

    def days_between(self, start: Date, end: Date) -> int:
        ...

    def at_start_of_day(self, day: Date) -> DateTime:
        ...


class GregorianCalendar:
    """Proleptic Gregorian calendar on naive ``datetime.date`` values"""

    def add_days(self, day: Date, days: int) -> Date:
        return day + timedelta(days=days)

    def add_weeks(self, day: Date, weeks: int) -> Date:
        return day + timedelta(weeks=weeks)

    def compare(self, a: Date, b: Date) -> int:
        return (a > b) - (a < b)

    def weekday(self, day: Date) -> int:
        return day.weekday()

    def days_between(self, start: Date, end: Date) -> int:
        return (end - start).days

    def at_start_of_day(self, day: Date) -> DateTime:
        return datetime.combine(day, time.min)


DEFAULT_CALENDAR = GregorianCalendar()


def as_datetime(value: Union[Date, DateTime], timezone: Optional[str] = None) -> DateTime:
    """
    Naive local datetime comparable with event times.

    Dates become midnight. Aware datetimes are converted to ``timezone`` (when
    given) and their offset dropped, leaving season wall-clock time.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            if timezone:
                value = value.astimezone(ZoneInfo(timezone))
            value = value.replace(tzinfo=None)
        return value
    return datetime.combine(value, time.min)


def as_date(value: Union[Date, DateTime], timezone: Optional[str] = None) -> Date:
    if isinstance(value, datetime):
        return as_datetime(value, timezone).date()
    return value


def format_date(value: Union[Date, DateTime]) -> str:
    """dd/MM/yyyy"""
    return as_date(value).strftime("%d/%m/%Y")


def format_day_month(value: Union[Date, DateTime]) -> str:
    day = as_date(value)
    return f"{day.day:02d} {MONTH_ABBREVIATIONS[day.month - 1]}"


def format_week_range(start: Union[Date, DateTime], end: Union[Date, DateTime]) -> str:
    """'04 sept - 10 sept 2025'"""
    return f"{format_day_month(start)} - {format_day_month(end)} {as_date(end).year}"


def weekday_name(value: Union[Date, DateTime]) -> str:
    return WEEKDAY_NAMES[as_date(value).weekday()]


def week_start(value: Union[Date, DateTime], week_starts_on: int = 0) -> Date:
    """First day of the calendar week holding ``value``"""
    day = as_date(value)
    offset = (day.weekday() - week_starts_on) % 7
    return day - timedelta(days=offset)


def is_same_week(a: Union[Date, DateTime], b: Union[Date, DateTime],
                 week_starts_on: int = 0) -> bool:
    """True when both values fall in the same calendar week (Monday-based by default)"""
    return week_start(a, week_starts_on) == week_start(b, week_starts_on)
