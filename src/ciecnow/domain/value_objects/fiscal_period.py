"""Fiscal period - the institution's operating year."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

FISCAL_START_MONTH = 11
HISTORY_FLOOR_YEAR = 2020
FUTURE_YEARS = 2

_END_OF_DAY = time(23, 59, 59, 999000)
_CALENDAR_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def default_start_year(today: date, start_month: int = FISCAL_START_MONTH) -> int:
    """Year in which the fiscal period containing today began."""
    if today.month < start_month:
        return today.year - 1
    return today.year


def parse_local_date(value: str | date | datetime | None) -> datetime | None:
    """Parse a ``YYYY-MM-DD`` calendar date as local midnight.

    Aware datetimes are converted to naive local time. Returns None for empty
    or malformed input, including the other ISO 8601 spellings.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _CALENDAR_DATE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return None


@dataclass(frozen=True)
class PeriodOption:
    """Selectable fiscal period."""

    start_year: int
    label: str


@dataclass(frozen=True)
class FiscalPeriod:
    """Fiscal year from day 1 of start_month through the day before it a year later."""

    start_year: int
    start_month: int = FISCAL_START_MONTH

    def __post_init__(self) -> None:
        if not 1 <= self.start_month <= 12:
            raise ValueError("start_month must be between 1 and 12")

    @classmethod
    def containing(cls, today: date, start_month: int = FISCAL_START_MONTH) -> "FiscalPeriod":
        return cls(start_year=default_start_year(today, start_month), start_month=start_month)

    @property
    def start_date(self) -> datetime:
        return datetime(self.start_year, self.start_month, 1)

    @property
    def end_date(self) -> datetime:
        next_start = date(self.start_year + 1, self.start_month, 1)
        return datetime.combine(next_start - timedelta(days=1), _END_OF_DAY)

    @property
    def label(self) -> str:
        return f"{self.start_year}-{self.start_year + 1}"

    def contains(self, value: str | date | datetime | None) -> bool:
        """Inclusive membership test; malformed input is never in the period."""
        moment = parse_local_date(value)
        if moment is None:
            return False
        return self.start_date <= moment <= self.end_date


def available_periods(
    today: date,
    floor_year: int = HISTORY_FLOOR_YEAR,
    future_years: int = FUTURE_YEARS,
) -> list[PeriodOption]:
    """Every period from floor_year through today.year + future_years, newest first."""
    last = today.year + future_years
    return [
        PeriodOption(start_year=y, label=f"Periodo {y}-{y + 1}")
        for y in range(last, floor_year - 1, -1)
    ]
