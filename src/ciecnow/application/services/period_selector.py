"""Period selector - the fiscal period chosen by the user, persisted locally."""

import logging
from collections.abc import Callable
from datetime import date, datetime

from ciecnow.application.ports import KeyValueStore
from ciecnow.domain.value_objects import FiscalPeriod, PeriodOption, available_periods
from ciecnow.domain.value_objects.fiscal_period import (
    FISCAL_START_MONTH,
    HISTORY_FLOOR_YEAR,
    default_start_year,
)

logger = logging.getLogger(__name__)

SELECTED_YEAR_KEY = "ciec_selected_fiscal_year"


class PeriodSelector:
    """Holds the selected fiscal start year.

    The stored year is read once at construction; when absent or unreadable the
    year of the period containing today is used.
    """

    def __init__(
        self,
        store: KeyValueStore,
        start_month: int = FISCAL_START_MONTH,
        floor_year: int = HISTORY_FLOOR_YEAR,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._start_month = start_month
        self._floor_year = floor_year
        self._today = today
        self._start_year = self._load_start_year()

    def _load_start_year(self) -> int:
        stored = self._store.get(SELECTED_YEAR_KEY)
        if stored:
            try:
                return int(stored)
            except ValueError:
                logger.warning("Ignoring unreadable stored fiscal year %r", stored)
        return default_start_year(self._today(), self._start_month)

    @property
    def start_year(self) -> int:
        return self._start_year

    def set_start_year(self, year: int) -> None:
        """Select and persist a start year. No range validation is applied.

        The selection changes only after the store accepted the write.
        """
        year = int(year)
        self._store.set(SELECTED_YEAR_KEY, str(year))
        self._start_year = year

    @property
    def period(self) -> FiscalPeriod:
        return FiscalPeriod(start_year=self._start_year, start_month=self._start_month)

    @property
    def start_date(self) -> datetime:
        return self.period.start_date

    @property
    def end_date(self) -> datetime:
        return self.period.end_date

    @property
    def period_label(self) -> str:
        return self.period.label

    @property
    def available_periods(self) -> list[PeriodOption]:
        return available_periods(self._today(), floor_year=self._floor_year)

    def is_in_current_period(self, value: str | date | datetime | None) -> bool:
        return self.period.contains(value)
