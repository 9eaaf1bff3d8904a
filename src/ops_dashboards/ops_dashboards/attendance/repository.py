from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..filters.model import Predicate
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_filtered(self, predicate: Predicate) -> Sequence[AttendanceRecord]:
        """Every record matching `predicate`, newest attendance date first."""

        raise NotImplementedError

    def filter_options(self) -> dict:
        """Distinct stores / companies / worker types / names for dropdowns."""

        raise NotImplementedError

    def count_summary(self, *, month_start: date, month_end: date) -> dict:
        """Landing-card counters: Total, Companies, ThisMonth."""

        raise NotImplementedError
