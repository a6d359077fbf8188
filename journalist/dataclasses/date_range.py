"""Inclusive date ranges used by range queries and calendar views."""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterator

# --- Local imports ---
from journalist.core.exceptions import ValidationError


class ViewScope(str, Enum):
    """Calendar granularity a range was built for."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive span of calendar dates.

    Attributes:
        start: First date in the range
        end: Last date in the range (inclusive)
        scope: Granularity the range represents
    """

    start: date
    end: date
    scope: ViewScope = ViewScope.CUSTOM

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValidationError(
                f"Range start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @classmethod
    def day(cls, day: date) -> "DateRange":
        return cls(day, day, ViewScope.DAY)

    @classmethod
    def week(cls, start_of_week: date) -> "DateRange":
        return cls(start_of_week, start_of_week + timedelta(days=6), ViewScope.WEEK)

    @classmethod
    def month(cls, year: int, month: int) -> "DateRange":
        try:
            last_day = calendar.monthrange(year, month)[1]
        except ValueError as e:
            raise ValidationError(f"Invalid year/month: {year}-{month}") from e
        return cls(date(year, month, 1), date(year, month, last_day), ViewScope.MONTH)

    @classmethod
    def between(cls, start: date, end: date) -> "DateRange":
        return cls(start, end, ViewScope.CUSTOM)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        """Iterate every date in the range, ascending."""
        for offset in range((self.end - self.start).days + 1):
            yield self.start + timedelta(days=offset)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def __str__(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"
