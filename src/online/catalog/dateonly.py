"""
Date-only timestamps.

A DateOnly is a calendar date with no time of day. The zero value
(0001-01-01) is the canonical "missing date" and serializes as JSON null.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

DATE_LAYOUT = "%Y-%m-%d"


@dataclass(frozen=True, order=True)
class DateOnly:
    """A calendar date. The zero value means "no date"."""

    value: date = date.min

    @classmethod
    def zero(cls) -> DateOnly:
        return cls()

    @classmethod
    def of(cls, year: int, month: int, day: int) -> DateOnly:
        return cls(date(year, month, day))

    @classmethod
    def from_datetime(cls, moment: datetime | date) -> DateOnly:
        """Build a DateOnly from a moment, discarding the time of day."""
        if isinstance(moment, datetime):
            return cls(moment.date())
        return cls(moment)

    @classmethod
    def parse(cls, text: str) -> DateOnly:
        """Parse a YYYY-MM-DD string.

        Raises:
            ValueError: If the text is not a valid date
        """
        return cls(datetime.strptime(text.strip(), DATE_LAYOUT).date())

    @classmethod
    def from_json(cls, value: str | None) -> DateOnly:
        """Decode the JSON form: null (or "null") is zero, otherwise YYYY-MM-DD."""
        if value is None or value == "null":
            return cls()
        if not isinstance(value, str):
            raise ValueError(f"Date must be a string, got {value!r}")
        return cls.parse(value)

    def to_json(self) -> str | None:
        return None if self.is_zero() else str(self)

    def is_zero(self) -> bool:
        return self.value == date.min

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        if self.is_zero():
            return ""
        return self.value.strftime(DATE_LAYOUT)

    @property
    def year(self) -> int:
        return self.value.year

    def display(self) -> str:
        """Human date like 'Jan 2, 2006'."""
        return f"{self.value.strftime('%b')} {self.value.day}, {self.value.year}"

    def long_display(self, with_year: bool = True) -> str:
        """Human date like 'January 2, 2006' (or 'January 2')."""
        text = f"{self.value.strftime('%B')} {self.value.day}"
        return f"{text}, {self.value.year}" if with_year else text
