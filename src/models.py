import calendar
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import pandas as pd

UNKNOWN_CHANNEL = "Unknown Channel"

NO_ENTRIES_MESSAGE = (
    "No valid watch history entries found. "
    "Make sure the format matches YouTube history from Google Takeout."
)


class HistoryParseError(Exception):
    """Base class for watch history parsing failures."""


class InvalidTimestampError(HistoryParseError, ValueError):
    """A single entry's date/time fields do not form a valid timestamp."""


class NoEntriesError(HistoryParseError):
    """The input produced no watch records at all."""

    def __init__(self, message: str = NO_ENTRIES_MESSAGE):
        super().__init__(message)


@dataclass(frozen=True)
class WatchRecord:
    """
    One watch event. Calendar fields are derived from `instant` once and
    cannot be set independently.
    """
    title: str
    channel: str
    instant: datetime
    hour: Optional[int] = None
    year: int = field(init=False)
    month: int = field(init=False)  # zero-based
    day: int = field(init=False)

    def __post_init__(self):
        if not isinstance(self.instant, datetime):
            raise InvalidTimestampError(f"Not a datetime: {self.instant!r}")
        object.__setattr__(self, 'year', self.instant.year)
        object.__setattr__(self, 'month', self.instant.month - 1)
        object.__setattr__(self, 'day', self.instant.day)
        if self.hour is None:
            object.__setattr__(self, 'hour', self.instant.hour)
        elif not 0 <= self.hour <= 23:
            raise InvalidTimestampError(f"Hour out of range: {self.hour}")

    @property
    def timestamp(self) -> int:
        """Milliseconds since the epoch, reading the wall-clock instant as UTC."""
        return calendar.timegm(self.instant.timetuple()) * 1000 + self.instant.microsecond // 1000

    @property
    def year_month(self) -> str:
        return f"{self.year}-{self.month + 1:02d}"


@dataclass(frozen=True)
class SkippedEntry:
    """A candidate match that did not produce a record."""
    kind: str
    position: int
    reason: str


@dataclass(frozen=True)
class ExtractionReport:
    records: tuple
    skipped: tuple

    @property
    def total_candidates(self) -> int:
        return len(self.records) + len(self.skipped)


@dataclass(frozen=True)
class HistoryViews:
    """
    The four aggregate views of a record sequence.

    channels:  name, count            (top channels, count descending)
    monthly:   month, count           ("YYYY-MM" ascending)
    hourly:    hour, count            (always 24 rows, "00".."23")
    recurring: title, full_title, count
    """
    channels: pd.DataFrame
    monthly: pd.DataFrame
    hourly: pd.DataFrame
    recurring: pd.DataFrame

    def copy(self) -> "HistoryViews":
        return HistoryViews(
            channels=self.channels.copy(),
            monthly=self.monthly.copy(),
            hourly=self.hourly.copy(),
            recurring=self.recurring.copy(),
        )
