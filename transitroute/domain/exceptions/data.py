from __future__ import annotations

from pathlib import Path


class NetworkDataError(Exception):
    """Base exception for timetable loading failures."""


class MalformedRecord(NetworkDataError):
    """A single input row could not be turned into a domain object.

    Never fatal: the row is reported and skipped.
    """


class DataSourceFailure(NetworkDataError):
    """A whole data source could not be read; only that source is aborted."""

    def __init__(self, message: str, *, source: Path | None = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source is not None else message)
