"""Boundary: TimeResolution converts naive datetimes to integer request times."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


def _require_naive(value: datetime, name: str) -> None:
    if value.tzinfo is not None:
        raise TypeError(
            f"{name} must be a naive datetime, got tzinfo={value.tzinfo!r}. "
            f"Request times are measured in a single local clock."
        )


@dataclass(frozen=True)
class TimeResolution:
    """Integer time unit used inside the engine. Immutable.

    Conversion happens once, at ingestion. The engine only compares and
    stores integers.
    """

    unit: timedelta
    label: str

    def to_int(self, value: datetime, epoch: datetime) -> int:
        """Whole units from epoch to value.

        Raises TypeError for timezone-aware datetimes and ValueError when
        value is not a whole number of units from epoch.
        """
        _require_naive(value, "value")
        _require_naive(epoch, "epoch")

        delta = value - epoch
        if delta % self.unit:
            raise ValueError(
                f"{value.isoformat()} is not aligned to {self.label} "
                f"resolution relative to epoch {epoch.isoformat()}"
            )
        return delta // self.unit

    def to_datetime(self, t: int, epoch: datetime) -> datetime:
        _require_naive(epoch, "epoch")
        return epoch + t * self.unit


MILLISECOND = TimeResolution(unit=timedelta(milliseconds=1), label="millisecond")
SECOND = TimeResolution(unit=timedelta(seconds=1), label="second")
MINUTE = TimeResolution(unit=timedelta(minutes=1), label="minute")
HOUR = TimeResolution(unit=timedelta(hours=1), label="hour")

RESOLUTIONS: dict[str, TimeResolution] = {
    r.label: r for r in (MILLISECOND, SECOND, MINUTE, HOUR)
}
