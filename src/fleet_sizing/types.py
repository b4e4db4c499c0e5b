"""Shared types: Request, Assignment, FleetResult and the error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fleet_sizing.categories import CategoryHierarchy


@dataclass(frozen=True)
class Request:
    """Immutable reservation request over the half-open interval [start, end).

    Invariants (checked by the engine, not here):
        - start < end
        - category names a category of the hierarchy the batch is run against
    """

    category: str
    start: int
    end: int
    request_id: str = ""

    @property
    def duration(self) -> int:
        return self.end - self.start

    def overlaps(self, other: Request) -> bool:
        """Whether the two intervals share any instant."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        label = f"{self.request_id} " if self.request_id else ""
        return f"{label}{self.category} [{self.start}, {self.end})"


@dataclass(frozen=True)
class Assignment:
    """One entry of the per-request assignment trace.

    resource_id names the physical slot in the partitioned strategy and is
    None in the unified strategy, which only tracks counts.
    """

    request: Request
    category: str
    reused: bool
    resource_id: str | None = None

    @property
    def upgraded(self) -> bool:
        return self.category != self.request.category


@dataclass(frozen=True)
class FleetResult:
    """Outcome of one engine run.

    cars_needed maps category name to the number of newly committed
    resources attributed to it, in ascending category order, zeros omitted.
    """

    strategy: str
    fleet_size: int
    cars_needed: dict[str, int]
    assignments: tuple[Assignment, ...] = field(default=())

    @property
    def new_count(self) -> int:
        return sum(1 for a in self.assignments if not a.reused)

    @property
    def reused_count(self) -> int:
        return sum(1 for a in self.assignments if a.reused)

    @property
    def upgraded_count(self) -> int:
        return sum(1 for a in self.assignments if a.upgraded)


@dataclass(frozen=True)
class RequestBatch:
    """A loaded batch: its hierarchy, its requests and the fleet already owned."""

    batch_id: str
    hierarchy: CategoryHierarchy
    requests: tuple[Request, ...]
    fleet: tuple[tuple[str, int], ...] = ()


class FleetSizingError(Exception):
    """Base class for errors raised by the allocation engine."""


class ConfigurationError(FleetSizingError):
    """Raised when a category is unknown or a hierarchy is malformed."""

    def __init__(
        self,
        category: str,
        reason: str,
        request: Request | None = None,
    ) -> None:
        self.category = category
        self.reason = reason
        self.request = request
        where = f" in request {request}" if request is not None else ""
        super().__init__(
            f"Configuration error: category {category!r} {reason}{where}"
        )


class InvalidIntervalError(FleetSizingError):
    """Raised when a request does not satisfy start < end."""

    def __init__(self, request: Request) -> None:
        self.request = request
        super().__init__(
            f"Invalid interval: request {request} has start={request.start} "
            f">= end={request.end}; the whole batch is rejected"
        )
