"""Allocation policies: reuse an idle resource or commit a new one.

Both strategies share one decision skeleton (AllocationPolicy.assign):

    1. prepare      -- strategy hook run before the decision (eviction)
    2. chain scan   -- first category of the upgrade chain that can be reused
    3. fallback     -- nothing reusable: commit a new resource of the
                       requested category (never an upgrade purchase)
    4. book         -- the resource becomes available again at request.end

Each policy instance owns its pool and ledger for one batch and is
discarded afterwards.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable

from fleet_sizing.categories import Category, CategoryHierarchy
from fleet_sizing.ledger import FleetLedger
from fleet_sizing.pools import PartitionedPool, UnifiedPool
from fleet_sizing.types import Assignment, FleetResult, FleetSizingError, Request

logger = logging.getLogger(__name__)


def first_eligible(
    chain: Iterable[Category],
    eligible: Callable[[Category], bool],
) -> Category | None:
    """Return the cheapest category in `chain` accepted by `eligible`."""
    for category in chain:
        if eligible(category):
            return category
    return None


class AllocationPolicy(ABC):
    """Shared chain-scan skeleton. Subclasses supply the pool semantics."""

    name: str = ""

    def __init__(self, hierarchy: CategoryHierarchy) -> None:
        self.hierarchy = hierarchy
        self.ledger = FleetLedger()
        self.assignments: list[Assignment] = []

    def seed(self, category: str | Category, available_at: int) -> None:
        """Add a resource the fleet already owns, free from `available_at` on.

        Seeded resources are reused like committed ones but never show up in
        cars_needed. Seeding must happen before the first request is assigned.
        """
        if self.assignments:
            raise FleetSizingError(
                "Existing fleet must be seeded before the first request is assigned"
            )
        category = self.hierarchy.resolve(category)
        self.ledger.seed(category)
        self._seed(category, available_at)
        logger.debug("Seeded existing %s, available at %d", category, available_at)

    def assign(self, request: Request) -> Assignment:
        """Decide and book one request. Requests must arrive in start order."""
        requested = self.hierarchy.resolve(request.category)
        self._prepare(request)

        chosen = first_eligible(
            self.hierarchy.upgrade_chain(requested),
            lambda c: self._can_reuse(c, request),
        )
        reused = chosen is not None
        if chosen is None:
            chosen = requested
            self.ledger.commit_new(chosen)
            logger.debug("No idle resource for %s; committing new %s", request, chosen)

        resource_id = self._book(chosen, request, reused)
        assignment = Assignment(request, chosen.name, reused, resource_id)
        if reused:
            logger.debug(
                "Booking %s for %s%s",
                resource_id or chosen,
                request,
                " (upgrade)" if assignment.upgraded else "",
            )
        self.assignments.append(assignment)
        return assignment

    def _prepare(self, request: Request) -> None:
        """Hook run before the chain scan. No-op by default."""

    @abstractmethod
    def _can_reuse(self, category: Category, request: Request) -> bool:
        """Whether an already-committed resource of `category` can serve `request`."""

    @abstractmethod
    def _book(self, category: Category, request: Request, reused: bool) -> str | None:
        """Commit the booked resource with available_at = request.end."""

    @abstractmethod
    def _seed(self, category: Category, available_at: int) -> None:
        """Place a pre-existing resource in the pool."""

    @property
    @abstractmethod
    def fleet_size(self) -> int:
        """Minimum fleet size as measured by this strategy."""

    def result(self) -> FleetResult:
        return FleetResult(
            strategy=self.name,
            fleet_size=self.fleet_size,
            cars_needed=self.ledger.as_dict(),
            assignments=tuple(self.assignments),
        )


class PartitionedPolicy(AllocationPolicy):
    """Per-category availability queues.

    A resource committed to category C is only reused for requests whose
    upgrade chain contains C. Greedy on start-sorted input, this is the
    classical interval-partitioning argument applied along the chain, so the
    fleet size is the number of resources ever committed, plus any seeded
    ones.
    """

    name = "partitioned"

    def __init__(self, hierarchy: CategoryHierarchy) -> None:
        super().__init__(hierarchy)
        self.pool = PartitionedPool(hierarchy)

    def _can_reuse(self, category: Category, request: Request) -> bool:
        earliest = self.pool.peek_earliest(category)
        return earliest is not None and earliest <= request.start

    def _book(self, category: Category, request: Request, reused: bool) -> str | None:
        resource_id = None
        if reused:
            resource_id = self.pool.take_earliest(category).resource_id
        return self.pool.commit(category, request.end, resource_id).resource_id

    def _seed(self, category: Category, available_at: int) -> None:
        self.pool.commit(category, available_at)

    @property
    def fleet_size(self) -> int:
        return self.ledger.total_committed + self.ledger.total_seeded


class UnifiedPolicy(AllocationPolicy):
    """Single availability queue with active/committed counters.

    Resource identity is abstracted away: a category is reusable when one of
    its resources was released in this step, or when its committed capacity
    exceeds what is currently checked out. The fleet size is the high-water
    mark of the pool, i.e. peak concurrent demand. This is an approximation:
    it may report fewer resources than the per-category commitments add up
    to once upgrades are exercised.
    """

    name = "unified"

    def __init__(self, hierarchy: CategoryHierarchy) -> None:
        super().__init__(hierarchy)
        self.pool = UnifiedPool()
        self.high_water = 0
        self._freed: set[Category] = set()

    def _prepare(self, request: Request) -> None:
        self._freed = set()
        for resource in self.pool.release_until(request.start):
            self._freed.add(resource.category)
            self.ledger.release(resource.category)

    def _can_reuse(self, category: Category, request: Request) -> bool:
        return category in self._freed or self.ledger.has_idle(category)

    def _book(self, category: Category, request: Request, reused: bool) -> str | None:
        self.ledger.check_out(category)
        self.pool.commit(category, request.end)
        self.high_water = max(self.high_water, len(self.pool))
        return None

    def _seed(self, category: Category, available_at: int) -> None:
        # Checked out until available_at, released by the first later eviction
        self.ledger.check_out(category)
        self.pool.commit(category, available_at)
        self.high_water = max(self.high_water, len(self.pool))

    @property
    def fleet_size(self) -> int:
        return self.high_water
