"""Availability pools: when committed resources next become free.

Two interchangeable layouts of the same capability (peek_earliest,
take_earliest, commit):

PartitionedPool -- one min-heap per category.
UnifiedPool     -- one min-heap over every resource regardless of category.

A resource leaves its pool the instant it is matched to a request and is
committed again with the request's end time once the booking is made.
"""

from __future__ import annotations

import heapq
import itertools
from collections import Counter
from dataclasses import dataclass, field

from fleet_sizing.categories import Category, CategoryHierarchy


@dataclass(frozen=True, order=True)
class Resource:
    """One unit of committed fleet capacity.

    Ordered by (available_at, seq); seq is the pool's insertion counter so
    resources free at the same instant come out in commit order.
    """

    available_at: int
    seq: int
    category: Category = field(compare=False)
    resource_id: str | None = field(default=None, compare=False)


@dataclass
class PartitionedPool:
    """One availability heap per category of the hierarchy."""

    hierarchy: CategoryHierarchy
    _queues: dict[Category, list[Resource]] = field(init=False)
    _seq: itertools.count = field(init=False, default_factory=itertools.count)
    _issued: Counter[Category] = field(init=False, default_factory=Counter)

    def __post_init__(self) -> None:
        self._queues = {c: [] for c in self.hierarchy}

    def peek_earliest(self, category: Category) -> int | None:
        """Earliest availability time in `category`, or None if it holds nothing."""
        queue = self._queues[category]
        return queue[0].available_at if queue else None

    def take_earliest(self, category: Category) -> Resource:
        """Remove the earliest-available resource of `category`.

        Raises IndexError if the category is empty; peek first.
        """
        return heapq.heappop(self._queues[category])

    def commit(
        self,
        category: Category,
        available_at: int,
        resource_id: str | None = None,
    ) -> Resource:
        """Insert a resource. A new resource id is issued when none is given."""
        if resource_id is None:
            self._issued[category] += 1
            resource_id = f"{category.name}-{self._issued[category]}"
        resource = Resource(available_at, next(self._seq), category, resource_id)
        heapq.heappush(self._queues[category], resource)
        return resource

    def size(self, category: Category) -> int:
        return len(self._queues[category])

    def __len__(self) -> int:
        return sum(len(q) for q in self._queues.values())


@dataclass
class UnifiedPool:
    """A single availability heap over all resources."""

    _heap: list[Resource] = field(default_factory=list)
    _seq: itertools.count = field(default_factory=itertools.count)

    def peek_earliest(self) -> int | None:
        return self._heap[0].available_at if self._heap else None

    def take_earliest(self) -> Resource:
        """Remove the earliest-available resource. Raises IndexError if empty."""
        return heapq.heappop(self._heap)

    def commit(self, category: Category, available_at: int) -> Resource:
        resource = Resource(available_at, next(self._seq), category)
        heapq.heappush(self._heap, resource)
        return resource

    def release_until(self, time: int) -> list[Resource]:
        """Evict every resource with available_at <= time, earliest first."""
        released: list[Resource] = []
        while self._heap and self._heap[0].available_at <= time:
            released.append(heapq.heappop(self._heap))
        return released

    def __len__(self) -> int:
        return len(self._heap)
