"""Fleet sizing engine: normalise a request batch and run one strategy over it.

Control flow for one run:

    normalize_requests -> for each request in start order:
        policy.assign (eviction, chain scan, commit-or-reuse, book)
    -> policy.result()

Each call builds a fresh policy, so no state survives between runs.
"""

from __future__ import annotations

import heapq
import logging
from typing import Iterable

from fleet_sizing.categories import DEFAULT_HIERARCHY, CategoryHierarchy
from fleet_sizing.policy import AllocationPolicy, PartitionedPolicy, UnifiedPolicy
from fleet_sizing.types import (
    ConfigurationError,
    FleetResult,
    InvalidIntervalError,
    Request,
)

logger = logging.getLogger(__name__)

STRATEGIES: dict[str, type[AllocationPolicy]] = {
    PartitionedPolicy.name: PartitionedPolicy,
    UnifiedPolicy.name: UnifiedPolicy,
}

DEFAULT_STRATEGY = PartitionedPolicy.name


def get_strategy(name: str) -> type[AllocationPolicy]:
    """Look up a strategy class by name."""
    if name not in STRATEGIES:
        available = ", ".join(STRATEGIES)
        raise ValueError(f"Unknown strategy: {name!r}. Available: {available}")
    return STRATEGIES[name]


def normalize_requests(
    requests: Iterable[Request],
    hierarchy: CategoryHierarchy = DEFAULT_HIERARCHY,
) -> list[Request]:
    """Validate the whole batch, then sort it into processing order.

    Order is (start, higher category first, end, request_id). Serving the
    more constrained request first at equal start keeps cheaper resources
    for requests that can still upgrade, and the full key makes the result
    independent of the input permutation.

    Raises:
        ConfigurationError: A request names a category outside the hierarchy.
        InvalidIntervalError: A request has start >= end.
    """
    batch = list(requests)
    ranks: dict[Request, int] = {}
    for request in batch:
        try:
            category = hierarchy.resolve(request.category)
        except ConfigurationError as e:
            raise ConfigurationError(e.category, e.reason, request) from None
        if request.start >= request.end:
            raise InvalidIntervalError(request)
        ranks[request] = category.rank

    return sorted(
        batch,
        key=lambda r: (r.start, -ranks[r], r.end, r.request_id),
    )


def size_fleet(
    requests: Iterable[Request],
    hierarchy: CategoryHierarchy = DEFAULT_HIERARCHY,
    strategy: str = DEFAULT_STRATEGY,
    fleet: Iterable[tuple[str, int]] = (),
) -> FleetResult:
    """Compute the minimum fleet for a closed batch of requests.

    Args:
        requests: Requests in any order.
        hierarchy: Category order the requests are validated against.
        strategy: Name of a registered strategy ("partitioned" or "unified").
        fleet: Resources already owned, as (category, available_at) pairs.
            They are reused before anything new is committed and are not
            counted in cars_needed.

    Returns:
        FleetResult with the fleet size, new commitments per category and the
        assignment trace in processing order. An empty batch yields size 0,
        or the number of seeded resources.
    """
    policy = get_strategy(strategy)(hierarchy)
    ordered = normalize_requests(requests, hierarchy)
    for category, available_at in fleet:
        policy.seed(category, available_at)
    for request in ordered:
        policy.assign(request)

    result = policy.result()
    logger.info(
        "Sized fleet for %d requests with %s strategy: %d resources %s",
        len(ordered),
        strategy,
        result.fleet_size,
        result.cars_needed,
    )
    return result


def compare_strategies(
    requests: Iterable[Request],
    hierarchy: CategoryHierarchy = DEFAULT_HIERARCHY,
    fleet: Iterable[tuple[str, int]] = (),
) -> dict[str, FleetResult]:
    """Run every registered strategy over the same batch."""
    batch = list(requests)
    existing = list(fleet)
    return {
        name: size_fleet(batch, hierarchy, name, existing) for name in STRATEGIES
    }


def peak_concurrency(requests: Iterable[Request]) -> int:
    """Category-free baseline: maximum number of overlapping requests.

    Classical minimum-meeting-rooms sweep over half-open intervals; a
    resource returned at t is free for a request starting at t. Lower bound
    for every strategy.
    """
    busy_until: list[int] = []
    peak = 0
    for request in sorted(requests, key=lambda r: r.start):
        while busy_until and busy_until[0] <= request.start:
            heapq.heappop(busy_until)
        heapq.heappush(busy_until, request.end)
        peak = max(peak, len(busy_until))
    return peak
