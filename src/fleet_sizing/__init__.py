"""fleet-sizing: Minimum categorised fleet for a batch of interval reservations."""

from fleet_sizing.categories import DEFAULT_HIERARCHY, Category, CategoryHierarchy
from fleet_sizing.engine import (
    DEFAULT_STRATEGY,
    STRATEGIES,
    compare_strategies,
    get_strategy,
    normalize_requests,
    peak_concurrency,
    size_fleet,
)
from fleet_sizing.ledger import FleetLedger
from fleet_sizing.loaders import load_batch_json, load_hierarchy_json, parse_batch
from fleet_sizing.policy import AllocationPolicy, PartitionedPolicy, UnifiedPolicy
from fleet_sizing.pools import PartitionedPool, Resource, UnifiedPool
from fleet_sizing.resolution import HOUR, MILLISECOND, MINUTE, SECOND, TimeResolution
from fleet_sizing.types import (
    Assignment,
    ConfigurationError,
    FleetResult,
    FleetSizingError,
    InvalidIntervalError,
    Request,
    RequestBatch,
)

__all__ = [
    "AllocationPolicy",
    "Assignment",
    "Category",
    "CategoryHierarchy",
    "ConfigurationError",
    "DEFAULT_HIERARCHY",
    "DEFAULT_STRATEGY",
    "FleetLedger",
    "FleetResult",
    "FleetSizingError",
    "HOUR",
    "InvalidIntervalError",
    "MILLISECOND",
    "MINUTE",
    "PartitionedPolicy",
    "PartitionedPool",
    "Request",
    "RequestBatch",
    "Resource",
    "SECOND",
    "STRATEGIES",
    "TimeResolution",
    "UnifiedPolicy",
    "UnifiedPool",
    "compare_strategies",
    "get_strategy",
    "load_batch_json",
    "load_hierarchy_json",
    "normalize_requests",
    "parse_batch",
    "peak_concurrency",
    "size_fleet",
]
