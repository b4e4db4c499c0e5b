"""FleetLedger: per-run counters of committed and checked-out resources."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from fleet_sizing.categories import Category


@dataclass
class FleetLedger:
    """Mutable counters owned by exactly one engine run.

    committed[c] -- resources newly committed to c (never decreases).
    seeded[c]    -- resources of c that existed before the run started.
    active[c]    -- resources of c currently checked out.

    Invariant: 0 <= active[c] <= committed[c] + seeded[c] whenever every
    checked-out resource of c was committed or seeded as c (always true for
    the unified strategy).
    """

    committed: Counter[Category] = field(default_factory=Counter)
    active: Counter[Category] = field(default_factory=Counter)
    seeded: Counter[Category] = field(default_factory=Counter)

    def commit_new(self, category: Category) -> None:
        self.committed[category] += 1

    def seed(self, category: Category) -> None:
        self.seeded[category] += 1

    def check_out(self, category: Category) -> None:
        self.active[category] += 1

    def release(self, category: Category) -> None:
        self.active[category] -= 1

    def capacity(self, category: Category) -> int:
        return self.committed[category] + self.seeded[category]

    def has_idle(self, category: Category) -> bool:
        """Capacity of `category` that is not currently checked out."""
        return self.active[category] < self.capacity(category)

    @property
    def total_committed(self) -> int:
        return sum(self.committed.values())

    @property
    def total_seeded(self) -> int:
        return sum(self.seeded.values())

    @property
    def total_active(self) -> int:
        return sum(self.active.values())

    def as_dict(self) -> dict[str, int]:
        """Committed counts by category name, ascending rank, zeros omitted.

        Seeded resources are not counted: these are the cars to acquire.
        """
        return {
            c.name: n
            for c, n in sorted(self.committed.items())
            if n > 0
        }
