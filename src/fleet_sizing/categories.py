"""Category hierarchy: a fixed linear order with precomputed upgrade chains."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from fleet_sizing.types import ConfigurationError


@dataclass(frozen=True, order=True)
class Category:
    """A resource tier. Ordered by rank, cheapest first."""

    rank: int
    name: str

    def __str__(self) -> str:
        return self.name


class CategoryHierarchy:
    """Immutable ordered set of categories.

    A request of category c may be served by any category in
    upgrade_chain(c): c itself followed by every higher category, in
    ascending cost order. Chains are computed once at construction.
    """

    def __init__(self, names: Sequence[str]) -> None:
        if not names:
            raise ConfigurationError("", "hierarchy must define at least one category")

        categories: list[Category] = []
        by_name: dict[str, Category] = {}
        for rank, name in enumerate(names):
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError(str(name), "is not a valid category name")
            if name in by_name:
                raise ConfigurationError(name, "is defined more than once")
            category = Category(rank, name)
            categories.append(category)
            by_name[name] = category

        self._categories = tuple(categories)
        self._by_name = by_name
        self._chains: dict[Category, tuple[Category, ...]] = {
            c: self._categories[c.rank:] for c in self._categories
        }

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self._categories)

    @property
    def lowest(self) -> Category:
        return self._categories[0]

    @property
    def highest(self) -> Category:
        return self._categories[-1]

    def resolve(self, category: str | Category) -> Category:
        """Look up a category by name. Raises ConfigurationError if unknown."""
        name = category.name if isinstance(category, Category) else category
        try:
            found = self._by_name[name]
        except (KeyError, TypeError):
            raise ConfigurationError(str(name), "is not part of the hierarchy") from None
        if isinstance(category, Category) and category != found:
            raise ConfigurationError(name, "belongs to a different hierarchy")
        return found

    def upgrade_chain(self, category: str | Category) -> tuple[Category, ...]:
        """Categories that may serve a request of `category`, cheapest first."""
        return self._chains[self.resolve(category)]

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Category):
            return self._by_name.get(item.name) == item
        return item in self._by_name

    def __repr__(self) -> str:
        return f"CategoryHierarchy({' < '.join(self.names)})"


DEFAULT_HIERARCHY = CategoryHierarchy(("Basic", "Premium", "Enterprise"))
