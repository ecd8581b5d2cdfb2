"""Shop catalog: the static table of item names and unit costs.

Costs are integers in the minor currency unit (cents). Integer math keeps
every total exact, so no floating point value ever enters pricing.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple

from .errors import CatalogConfigError, UnknownItemError

REFERENCE_PRICES: Dict[str, int] = {
    "apple": 60,
    "banana": 20,
    "orange": 25,
}


class Catalog:
    """Immutable mapping from item name to unit cost."""

    def __init__(self, prices: Mapping[str, int]):
        validated: Dict[str, int] = {}
        for name, cost in prices.items():
            if not isinstance(name, str) or not name:
                raise CatalogConfigError(f"Catalog item names must be non-empty strings, got {name!r}")
            # bool is an int subclass but never a price
            if isinstance(cost, bool) or not isinstance(cost, int):
                actual = type(cost).__name__
                raise CatalogConfigError(f"Cost of {name!r} must be an integer number of minor units, got {actual}")
            if cost < 0:
                raise CatalogConfigError(f"Cost of {name!r} must be non-negative, got {cost}")
            validated[name] = cost
        self._prices = MappingProxyType(validated)

    def unit_cost(self, item_name: str) -> int:
        """Return the unit cost of ``item_name``.

        Raises:
            UnknownItemError: if the name is not in the catalog.
        """
        try:
            return self._prices[item_name]
        except (KeyError, TypeError):
            raise UnknownItemError(item_name) from None

    def items(self) -> Tuple[Tuple[str, int], ...]:
        return tuple(self._prices.items())

    def __contains__(self, item_name: object) -> bool:
        return item_name in self._prices

    def __iter__(self) -> Iterator[str]:
        return iter(self._prices)

    def __len__(self) -> int:
        return len(self._prices)

    def __repr__(self) -> str:
        return f"Catalog({dict(self._prices)!r})"


DEFAULT_CATALOG = Catalog(REFERENCE_PRICES)


def item_cost(item_name: str, catalog: Catalog | None = None) -> int:
    """Look up a unit cost in ``catalog``, or in the reference catalog.

    Example::

        >>> item_cost("apple")
        60
    """
    return (catalog if catalog is not None else DEFAULT_CATALOG).unit_cost(item_name)
