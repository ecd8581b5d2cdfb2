"""Offers of the general form "X for the price of Y".

"Buy one get one free" is "2 for the price of 1". An offer never adds to a
bill: every adjustment is zero or negative so it can be summed straight onto
a subtotal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .errors import OfferConfigError
from .shop import Catalog, item_cost


def x_for_price_of_y(items: Sequence[str], x: int, y: int, item: str, catalog: Catalog | None = None) -> int:
    """Return the cost adjustment of an "x for the price of y" offer on ``item``.

    Every complete group of ``x`` units is charged as ``y`` units; leftover
    units pay full price.

    Example::

        >>> x_for_price_of_y(["apple", "apple"], 2, 1, "apple")
        -60
        >>> x_for_price_of_y(["apple"], 2, 1, "apple")
        0
    """
    groups = list(items).count(item) // x
    if not groups:
        return 0
    return -groups * (x - y) * item_cost(item, catalog)


@dataclass(frozen=True)
class OfferRule:
    """One configured offer: for every ``x`` units of ``item`` charge ``y``."""

    x: int
    y: int
    item: str

    def __post_init__(self) -> None:
        for field_name in ("x", "y"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                actual = type(value).__name__
                raise OfferConfigError(f"Offer field '{field_name}' must be an integer, got {actual}")
        if not isinstance(self.item, str) or not self.item:
            raise OfferConfigError(f"Offer item must be a non-empty string, got {self.item!r}")
        if not self.x > self.y >= 0:
            raise OfferConfigError(f"Offer on {self.item!r} needs x > y >= 0, got x={self.x} y={self.y}")

    @property
    def label(self) -> str:
        return f"{self.x} for {self.y} {self.item}"

    def adjustment(self, items: Sequence[str], catalog: Catalog | None = None) -> int:
        return x_for_price_of_y(items, self.x, self.y, self.item, catalog)


DEFAULT_OFFERS = (
    OfferRule(2, 1, "apple"),
    OfferRule(2, 1, "banana"),
    OfferRule(3, 2, "orange"),
)
