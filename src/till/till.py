"""The till: total cost of a shopper's items, including discounts.

Pricing runs in a fixed order:

1. sort items by unit cost (stable, so ties keep their submitted order);
2. give away the cheapest item;
3. sum the unit costs of the remaining items;
4. apply every offer rule independently to that same remaining list;
5. return subtotal plus the (non-positive) offer adjustments.

All functions take the items explicitly and hold no state, so concurrent
callers can share the catalog and rules freely.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .offer import DEFAULT_OFFERS, OfferRule
from .shop import Catalog, item_cost
from .types import OfferAdjustment, PriceBreakdown

logger = logging.getLogger(__name__)

__all__ = ["price_breakdown", "sort_by_cost", "subtotal_cost", "total_cost"]


def sort_by_cost(items: Iterable[str], catalog: Catalog | None = None) -> List[str]:
    """Sort items by unit cost, cheapest first.

    Example::

        >>> sort_by_cost(["apple", "banana", "orange"])
        ['banana', 'orange', 'apple']
    """
    return sorted(items, key=lambda item: item_cost(item, catalog))


def subtotal_cost(items: Iterable[str], catalog: Catalog | None = None) -> int:
    """Sum of unit costs with no free item and no offers applied."""
    return sum(item_cost(item, catalog) for item in items)


def _split_free_item(items: Sequence[str], catalog: Catalog | None, cheapest_item_free: bool):
    ordered = sort_by_cost(items, catalog)
    if cheapest_item_free and ordered:
        return ordered[0], ordered[1:]
    return None, ordered


def price_breakdown(
    items: Sequence[str],
    catalog: Catalog | None = None,
    offers: Sequence[OfferRule] | None = None,
    cheapest_item_free: bool = True,
) -> PriceBreakdown:
    """Price ``items`` and report how the total was reached.

    Raises:
        UnknownItemError: if any item is missing from the catalog. No partial
            result is produced.
    """
    items = list(items)
    rules = DEFAULT_OFFERS if offers is None else tuple(offers)
    free_item, paid_items = _split_free_item(items, catalog, cheapest_item_free)
    subtotal = subtotal_cost(paid_items, catalog)

    adjustments: List[OfferAdjustment] = []
    for rule in rules:
        amount = rule.adjustment(paid_items, catalog)
        if amount:
            adjustments.append({"offer": rule.label, "item": rule.item, "amount": amount})

    total = subtotal + sum(adjustment["amount"] for adjustment in adjustments)
    logger.debug(
        "Priced %d items: free=%s subtotal=%d adjustments=%d total=%d",
        len(items),
        free_item,
        subtotal,
        len(adjustments),
        total,
    )
    return {
        "items": list(items),
        "free_item": free_item,
        "paid_items": paid_items,
        "subtotal": subtotal,
        "adjustments": adjustments,
        "total": total,
    }


def total_cost(
    items: Sequence[str],
    catalog: Catalog | None = None,
    offers: Sequence[OfferRule] | None = None,
    cheapest_item_free: bool = True,
) -> int:
    """Calculate the total cost of ``items``, including discounts.

    Example::

        >>> total_cost(["apple", "banana", "orange"])
        85
    """
    return price_breakdown(items, catalog, offers, cheapest_item_free)["total"]
