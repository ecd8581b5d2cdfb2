"""Typed payload contracts shared by the pricing pipeline and the CLI."""

from __future__ import annotations

from typing import List, Optional, TypedDict


class OfferAdjustment(TypedDict):
    """A single non-zero offer adjustment applied to a bill."""

    offer: str
    item: str
    amount: int


class PriceBreakdown(TypedDict):
    """Itemised pricing result.

    Invariant:
    - ``total == subtotal + sum(adjustment["amount"] for adjustment in adjustments)``.
    - ``free_item`` is ``None`` only when no item was given away.
    """

    items: List[str]
    free_item: Optional[str]
    paid_items: List[str]
    subtotal: int
    adjustments: List[OfferAdjustment]
    total: int
