"""Shopper's cart: holds item names for the till to price."""

from __future__ import annotations

from typing import List


class Cart:
    def __init__(self) -> None:
        self.items: List[str] = []

    def add_items(self, *items: str) -> None:
        self.items.extend(items)

    def __len__(self) -> int:
        return len(self.items)
