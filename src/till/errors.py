"""Structured till error taxonomy used for deterministic, explainable failures."""

from __future__ import annotations


class TillError(Exception):
    """Base class for all till domain exceptions."""

    def __init__(self, error_code: str, category: str, explanation: str, actionable: bool = True):
        self.error_code = error_code
        self.category = category
        self.explanation = explanation
        self.actionable = actionable
        super().__init__(f"[{self.category}:{self.error_code}] {self.explanation}")


class UnknownItemError(TillError, LookupError):
    """Raised when an item name has no configured cost in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__("UNKNOWN_ITEM", "CATALOG", f"Unknown item: {name!r}", True)


class CatalogConfigError(TillError):
    def __init__(self, explanation: str, actionable: bool = True):
        super().__init__("CATALOG_CONFIG", "CONFIG", explanation, actionable)


class OfferConfigError(TillError):
    def __init__(self, explanation: str, actionable: bool = True):
        super().__init__("OFFER_CONFIG", "CONFIG", explanation, actionable)


UnknownItem = UnknownItemError
