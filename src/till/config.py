from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

from .errors import CatalogConfigError, OfferConfigError
from .offer import DEFAULT_OFFERS, OfferRule
from .shop import REFERENCE_PRICES, Catalog


def _default_offers() -> list[Dict[str, Any]]:
    return [{"x": rule.x, "y": rule.y, "item": rule.item} for rule in DEFAULT_OFFERS]


@dataclass(frozen=True)
class Config:
    catalog: Dict[str, Any] = field(default_factory=lambda: dict(REFERENCE_PRICES))
    offers: list[Dict[str, Any]] = field(default_factory=_default_offers)
    cheapest_item_free: bool = True
    minor_unit: str = "cents"
    major_unit: str = "dollars"
    minor_units_per_major: int = 100


_ENV_PREFIX = "TILL_"


def _find_pyproject(start_dir: Path) -> Path | None:
    for directory in (start_dir, *start_dir.parents):
        candidate = directory / "pyproject.toml"
        if candidate.exists():
            return candidate
    return None


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        import tomllib  # py311+
    except ModuleNotFoundError:
        import tomli as tomllib

    return tomllib.loads(path.read_text(encoding="utf-8"))


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _to_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    return default


def _from_sources(raw: Dict[str, Any]) -> Config:
    catalog = raw.get("catalog", REFERENCE_PRICES)
    if not isinstance(catalog, dict):
        raise CatalogConfigError("[tool.till.catalog] must be a table of item = cost")
    offers = raw.get("offers", _default_offers())
    if not isinstance(offers, list) or not all(isinstance(entry, dict) for entry in offers):
        raise OfferConfigError("[[tool.till.offers]] must be an array of tables with x, y and item")

    cheapest_item_free = _to_bool(
        os.getenv(f"{_ENV_PREFIX}CHEAPEST_ITEM_FREE", raw.get("cheapest_item_free", True)), True
    )
    minor_unit = os.getenv(f"{_ENV_PREFIX}MINOR_UNIT", raw.get("minor_unit", "cents"))
    major_unit = os.getenv(f"{_ENV_PREFIX}MAJOR_UNIT", raw.get("major_unit", "dollars"))
    minor_units_per_major = _to_int(
        os.getenv(f"{_ENV_PREFIX}MINOR_UNITS_PER_MAJOR", raw.get("minor_units_per_major", 100)), 100
    )

    return Config(
        catalog=dict(catalog),
        offers=[dict(entry) for entry in offers],
        cheapest_item_free=cheapest_item_free,
        minor_unit=str(minor_unit),
        major_unit=str(major_unit),
        minor_units_per_major=max(1, minor_units_per_major),
    )


@lru_cache(maxsize=32)
def load_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    root = Path(start_dir or os.getcwd()).resolve()
    pyproject = _find_pyproject(root)
    if pyproject is None:
        return _from_sources({})

    parsed = _load_toml(pyproject)
    tool = parsed.get("tool", {}) if isinstance(parsed, dict) else {}
    till = tool.get("till", {}) if isinstance(tool, dict) else {}
    return _from_sources(till if isinstance(till, dict) else {})


def get_config() -> Config:
    return load_config(os.getcwd())


def refresh_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    load_config.cache_clear()
    return load_config(start_dir)


def build_catalog(config: Config | None = None) -> Catalog:
    """Build the immutable catalog described by ``config``."""
    return Catalog((config or get_config()).catalog)


def build_offers(config: Config | None = None) -> Tuple[OfferRule, ...]:
    """Build the offer rules described by ``config``."""
    rules = []
    for entry in (config or get_config()).offers:
        missing = [key for key in ("x", "y", "item") if key not in entry]
        if missing:
            raise OfferConfigError(f"Offer {entry!r} is missing: {', '.join(missing)}")
        rules.append(OfferRule(entry["x"], entry["y"], entry["item"]))
    return tuple(rules)
