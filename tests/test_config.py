import textwrap

import pytest

from till.config import Config, build_catalog, build_offers, refresh_config
from till.errors import CatalogConfigError, OfferConfigError
from till.offer import DEFAULT_OFFERS, OfferRule
from till.till import total_cost


def test_defaults_without_pyproject():
    cfg = refresh_config()

    assert cfg == Config()
    assert dict(build_catalog(cfg).items()) == {"apple": 60, "banana": 20, "orange": 25}
    assert build_offers(cfg) == DEFAULT_OFFERS
    assert cfg.cheapest_item_free is True
    assert cfg.minor_units_per_major == 100


def test_config_loads_from_pyproject(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text(
        textwrap.dedent(
            """
            [tool.till]
            cheapest_item_free = false
            minor_unit = "pence"
            major_unit = "pounds"

            [tool.till.catalog]
            pear = 40
            plum = 15

            [[tool.till.offers]]
            x = 3
            y = 1
            item = "pear"
            """
        ),
        encoding="utf-8",
    )

    monkeypatch.chdir(tmp_path)
    cfg = refresh_config()

    assert cfg.cheapest_item_free is False
    assert cfg.minor_unit == "pence"
    assert cfg.major_unit == "pounds"
    catalog = build_catalog(cfg)
    offers = build_offers(cfg)
    assert dict(catalog.items()) == {"pear": 40, "plum": 15}
    assert offers == (OfferRule(3, 1, "pear"),)
    assert total_cost(["pear", "pear", "pear", "plum"], catalog=catalog, offers=offers) == 40


def test_config_is_found_from_subdirectory(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text("[tool.till]\nminor_units_per_major = 1000\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert refresh_config().minor_units_per_major == 1000


def test_env_overrides_pyproject(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text("[tool.till]\ncheapest_item_free = true\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TILL_CHEAPEST_ITEM_FREE", "off")
    monkeypatch.setenv("TILL_MINOR_UNIT", "pence")
    monkeypatch.setenv("TILL_MINOR_UNITS_PER_MAJOR", "50")

    cfg = refresh_config()

    assert cfg.cheapest_item_free is False
    assert cfg.minor_unit == "pence"
    assert cfg.minor_units_per_major == 50


def test_malformed_scalars_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("TILL_CHEAPEST_ITEM_FREE", "maybe")
    monkeypatch.setenv("TILL_MINOR_UNITS_PER_MAJOR", "lots")

    cfg = refresh_config()

    assert cfg.cheapest_item_free is True
    assert cfg.minor_units_per_major == 100


def test_minor_units_per_major_is_at_least_one(monkeypatch):
    monkeypatch.setenv("TILL_MINOR_UNITS_PER_MAJOR", "0")
    assert refresh_config().minor_units_per_major == 1


def test_invalid_catalog_cost_is_rejected(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[tool.till.catalog]\npear = -5\n', encoding="utf-8")

    with pytest.raises(CatalogConfigError):
        build_catalog(refresh_config())


def test_catalog_must_be_a_table(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[tool.till]\ncatalog = ["pear"]\n', encoding="utf-8")

    with pytest.raises(CatalogConfigError):
        refresh_config()


def test_offer_missing_fields_is_rejected(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[[tool.till.offers]]\nx = 2\nitem = "apple"\n', encoding="utf-8")

    with pytest.raises(OfferConfigError, match="y"):
        build_offers(refresh_config())


def test_offer_with_x_not_above_y_is_rejected(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        '[[tool.till.offers]]\nx = 2\ny = 2\nitem = "apple"\n', encoding="utf-8"
    )

    with pytest.raises(OfferConfigError):
        build_offers(refresh_config())


def test_pyproject_without_till_table_uses_defaults(tmp_path):
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "shop"\n', encoding="utf-8")

    assert refresh_config() == Config()
