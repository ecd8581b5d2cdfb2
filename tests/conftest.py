import pytest


@pytest.fixture(autouse=True)
def clear_till_env(monkeypatch):
    for key in [
        "TILL_CHEAPEST_ITEM_FREE",
        "TILL_MINOR_UNIT",
        "TILL_MAJOR_UNIT",
        "TILL_MINOR_UNITS_PER_MAJOR",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep the repository's own pyproject.toml out of config discovery."""
    monkeypatch.chdir(tmp_path)
