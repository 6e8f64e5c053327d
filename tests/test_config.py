"""Tests for config loading."""

import pytest

from matupptackaren.config import (
    DEFAULT_BASE_URL,
    AppConfig,
    LookupConfig,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("OFF_BASE_URL", raising=False)
    monkeypatch.delenv("OFF_USER_AGENT", raising=False)


def test_load_config_defaults():
    """Loading with no path returns all defaults."""
    config = load_config()
    assert isinstance(config, AppConfig)
    assert config.lookup.base_url == DEFAULT_BASE_URL
    assert config.lookup.timeout == 10.0
    assert config.lookup.page_size == 50
    assert config.lookup.batch_size == 5
    assert config.locale.language == "sv"
    assert config.locale.unknown_name == "Okänd produkt"
    assert config.measurements.glass_ml == 250.0
    assert config.measurements.teaspoon_g == 5.0
    assert config.measurements.tablespoon_g == 15.0
    assert config.export.delimiter == ","


def test_load_config_nonexistent_file():
    """Loading a nonexistent file returns defaults."""
    config = load_config("/nonexistent/path.toml")
    assert config.lookup == LookupConfig()


def test_load_config_from_toml(tmp_path):
    """Loading a valid TOML file populates config."""
    path = tmp_path / "config.toml"
    path.write_text(
        """\
[lookup]
base_url = "https://se.openfoodfacts.org/"
timeout = 5
page_size = 20
batch_size = 3

[locale]
language = "en"
unknown_name = "Unknown product"

[measurements]
glass_ml = 200
cooked_volume_ml = 100

[export]
delimiter = ";"
""",
        encoding="utf-8",
    )
    config = load_config(path)

    assert config.lookup.base_url == "https://se.openfoodfacts.org"
    assert config.lookup.timeout == 5.0
    assert config.lookup.page_size == 20
    assert config.lookup.batch_size == 3
    assert config.locale.language == "en"
    assert config.locale.unknown_name == "Unknown product"
    assert config.measurements.glass_ml == 200.0
    assert config.measurements.cooked_volume_ml == 100.0
    # Untouched keys keep their defaults
    assert config.measurements.tablespoon_g == 15.0
    assert config.export.delimiter == ";"


def test_load_config_env_override(monkeypatch):
    """Environment variables fill in an unset endpoint."""
    monkeypatch.setenv("OFF_BASE_URL", "https://staging.test/")
    monkeypatch.setenv("OFF_USER_AGENT", "Test/0.1")

    config = load_config()
    assert config.lookup.base_url == "https://staging.test"
    assert config.lookup.user_agent == "Test/0.1"


def test_load_config_file_takes_precedence(monkeypatch, tmp_path):
    """Config file base URL takes precedence over env var."""
    monkeypatch.setenv("OFF_BASE_URL", "https://env.test")
    path = tmp_path / "config.toml"
    path.write_text('[lookup]\nbase_url = "https://file.test"\n', encoding="utf-8")

    assert load_config(path).lookup.base_url == "https://file.test"


def test_batch_size_at_least_one(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[lookup]\nbatch_size = 0\n", encoding="utf-8")
    assert load_config(path).lookup.batch_size == 1
