from pathlib import Path

import pytest

from do_datasource.configs import DEFAULT_API_ENDPOINT, load_config, token_from_env
from do_datasource.errors import ConfigError


def test_load_without_file_returns_defaults():
    cfg = load_config(None)
    assert cfg.digitalocean.api_endpoint == DEFAULT_API_ENDPOINT
    assert cfg.digitalocean.timeout_seconds == 30.0


def test_load_from_file_missing_raises(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "missing.toml"))


def test_load_from_file_parses_digitalocean_table(tmp_path: Path):
    path = tmp_path / "datasource.toml"
    path.write_text(
        '[digitalocean]\n'
        'api_endpoint = "https://api.example.test"\n'
        'timeout_seconds = 5\n'
    )

    cfg = load_config(str(path))

    assert cfg.digitalocean.api_endpoint == "https://api.example.test"
    assert cfg.digitalocean.timeout_seconds == 5.0
    assert cfg.digitalocean.user_agent.startswith("do-datasource/")


def test_invalid_toml_raises_config_error(tmp_path: Path):
    path = tmp_path / "broken.toml"
    path.write_text("[digitalocean\n")

    with pytest.raises(ConfigError):
        load_config(str(path))


def test_invalid_value_raises_config_error(tmp_path: Path):
    path = tmp_path / "bad.toml"
    path.write_text('[digitalocean]\ntimeout_seconds = "soon"\n')

    with pytest.raises(ConfigError):
        load_config(str(path))


def test_token_from_env_prefers_digitalocean_token(monkeypatch):
    monkeypatch.setenv("DIGITALOCEAN_TOKEN", "primary")
    monkeypatch.setenv("DIGITALOCEAN_ACCESS_TOKEN", "secondary")
    assert token_from_env() == "primary"
