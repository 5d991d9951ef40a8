"""Tests for configuration loading."""

from pathlib import Path

import pytest

from core.config import load_config_model
from core.config_models import MoodFlowConfig


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("MOODFLOW_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("MOODFLOW_JWT_SECRET", raising=False)
    config = MoodFlowConfig()
    assert config.paths.db_path == tmp_path / "home" / "moodflow.db"
    assert config.auth.jwt_secret is None
    assert config.celebration.seconds == 8.0
    assert config.celebration.streak_length == 7


def test_load_yaml(tmp_path, monkeypatch):
    monkeypatch.delenv("MOODFLOW_JWT_SECRET", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        "paths:\n"
        f"  data_dir: {tmp_path / 'data'}\n"
        "auth:\n"
        "  jwt_secret: from-file\n"
        "logging:\n"
        "  level: debug\n"
    )
    config = load_config_model(path)
    assert config.paths.db_path == Path(tmp_path / "data" / "moodflow.db")
    assert config.auth.jwt_secret == "from-file"
    assert config.logging.level == "DEBUG"


def test_env_var_expansion(tmp_path, monkeypatch):
    monkeypatch.delenv("MOODFLOW_JWT_SECRET", raising=False)
    monkeypatch.setenv("MY_SECRET", "expanded")
    path = tmp_path / "config.yaml"
    path.write_text("auth:\n  jwt_secret: ${MY_SECRET}\n")
    assert load_config_model(path).auth.jwt_secret == "expanded"


def test_env_secret_overrides_file(tmp_path, monkeypatch):
    monkeypatch.setenv("MOODFLOW_JWT_SECRET", "from-env")
    path = tmp_path / "config.yaml"
    path.write_text("auth:\n  jwt_secret: from-file\n")
    assert load_config_model(path).auth.jwt_secret == "from-env"


@pytest.mark.parametrize(
    "body",
    [
        "logging:\n  level: LOUD\n",
        "auth:\n  algorithm: none\n",
        "celebration:\n  streak_length: 0\n",
        "paths: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path, body):
    path = tmp_path / "config.yaml"
    path.write_text(body)
    with pytest.raises(ValueError):
        load_config_model(path)
