import pytest

from dentry.core import config


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "CONFIG_DIR", tmp_path / "config")
    monkeypatch.setattr(config, "SETTINGS_FILE", tmp_path / "config" / "settings.json")
    monkeypatch.setattr(config.Config, "_instance", None)
    monkeypatch.setattr("dentry.main.setup_logging", lambda level: None)
