from __future__ import annotations

from pathlib import Path

import pytest

from nocloud.exceptions import ConfigurationError
from nocloud.settings import DEFAULT_BASE_URL, NoCloudSettings, get_settings


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv("NOCLOUD_CONFIG", raising=False)
    monkeypatch.delenv("NOCLOUD_BASE_URL", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_without_config_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    settings = NoCloudSettings.load()
    assert settings.api.base_url == DEFAULT_BASE_URL
    assert settings.api.timeout_seconds == 30.0
    assert settings.logging.level == "INFO"
    assert settings.logging.json_format is False


def test_load_from_yaml(tmp_path):
    path = tmp_path / "nocloud.yaml"
    path.write_text(
        "api:\n  base_url: https://files.example.com/\n  timeout_seconds: 5\n"
        "logging:\n  level: debug\n  json_format: true\n",
        encoding="utf-8",
    )
    settings = NoCloudSettings.load(path)
    assert settings.api.base_url == "https://files.example.com"
    assert settings.api.timeout_seconds == 5.0
    assert settings.logging.level == "DEBUG"
    assert settings.logging.json_format is True


def test_config_path_from_env(monkeypatch, tmp_path):
    path = tmp_path / "env.yaml"
    path.write_text("api:\n  base_url: http://localhost:8080\n", encoding="utf-8")
    monkeypatch.setenv("NOCLOUD_CONFIG", str(path))
    assert NoCloudSettings.load().api.base_url == "http://localhost:8080"


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(ConfigurationError):
        NoCloudSettings.load(tmp_path / "missing.yaml")


def test_missing_env_file_raises(monkeypatch, tmp_path):
    monkeypatch.setenv("NOCLOUD_CONFIG", str(tmp_path / "missing.yaml"))
    with pytest.raises(ConfigurationError):
        NoCloudSettings.load()


@pytest.mark.parametrize(
    "content",
    [
        "api: [unclosed\n",
        "- just\n- a list\n",
        "api:\n  timeout_seconds: -1\n",
        "api:\n  base_url: '  '\n",
    ],
)
def test_invalid_configuration_raises(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        NoCloudSettings.load(path)


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert NoCloudSettings.load(path).api.base_url == DEFAULT_BASE_URL


def test_timeout_can_be_disabled(tmp_path):
    path = tmp_path / "no-timeout.yaml"
    path.write_text("api:\n  timeout_seconds: null\n", encoding="utf-8")
    assert NoCloudSettings.load(path).api.timeout_seconds is None


def test_resolved_base_url_prefers_env(monkeypatch):
    settings = NoCloudSettings()
    assert settings.api.resolved_base_url == DEFAULT_BASE_URL
    monkeypatch.setenv("NOCLOUD_BASE_URL", "http://127.0.0.1:3000/")
    assert settings.api.resolved_base_url == "http://127.0.0.1:3000"


def test_bundled_default_config_is_valid():
    path = Path(__file__).resolve().parents[1] / "config" / "default.yaml"
    settings = NoCloudSettings.load(path)
    assert settings.api.base_url == DEFAULT_BASE_URL
    assert settings == NoCloudSettings()


def test_get_settings_is_cached(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert get_settings() is get_settings()
