"""Tests for environment-backed configuration."""

import pytest

from invite_sync.config import InviteSyncConfig, DEFAULT_TIMEOUT
from invite_sync.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [
        "INVITE_SYNC_BASE_URL",
        "INVITE_SYNC_TIMEOUT",
        "INVITE_SYNC_DEFAULT_REGION",
        "INVITE_SYNC_DOWNLOAD_URL",
        "INVITE_SYNC_MESSAGE",
    ]:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = InviteSyncConfig.from_env()
    assert config.base_url == ""
    assert config.timeout == DEFAULT_TIMEOUT
    assert config.default_region == "US"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("INVITE_SYNC_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("INVITE_SYNC_TIMEOUT", "2.5")
    monkeypatch.setenv("INVITE_SYNC_DEFAULT_REGION", "gb")
    config = InviteSyncConfig.from_env(require_base_url=True)
    assert config.base_url == "https://api.example.com"
    assert config.timeout == 2.5
    assert config.default_region == "GB"


def test_missing_base_url_raises_when_required():
    with pytest.raises(ConfigError, match="INVITE_SYNC_BASE_URL"):
        InviteSyncConfig.from_env(require_base_url=True)


def test_invalid_timeout(monkeypatch):
    monkeypatch.setenv("INVITE_SYNC_TIMEOUT", "soon")
    with pytest.raises(ConfigError, match="INVITE_SYNC_TIMEOUT"):
        InviteSyncConfig.from_env()


def test_non_positive_timeout(monkeypatch):
    monkeypatch.setenv("INVITE_SYNC_TIMEOUT", "0")
    with pytest.raises(ConfigError):
        InviteSyncConfig.from_env()


def test_invite_message_fills_url():
    config = InviteSyncConfig(message_template="Join me: {url}", download_url="example.com/app")
    assert config.invite_message() == "Join me: example.com/app"
