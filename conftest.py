"""Shared fixtures: isolated config and app paths under tmp_path."""
from __future__ import annotations

import os

import pytest

from core.common.app_paths import AppPaths
from core.config.config_service import ENV_PREFIX, ConfigService


@pytest.fixture
def app_dirs(tmp_path, monkeypatch):
    data_dir = tmp_path / "appdata"
    downloads = tmp_path / "Downloads"
    downloads.mkdir()
    for key in [k for k in os.environ if k.startswith(ENV_PREFIX)]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("SIGNSTAMP_PATHS__APP_DATA_DIR", str(data_dir))
    monkeypatch.setenv("SIGNSTAMP_PATHS__DOWNLOADS_DIR", str(downloads))
    return data_dir, downloads


@pytest.fixture
def config(app_dirs, tmp_path):
    return ConfigService(user_ini=tmp_path / "no-such-config.ini")


@pytest.fixture
def paths(config):
    return AppPaths(config)
