# tests/conftest.py
"""Shared test fixtures.

Every test runs with an isolated configuration: no IMSCTL_* variables from the
developer's shell, a throwaway user config directory and a temporary working
directory (so no stray `.env` is picked up).
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings
from typer.testing import CliRunner

import core.config
from core.domain.models import ImsSession

# The config isolation fixture below is function scoped; property tests never touch it.
settings.register_profile("imsctl", suppress_health_check=[HealthCheck.function_scoped_fixture], deadline=None)
settings.load_profile("imsctl")

IMS_HOST = "ims.example.com"
IMS_PORT = 8443


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_dir = tmp_path / "user-config"
    for key in list(os.environ):
        if key.upper().startswith(core.config.ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(core.config, "get_user_config_dir", lambda: config_dir)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return config_dir


@pytest.fixture
def session() -> ImsSession:
    return ImsSession(host=IMS_HOST, port=IMS_PORT, user="USER1", password="secret")


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def connection_args() -> list[str]:
    return ["--host", IMS_HOST, "--port", str(IMS_PORT), "--user", "USER1", "--password", "secret"]
