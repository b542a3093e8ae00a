from __future__ import annotations

import pytest

from src.imagelab.config import AppConfig

pytestmark = pytest.mark.unit


def test_environment_variables_are_read(monkeypatch) -> None:
    monkeypatch.setenv("CLAID_API_KEY", "from-env")
    monkeypatch.setenv("MESHY_MAX_POLL_ATTEMPTS", "12")

    config = AppConfig(_env_file=None)

    assert config.claid_api_key == "from-env"
    assert config.meshy_max_poll_attempts == 12
    assert config.meshy_poll_interval_seconds == 5.0


def test_vendor_flags(config, bare_config) -> None:
    assert all(config.vendor_flags().values())
    assert not any(bare_config.vendor_flags().values())
