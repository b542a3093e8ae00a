from __future__ import annotations

import pytest

from src.imagelab.config import AppConfig
from tests.helpers.config import VENDOR_CREDENTIALS, make_config


@pytest.fixture
def config() -> AppConfig:
    return make_config()


@pytest.fixture
def bare_config() -> AppConfig:
    """Configuration with every vendor credential missing."""

    return make_config(**{name: None for name in VENDOR_CREDENTIALS})
