from __future__ import annotations

from datetime import date

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()


@pytest.fixture()
def start() -> date:
    return date(2025, 3, 1)
