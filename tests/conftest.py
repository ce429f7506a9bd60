"""Pytest configuration for shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
from uuid import UUID

import pytest
from loguru import logger


@pytest.fixture(scope="session", autouse=True)
def silence_loguru_handlers() -> Iterator[None]:
    """Route Loguru output to a no-op sink during tests to avoid closed stream errors."""
    logger.remove()
    logger.add(lambda _: None, catch=True)
    yield


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2024, 3, 15, 14, 30, tzinfo=UTC)


@pytest.fixture
def fixed_id() -> UUID:
    return UUID("6f1c2a3e-8b4d-4e5f-9a6b-7c8d9e0f1a2b")


@pytest.fixture
def captured_logs() -> Iterator[list[str]]:
    """Collect formatted log messages emitted while the test runs."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG")
    yield messages
    logger.remove(handler_id)
