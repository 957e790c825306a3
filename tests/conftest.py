"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from meters.dispatcher import QueryDispatcher
from meters.lookup import InMemoryMeterLookup
from meters.models import MeterRecord


@pytest.fixture
def sample_meters() -> list[MeterRecord]:
    """Three meters in a fixed order."""
    return [
        MeterRecord(id="m1", name="Main supply", location="Basement", unit="m3"),
        MeterRecord(id="m2", name="Garden tap", location="Backyard", unit="m3"),
        MeterRecord(id="m3", name="Boiler feed", location="Utility room", unit="m3", author_id="a1"),
    ]


@pytest.fixture
def lookup(sample_meters: list[MeterRecord]) -> InMemoryMeterLookup:
    return InMemoryMeterLookup(sample_meters)


@pytest.fixture
def dispatcher(lookup: InMemoryMeterLookup) -> QueryDispatcher:
    return QueryDispatcher(lookup)


@pytest.fixture
def mock_lookup() -> MagicMock:
    """A lookup whose accessors can be stubbed per test."""
    return MagicMock(spec=["get_by_id", "get_all"])


@pytest.fixture
def meter_source(tmp_path: Path) -> Path:
    """Write a YAML meter source and return its path."""
    path = tmp_path / "meters.yaml"
    path.write_text(
        "meters:\n"
        "  - id: m1\n"
        "    name: Main supply\n"
        "    unit: m3\n"
        "  - id: m2\n"
        "    name: Garden tap\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
