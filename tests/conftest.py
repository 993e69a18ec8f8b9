"""Pytest configuration and fixtures for jest_injector tests."""

from __future__ import annotations

from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from jest_injector import Injector
from jest_injector.infrastructure.config import Config, ResolutionConfig
from jest_injector.infrastructure.container import reset_injector
from jest_injector.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def test_config() -> Config:
    """Provide a configuration with resolution tracing turned off."""
    return Config(resolution=ResolutionConfig(trace_resolutions=False))


@pytest.fixture
def injector(test_config: Config) -> Generator[Injector, None, None]:
    """Provide a fresh injector for each test."""
    reset_injector()
    inj = Injector(config=test_config)
    yield inj
    inj.clear()


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def metered_injector(test_config: Config, metrics_registry: MetricsRegistry) -> Injector:
    """Provide an injector that records metrics into an isolated registry."""
    return Injector(config=test_config, metrics=metrics_registry)


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
