"""Pytest configuration for the playwright-mcp test suite."""

from __future__ import annotations

import pytest

from playwrightmcp.container import ServiceContainer
from playwrightmcp.domains.resources import ResourceService
from playwrightmcp.models.config_models import ServerConfig
from tests.helpers.fake_driver import FakeDriverFactory


@pytest.fixture
def driver_factory() -> FakeDriverFactory:
    """Driver factory producing in-memory fake browsers."""
    return FakeDriverFactory()


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(headless=True)


@pytest.fixture
def container(config: ServerConfig, driver_factory: FakeDriverFactory) -> ServiceContainer:
    """Service container wired to the fake driver."""
    return ServiceContainer(config=config, driver_factory=driver_factory)


@pytest.fixture
def resources() -> ResourceService:
    return ResourceService()
