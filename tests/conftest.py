import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import structlog

from ss_activewear.config.settings import Settings
from ss_activewear.services.catalog_client import SSActivewearClient


def make_settings(**overrides) -> Settings:
    """Settings independent of the developer's environment and .env file."""
    values = {
        "SS_ACCOUNT_NUMBER": "12345",
        "SS_API_KEY": "test-api-key",
        "SS_REGION": "US",
        "SS_PREFERRED_WAREHOUSES": "",
    }
    values.update(overrides)
    with patch.dict("os.environ", {}, clear=True):
        return Settings(_env_file=None, **values)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo setup_logging so loggers never outlive a captured stream."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def mock_settings():
    """Real settings with test credentials."""
    return make_settings()


@pytest.fixture
def fixtures_dir():
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_products(fixtures_dir):
    with open(fixtures_dir / "products_sample.json") as f:
        return json.load(f)


@pytest.fixture
def mock_client():
    """Fetch collaborator double; set ``fetch.return_value`` / ``side_effect`` per test."""
    client = AsyncMock()
    client.fetch = AsyncMock(return_value=[])
    return client


@pytest.fixture
def transport_client(mock_settings):
    """Build an SSActivewearClient backed by an httpx.MockTransport handler."""
    def factory(handler, settings=None):
        return SSActivewearClient(
            settings or mock_settings,
            transport=httpx.MockTransport(handler),
        )
    return factory


@pytest.fixture
def settings_factory():
    return make_settings
