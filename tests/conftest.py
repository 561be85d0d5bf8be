"""
Pytest configuration and fixtures for twitter-api-core tests.
"""

import pytest
import requests
import responses as responses_lib

from twitter_api_core.core.api_client import ApiClient
from twitter_api_core.core.config import ClientConfig
from twitter_api_core.core.logging.config import LoggingConfig
from twitter_api_core.core.models import ResolvedResponse


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.twitter.com/2"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def config(base_url):
    return ClientConfig.create(base_url=base_url, timeout=10)


@pytest.fixture
def debug_config(base_url):
    """Debug mode with a DEBUG console logger."""
    return ClientConfig.create(base_url=base_url, timeout=10, debug=True)


@pytest.fixture
def session():
    session = requests.Session()
    yield session
    session.close()


@pytest.fixture
def client(config):
    """ApiClient instance for testing."""
    client = ApiClient(config=config)
    yield client
    client.close()


@pytest.fixture
def logging_config():
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )


def make_page(items, next_token=None, previous_token=None, includes=None, result_count=None):
    """Paginated response body in the v2 shape."""
    meta = {"result_count": len(items) if result_count is None else result_count}
    if next_token is not None:
        meta["next_token"] = next_token
    if previous_token is not None:
        meta["previous_token"] = previous_token
    page = {"data": items, "meta": meta}
    if includes is not None:
        page["includes"] = includes
    return page


@pytest.fixture
def page_factory():
    return make_page


@pytest.fixture
def resolved_factory():
    def factory(page, rate_limit=None):
        return ResolvedResponse(data=page, headers={}, rate_limit=rate_limit)
    return factory
