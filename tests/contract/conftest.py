"""Fixtures shared by the live API suites.

Each suite module sets ``API_NAME`` (a key of ``CONFIG_MAP``). The module
config fixture probes the API once and skips the whole module when it cannot
be reached at all; any later failure is a real contract failure.
"""

import httpx
import pytest
import pytest_asyncio

from apicontract.client.factory import create_api_client
from apicontract.common.config import get_config
from apicontract.common.logging import bind_api_context, clear_api_context
from apicontract.contract.validators import start_timer


@pytest.fixture(scope="module")
def api_config(request):
    """Configuration for the module's API, skipped when offline."""
    api_name = request.module.API_NAME
    config = get_config(api_name)
    try:
        httpx.get(config.base_url, timeout=config.api_timeout_seconds, follow_redirects=True)
    except httpx.TransportError:
        pytest.skip(f"{api_name} not reachable at {config.base_url}")

    bind_api_context(api_name)
    yield config
    clear_api_context()


@pytest_asyncio.fixture
async def client(request, api_config):
    """Client session bound to the module's API."""
    async with create_api_client(request.module.API_NAME, config=api_config) as api_client:
        yield api_client


@pytest.fixture
def start_time():
    """Timer started right before the test body runs."""
    return start_timer()


@pytest.fixture
def max_response_ms(api_config):
    """Response-time budget for ordinary calls (``API_MAX_RESPONSE_MS``)."""
    return api_config.api_max_response_ms
