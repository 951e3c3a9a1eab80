from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from customer_api.config import get_settings
from customer_api.main import app
from customer_api.observability.metrics import reset_metrics
from customer_api.services.customer_store import reset_customer_store


@pytest.fixture(autouse=True)
def test_environment() -> None:
    get_settings.cache_clear()
    reset_customer_store()
    reset_metrics()

    yield

    reset_customer_store()
    reset_metrics()
    get_settings.cache_clear()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def new_customer() -> dict:
    return {"id": 4, "name": "X", "role": "User", "email": "x@y.com", "phone": "111"}
