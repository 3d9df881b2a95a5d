import os

import httpx
import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from review_catalog.main import app
from review_catalog.core.config import settings
from review_catalog.clients.servicedb import ServiceDbClient
from review_catalog.dependencies import get_review_catalog_service
from review_catalog.services.review_catalog_service import (
    ReviewCatalogService,
)
from tests.helpers import TODAY, FakeServiceDb


@pytest.fixture(scope="session", autouse=True)
def test_env():
    os.environ["SENTRY_DSN"] = ""  # Sentry off
    settings.sentry_dsn = ""


@pytest.fixture
def servicedb() -> FakeServiceDb:
    return FakeServiceDb()


@pytest.fixture
async def db_client(servicedb):
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(servicedb.handler),
        base_url="http://servicedb",
    )
    client = ServiceDbClient(http)
    yield client
    await client.aclose()


@pytest.fixture
def service(db_client) -> ReviewCatalogService:
    return ReviewCatalogService(db_client, today=lambda: TODAY)


async def _app_client(service, raise_app_exceptions=True):
    app.dependency_overrides[get_review_catalog_service] = lambda: service
    try:
        async with LifespanManager(app):
            transport = ASGITransport(
                app=app, raise_app_exceptions=raise_app_exceptions)
            async with AsyncClient(transport=transport,
                                   base_url="http://test") as ac:
                yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def client(service):
    async for ac in _app_client(service):
        yield ac


@pytest.fixture
async def lenient_client(service):
    """Client that receives the 500 instead of the raised app error."""
    async for ac in _app_client(service, raise_app_exceptions=False):
        yield ac
