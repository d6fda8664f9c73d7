from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from backend.app.main import create_app

AUTH_HEADERS = {"Authorization": "Bearer test-token"}


@pytest.fixture
def test_app_client(settings, router) -> Iterator[TestClient]:
    """App wired to the fake Linear workspace; lifespan runs inside the block."""
    app = create_app(settings=settings, credential_router=router)

    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return dict(AUTH_HEADERS)
