from __future__ import annotations

from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from vector_api.settings import ApiSettings, get_settings
from tests.fake_service import TEST_API_KEY, FakeExtractionService, make_packed_result


@pytest.fixture()
def packed_result() -> dict[str, Any]:
    return make_packed_result()


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[ApiSettings]:
    monkeypatch.setenv("API_KEY", TEST_API_KEY)
    for name in ("USE_LOCALHOST", "VECTOR_API_HOSTNAME", "VECTOR_API_PORT", "VECTOR_API_PATH_REVISION"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture()
def fake_service(packed_result: dict[str, Any]) -> FakeExtractionService:
    return FakeExtractionService(packed_result=packed_result)


@pytest.fixture()
def service_client(fake_service: FakeExtractionService) -> TestClient:
    return TestClient(fake_service.build_app())
