from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from sentinel.backend.core.config import Settings
from sentinel.backend.main import create_app

RUN_BODY = {
    "project_path": "/projects/alpha.sentinel",
    "project_name": "Alpha",
    "tool_version": "1.4.0",
    "config_payload": '{"seed": 42}',
    "duration_ms": 1500,
    "unit_count": 12,
    "sub_unit_count": 3,
}


@pytest.fixture
def app():
    return create_app(Settings(storage_backend="memory", default_per_page=20))


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def run_body():
    def _body(**overrides):
        body = dict(RUN_BODY)
        body.update(overrides)
        return body

    return _body


@pytest.fixture
def created_run(client, run_body) -> dict:
    resp = client.post("/runs", json=run_body())
    assert resp.status_code == 201
    return resp.json()
