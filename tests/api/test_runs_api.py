"""HTTP surface for simulation runs."""
from __future__ import annotations

from sentinel.backend.contracts.events import RunEventType


def _patch_status(client, run_id, status, payload=None):
    body = {"status": status}
    if payload is not None:
        body["result_payload"] = payload
    return client.patch(f"/runs/{run_id}/status", json=body)


class TestCreate:
    def test_create_returns_pending_run(self, created_run):
        assert created_run["status"] == "PENDING"
        assert created_run["result_payload"] == "{}"
        assert created_run["has_attached_report"] is False
        assert sorted(created_run["allowed_transitions"]) == ["CANCELLED", "RUNNING"]

    def test_invalid_field_is_400(self, client, run_body):
        resp = client.post("/runs", json=run_body(duration_ms=-1))

        assert resp.status_code == 400
        assert resp.json()["error"] == "ValidationError"
        assert "Duration must be non-negative" in resp.json()["detail"]

    def test_missing_field_is_422(self, client, run_body):
        body = run_body()
        del body["project_name"]
        assert client.post("/runs", json=body).status_code == 422


class TestRead:
    def test_get(self, client, created_run):
        resp = client.get(f"/runs/{created_run['id']}")
        assert resp.status_code == 200
        assert resp.json()["id"] == created_run["id"]

    def test_get_missing(self, client):
        resp = client.get("/runs/does-not-exist")
        assert resp.status_code == 404
        assert resp.json()["error"] == "NotFoundError"

    def test_list_paginates(self, client, run_body):
        for i in range(25):
            client.post("/runs", json=run_body(recorded_at=f"2025-01-01T12:{i:02d}:00Z"))

        resp = client.get("/runs", params={"page": 2, "per_page": 10})

        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 25
        assert data["last_page"] == 3
        assert len(data["items"]) == 10
        assert data["items"][0]["recorded_at"].startswith("2025-01-01T12:14:00")

    def test_list_filters_by_status(self, client, created_run, run_body):
        client.post("/runs", json=run_body(status="RUNNING"))

        data = client.get("/runs", params={"status": "running"}).json()

        assert data["total"] == 1
        assert data["items"][0]["status"] == "RUNNING"

    def test_list_rejects_bad_paging(self, client):
        assert client.get("/runs", params={"per_page": 101}).status_code == 400
        assert client.get("/runs", params={"page": 0}).status_code == 400

    def test_list_rejects_unknown_status(self, client):
        assert client.get("/runs", params={"status": "PAUSED"}).status_code == 400


class TestLifecycle:
    def test_full_lifecycle(self, client, created_run):
        run_id = created_run["id"]

        assert _patch_status(client, run_id, "RUNNING").json()["status"] == "RUNNING"
        resp = _patch_status(client, run_id, "COMPLETED", '{"winner": "red"}')

        assert resp.status_code == 200
        assert resp.json()["status"] == "COMPLETED"
        assert resp.json()["result_payload"] == '{"winner": "red"}'
        assert resp.json()["allowed_transitions"] == []

    def test_illegal_transition_is_409(self, client, created_run):
        resp = _patch_status(client, created_run["id"], "COMPLETED")

        assert resp.status_code == 409
        body = resp.json()
        assert body["error"] == "StateTransitionError"
        assert body["current"] == "PENDING"
        assert body["attempted"] == "COMPLETED"

    def test_unknown_status_is_400(self, client, created_run):
        assert _patch_status(client, created_run["id"], "EXPLODED").status_code == 400

    def test_retry(self, client, created_run):
        run_id = created_run["id"]
        _patch_status(client, run_id, "RUNNING")
        _patch_status(client, run_id, "FAILED", '{"error": "oom"}')

        resp = client.post(f"/runs/{run_id}/retry")

        assert resp.status_code == 200
        assert resp.json()["status"] == "RUNNING"

    def test_retry_non_failed_is_409(self, client, created_run):
        assert client.post(f"/runs/{created_run['id']}/retry").status_code == 409


class TestAuxiliary:
    def test_attach_report(self, client, created_run):
        resp = client.post(
            f"/runs/{created_run['id']}/report", json={"location": "/reports/a.pdf"}
        )
        assert resp.status_code == 200
        assert resp.json()["has_attached_report"] is True
        assert resp.json()["report_location"] == "/reports/a.pdf"

    def test_attach_empty_report_is_400(self, client, created_run):
        resp = client.post(f"/runs/{created_run['id']}/report", json={"location": ""})
        assert resp.status_code == 400

    def test_update_result(self, client, created_run):
        resp = client.put(
            f"/runs/{created_run['id']}/result", json={"result_payload": '{"n": 1}'}
        )
        assert resp.status_code == 200
        assert resp.json()["result_payload"] == '{"n": 1}'

    def test_delete(self, client, created_run):
        resp = client.delete(f"/runs/{created_run['id']}")
        assert resp.status_code == 200
        assert resp.json()["success"] is True
        assert client.get(f"/runs/{created_run['id']}").status_code == 404
        assert client.delete(f"/runs/{created_run['id']}").status_code == 404


class TestEvents:
    def test_subscribers_receive_events(self, app, client, run_body):
        received = []
        app.state.event_subscribers.append(received.append)

        run_id = client.post("/runs", json=run_body()).json()["id"]
        _patch_status(client, run_id, "RUNNING")
        client.delete(f"/runs/{run_id}")

        assert [e.event_type for e in received] == [
            RunEventType.CREATED,
            RunEventType.STATUS_CHANGED,
            RunEventType.DELETED,
        ]
        assert all(e.run_id == run_id for e in received)

    def test_failing_subscriber_does_not_fail_request(self, app, client, run_body):
        def _broken(event):
            raise RuntimeError("subscriber down")

        app.state.event_subscribers.append(_broken)

        assert client.post("/runs", json=run_body()).status_code == 201

    def test_rejected_change_emits_nothing(self, app, client, created_run):
        received = []
        app.state.event_subscribers.append(received.append)

        _patch_status(client, created_run["id"], "COMPLETED")

        assert received == []


def test_nan_duration_is_400(client):
    body = (
        '{"project_path": "/p/a", "project_name": "A", "tool_version": "1.0",'
        ' "config_payload": "{}", "duration_ms": NaN, "unit_count": 0, "sub_unit_count": 0}'
    )

    resp = client.post("/runs", content=body, headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert "Duration must be non-negative" in resp.json()["detail"]
