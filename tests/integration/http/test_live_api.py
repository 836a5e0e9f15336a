from __future__ import annotations

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from herdbook.interfaces.http.main import create_app


@pytest.fixture()
def live_client(test_settings):
    settings = test_settings.model_copy(update={"create_schema_on_startup": True})
    with TestClient(create_app(settings=settings)) as client:
        yield client


def test_live_herd_view_follows_changes(live_client, owner_headers):
    with live_client.websocket_connect("/api/v1/live/cattle?owner_id=farm-1") as ws:
        assert ws.receive_json()["summary"]["total"] == 0

        response = live_client.post(
            "/api/v1/animals",
            json={"name": "Bella", "breed": "Jersey", "birth_date": "2022-05-01"},
            headers=owner_headers,
        )
        assert response.status_code == 201
        assert ws.receive_json()["summary"]["total"] == 1

        ws.send_text("ping")
        assert ws.receive_text() == "pong"


def test_live_view_is_owner_scoped(live_client, owner_headers):
    live_client.post(
        "/api/v1/animals",
        json={"name": "Bella", "breed": "Jersey", "birth_date": "2022-05-01"},
        headers=owner_headers,
    )
    with live_client.websocket_connect(
        "/api/v1/live/cattle", headers={"X-Owner-ID": "farm-2"}
    ) as ws:
        assert ws.receive_json()["summary"]["total"] == 0


def test_live_rejects_unknown_collection_and_missing_owner(live_client):
    with pytest.raises(WebSocketDisconnect) as info:
        with live_client.websocket_connect("/api/v1/live/invoices?owner_id=farm-1") as ws:
            ws.receive_json()
    assert info.value.code == 1008

    with pytest.raises(WebSocketDisconnect) as info:
        with live_client.websocket_connect("/api/v1/live/cattle") as ws:
            ws.receive_json()
    assert info.value.code == 1008
