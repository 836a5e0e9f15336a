from __future__ import annotations

from datetime import date

import pytest

from herdbook.interfaces.http.deps import get_today

TODAY = date(2024, 7, 10)


@pytest.fixture(autouse=True)
def fixed_today(app):
    app.dependency_overrides[get_today] = lambda: TODAY
    yield TODAY
    app.dependency_overrides.clear()


@pytest.fixture()
def register_animal(client, owner_headers):
    async def _register(**overrides) -> dict:
        payload = {
            "name": "Bella",
            "breed": "Holstein",
            "birth_date": "2021-03-01",
            "initial_weight": 480,
        }
        payload.update(overrides)
        response = await client.post("/api/v1/animals", json=payload, headers=owner_headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _register
