from __future__ import annotations

import asyncio

import pytest

from herdbook.application.errors import NotFound, StorePermissionDenied
from herdbook.infrastructure.store.sqlalchemy_store import sort_documents


async def test_create_get_update_delete(record_store):
    record_id = await record_store.create(
        "cattle", {"name": "Bella", "breed": "Holstein", "owner_id": "farm-1"}
    )
    doc = await record_store.get("cattle", record_id)
    assert doc == {"id": record_id, "owner_id": "farm-1", "name": "Bella", "breed": "Holstein"}

    await record_store.update("cattle", record_id, {"today_milk": 12.5})
    doc = await record_store.get("cattle", record_id)
    assert doc["today_milk"] == 12.5
    assert doc["name"] == "Bella"

    assert await record_store.delete("cattle", record_id) is True
    assert await record_store.get("cattle", record_id) is None
    assert await record_store.delete("cattle", record_id) is False


async def test_update_missing_document(record_store):
    with pytest.raises(NotFound):
        await record_store.update("cattle", "missing", {"name": "X"})


async def test_owner_scope_is_enforced(record_store):
    record_id = await record_store.create("cattle", {"name": "Bella", "owner_id": "farm-1"})
    with pytest.raises(StorePermissionDenied) as info:
        await record_store.get("cattle", record_id, owner_id="farm-2")
    assert info.value.code == "store_permission_denied"
    with pytest.raises(StorePermissionDenied):
        await record_store.update("cattle", record_id, {"name": "X"}, owner_id="farm-2")
    assert await record_store.get_all("cattle", owner_id="farm-2") == []


async def test_get_all_orders_and_puts_missing_fields_last(record_store):
    await record_store.create("milkRecords", {"production_date": "2024-07-01"})
    await record_store.create("milkRecords", {"notes": "no date"})
    await record_store.create("milkRecords", {"production_date": "2024-07-03"})

    docs = await record_store.get_all("milkRecords", order_by="production_date", direction="desc")
    assert [d.get("production_date") for d in docs] == ["2024-07-03", "2024-07-01", None]

    docs = await record_store.get_all("milkRecords", order_by="production_date", direction="asc")
    assert [d.get("production_date") for d in docs] == ["2024-07-01", "2024-07-03", None]


def test_sort_documents_without_key_keeps_order():
    docs = [{"id": "b"}, {"id": "a"}]
    assert sort_documents(docs, None, "asc") == docs


async def test_find_filters_on_fields(record_store):
    await record_store.create("weightRecords", {"animal_id": "a1", "weight_kg": 300})
    await record_store.create("weightRecords", {"animal_id": "a2", "weight_kg": 310})
    found = await record_store.find("weightRecords", equals={"animal_id": "a2"})
    assert [d["weight_kg"] for d in found] == [310]


async def test_merge_or_create_keeps_one_document_per_key(record_store):
    def add_liters(existing):
        return {**existing, "liters": existing["liters"] + 2}

    first = await record_store.merge_or_create(
        "milkRecords", natural_key="a1:2024-07-10", create={"liters": 5}, merge=add_liters
    )
    second = await record_store.merge_or_create(
        "milkRecords", natural_key="a1:2024-07-10", create={"liters": 5}, merge=add_liters
    )
    assert first.merged is False
    assert second.merged is True
    assert second.id == first.id
    docs = await record_store.get_all("milkRecords")
    assert len(docs) == 1
    assert docs[0]["liters"] == 7


async def test_subscription_delivers_snapshots(record_store):
    subscription = await record_store.subscribe("cattle", order_by="name", direction="asc")
    assert await subscription.__anext__() == []

    await record_store.create("cattle", {"name": "Luna"})
    await record_store.create("cattle", {"name": "Bella"})
    # Both writes are folded into the next snapshot
    snapshot = await asyncio.wait_for(subscription.__anext__(), timeout=2)
    assert [d["name"] for d in snapshot] == ["Bella", "Luna"]

    subscription.unsubscribe()
    with pytest.raises(StopAsyncIteration):
        await subscription.__anext__()
    assert record_store.change_feed.listener_count("cattle") == 0


async def test_unsubscribe_wakes_waiting_reader(record_store):
    subscription = await record_store.subscribe("cattle")
    await subscription.__anext__()
    waiter = asyncio.create_task(subscription.__anext__())
    await asyncio.sleep(0)
    subscription.unsubscribe()
    with pytest.raises(StopAsyncIteration):
        await asyncio.wait_for(waiter, timeout=2)
