from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from herdbook.application.errors import (
    ConflictError,
    NotFound,
    StoreError,
    StorePermissionDenied,
)
from herdbook.application.interfaces.record_store import (
    Document,
    MergeResult,
    RecordStore,
    SortDirection,
)
from herdbook.infrastructure.db.orm.document import DocumentORM
from herdbook.infrastructure.store.change_feed import ChangeFeed

logger = logging.getLogger(__name__)

_RESERVED = ("id", "owner_id")


def _to_document(orm: DocumentORM) -> Document:
    return {**orm.data, "id": orm.id, "owner_id": orm.owner_id}


def _payload(record: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in record.items() if k not in _RESERVED}


def _check_owner(orm: DocumentORM, owner_id: str | None) -> None:
    if owner_id is not None and orm.owner_id is not None and orm.owner_id != owner_id:
        raise StorePermissionDenied()


def sort_documents(
    documents: list[Document], order_by: str | None, direction: SortDirection
) -> list[Document]:
    """Order documents by a field; documents without the field go last."""
    if not order_by:
        return documents
    present = [d for d in documents if d.get(order_by) is not None]
    missing = [d for d in documents if d.get(order_by) is None]
    present.sort(key=lambda d: d[order_by], reverse=direction == "desc")
    return present + missing


class SQLAlchemyRecordStore(RecordStore):
    """Document collections kept as JSON rows of a single table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        change_feed: ChangeFeed | None = None,
    ) -> None:
        self._session_factory = session_factory
        self.change_feed = change_feed or ChangeFeed()

    async def _load(
        self, session: AsyncSession, collection: str, record_id: str, *, lock: bool = False
    ) -> DocumentORM | None:
        stmt = select(DocumentORM).where(
            DocumentORM.collection == collection, DocumentORM.id == record_id
        )
        if lock:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(
        self, collection: str, record: Document, *, natural_key: str | None = None
    ) -> str:
        record_id = record.get("id") or uuid4().hex
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(
                        DocumentORM(
                            collection=collection,
                            id=record_id,
                            owner_id=record.get("owner_id"),
                            natural_key=natural_key,
                            data=_payload(record),
                        )
                    )
        except IntegrityError as exc:
            raise ConflictError(
                "A record with the same key already exists",
                details={"collection": collection, "natural_key": natural_key},
            ) from exc
        except SQLAlchemyError as exc:
            logger.error("Create failed in %s: %s", collection, exc, exc_info=True)
            raise StoreError(f"Could not create record in {collection}") from exc
        self.change_feed.publish(collection)
        return record_id

    async def get(
        self, collection: str, record_id: str, *, owner_id: str | None = None
    ) -> Document | None:
        try:
            async with self._session_factory() as session:
                orm = await self._load(session, collection, record_id)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not read {collection}/{record_id}") from exc
        if orm is None:
            return None
        _check_owner(orm, owner_id)
        return _to_document(orm)

    async def get_all(
        self,
        collection: str,
        *,
        owner_id: str | None = None,
        order_by: str | None = None,
        direction: SortDirection = "desc",
    ) -> list[Document]:
        stmt = select(DocumentORM).where(DocumentORM.collection == collection)
        if owner_id is not None:
            stmt = stmt.where(DocumentORM.owner_id == owner_id)
        stmt = stmt.order_by(DocumentORM.created_at, DocumentORM.id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not read collection {collection}") from exc
        return sort_documents([_to_document(r) for r in rows], order_by, direction)

    async def find(
        self,
        collection: str,
        *,
        equals: Mapping[str, Any],
        owner_id: str | None = None,
    ) -> list[Document]:
        documents = await self.get_all(collection, owner_id=owner_id)
        return [d for d in documents if all(d.get(k) == v for k, v in equals.items())]

    async def update(
        self,
        collection: str,
        record_id: str,
        data: Document,
        *,
        owner_id: str | None = None,
        natural_key: str | None = None,
    ) -> None:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    orm = await self._load(session, collection, record_id, lock=True)
                    if orm is None:
                        raise NotFound(f"{collection}/{record_id} not found")
                    _check_owner(orm, owner_id)
                    orm.data = {**orm.data, **_payload(data)}
                    if natural_key is not None:
                        orm.natural_key = natural_key
        except IntegrityError as exc:
            raise ConflictError(
                "Another record already uses this key",
                details={"collection": collection, "natural_key": natural_key},
            ) from exc
        except SQLAlchemyError as exc:
            logger.error("Update failed for %s/%s: %s", collection, record_id, exc, exc_info=True)
            raise StoreError(f"Could not update {collection}/{record_id}") from exc
        self.change_feed.publish(collection)

    async def delete(
        self, collection: str, record_id: str, *, owner_id: str | None = None
    ) -> bool:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    orm = await self._load(session, collection, record_id, lock=True)
                    if orm is None:
                        return False
                    _check_owner(orm, owner_id)
                    await session.delete(orm)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not delete {collection}/{record_id}") from exc
        self.change_feed.publish(collection)
        return True

    async def _merge_existing(
        self,
        session: AsyncSession,
        collection: str,
        natural_key: str,
        merge: Callable[[Document], Document],
        owner_id: str | None,
    ) -> MergeResult | None:
        stmt = (
            select(DocumentORM)
            .where(DocumentORM.collection == collection, DocumentORM.natural_key == natural_key)
            .with_for_update()
        )
        orm = (await session.execute(stmt)).scalar_one_or_none()
        if orm is None:
            return None
        _check_owner(orm, owner_id)
        orm.data = _payload(merge(_to_document(orm)))
        return MergeResult(id=orm.id, document=_to_document(orm), merged=True)

    async def merge_or_create(
        self,
        collection: str,
        *,
        natural_key: str,
        create: Document,
        merge: Callable[[Document], Document],
        owner_id: str | None = None,
    ) -> MergeResult:
        """Merge into the document holding `natural_key`, or insert `create`.

        The lookup and the write share one transaction with the row locked.
        When a concurrent writer inserts the same key first, the unique
        constraint rejects our insert and the merge branch runs against the
        row that won.
        """
        try:
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        result = await self._merge_existing(
                            session, collection, natural_key, merge, owner_id
                        )
                        if result is None:
                            record_id = create.get("id") or uuid4().hex
                            orm = DocumentORM(
                                collection=collection,
                                id=record_id,
                                owner_id=create.get("owner_id"),
                                natural_key=natural_key,
                                data=_payload(create),
                            )
                            session.add(orm)
                            result = MergeResult(
                                id=record_id, document={**create, "id": record_id}, merged=False
                            )
            except IntegrityError:
                logger.info("Concurrent insert on %s key=%s, merging", collection, natural_key)
                async with self._session_factory() as session:
                    async with session.begin():
                        result = await self._merge_existing(
                            session, collection, natural_key, merge, owner_id
                        )
                if result is None:
                    raise StoreError(f"Could not resolve key {natural_key} in {collection}")
        except SQLAlchemyError as exc:
            logger.error("Merge failed in %s key=%s: %s", collection, natural_key, exc, exc_info=True)
            raise StoreError(f"Could not write record in {collection}") from exc
        self.change_feed.publish(collection)
        return result

    async def subscribe(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        direction: SortDirection = "desc",
        owner_id: str | None = None,
    ) -> StoreSubscription:
        return StoreSubscription(
            self, collection, order_by=order_by, direction=direction, owner_id=owner_id
        )


class StoreSubscription:
    """Full-snapshot stream of one collection, woken by the change feed."""

    def __init__(
        self,
        store: SQLAlchemyRecordStore,
        collection: str,
        *,
        order_by: str | None,
        direction: SortDirection,
        owner_id: str | None,
    ) -> None:
        self._store = store
        self.collection = collection
        self._order_by = order_by
        self._direction = direction
        self._owner_id = owner_id
        self._queue = store.change_feed.register(collection)
        self._delivered_first = False
        self.closed = False

    def __aiter__(self) -> StoreSubscription:
        return self

    async def __anext__(self) -> list[Document]:
        if self.closed:
            raise StopAsyncIteration
        if self._delivered_first:
            await self._queue.get()
            # Changes committed meanwhile are covered by the same snapshot
            while not self._queue.empty():
                self._queue.get_nowait()
            if self.closed:
                raise StopAsyncIteration
        self._delivered_first = True
        return await self._store.get_all(
            self.collection,
            owner_id=self._owner_id,
            order_by=self._order_by,
            direction=self._direction,
        )

    def unsubscribe(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._store.change_feed.unregister(self.collection, self._queue)
