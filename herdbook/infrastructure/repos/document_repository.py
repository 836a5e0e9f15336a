from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from herdbook.application.interfaces.record_store import (
    Document,
    RecordStore,
    SortDirection,
    Subscription,
)
from herdbook.infrastructure.store.sqlalchemy_store import sort_documents

T = TypeVar("T")


class MappedSubscription(Generic[T]):
    """Wraps a document subscription and yields entities instead."""

    def __init__(self, inner: Subscription, to_domain: Callable[[Document], T]) -> None:
        self._inner = inner
        self._to_domain = to_domain

    def __aiter__(self) -> MappedSubscription[T]:
        return self

    async def __anext__(self) -> list[T]:
        documents = await self._inner.__anext__()
        return [self._to_domain(d) for d in documents]

    def unsubscribe(self) -> None:
        self._inner.unsubscribe()


class DocumentRepository(Generic[T]):
    collection: str
    order_by: str | None = None
    direction: SortDirection = "desc"

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def _to_document(self, entity: T) -> Document:
        raise NotImplementedError

    def _to_domain(self, document: Document) -> T:
        raise NotImplementedError

    async def _get(self, record_id: str, owner_id: str | None) -> T | None:
        document = await self.store.get(self.collection, record_id, owner_id=owner_id)
        return self._to_domain(document) if document is not None else None

    async def _list(self, owner_id: str | None, **equals: str) -> list[T]:
        if equals:
            documents = sort_documents(
                await self.store.find(self.collection, equals=equals, owner_id=owner_id),
                self.order_by,
                self.direction,
            )
        else:
            documents = await self.store.get_all(
                self.collection,
                owner_id=owner_id,
                order_by=self.order_by,
                direction=self.direction,
            )
        return [self._to_domain(d) for d in documents]

    async def delete(self, record_id: str, *, owner_id: str | None = None) -> bool:
        return await self.store.delete(self.collection, record_id, owner_id=owner_id)

    async def subscribe(self, owner_id: str | None = None) -> MappedSubscription[T]:
        inner = await self.store.subscribe(
            self.collection,
            order_by=self.order_by,
            direction=self.direction,
            owner_id=owner_id,
        )
        return MappedSubscription(inner, self._to_domain)
