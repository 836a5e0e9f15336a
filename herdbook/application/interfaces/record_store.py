from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol

Document = dict[str, Any]
SortDirection = Literal["asc", "desc"]

# Collection names shared by every store implementation
ANIMALS = "cattle"
MILK_RECORDS = "milkRecords"
WEIGHT_RECORDS = "weightRecords"
MEDICAL_OBSERVATIONS = "medicalObservations"
COLLECTIONS = (ANIMALS, MILK_RECORDS, WEIGHT_RECORDS, MEDICAL_OBSERVATIONS)


@dataclass(slots=True)
class MergeResult:
    id: str
    document: Document
    merged: bool


class Subscription(Protocol):
    """Stream of full, ordered collection snapshots.

    The first snapshot is delivered right away; afterwards a new snapshot is
    produced after committed changes, with changes that pile up while the
    reader is busy folded into a single snapshot. Iteration stops once
    `unsubscribe()` has been called.
    """

    def __aiter__(self) -> AsyncIterator[list[Document]]: ...

    async def __anext__(self) -> list[Document]: ...

    def unsubscribe(self) -> None: ...


class RecordStore(Protocol):
    async def create(
        self, collection: str, record: Document, *, natural_key: str | None = None
    ) -> str: ...

    async def get(
        self, collection: str, record_id: str, *, owner_id: str | None = None
    ) -> Document | None: ...

    async def get_all(
        self,
        collection: str,
        *,
        owner_id: str | None = None,
        order_by: str | None = None,
        direction: SortDirection = "desc",
    ) -> list[Document]: ...

    async def find(
        self,
        collection: str,
        *,
        equals: Mapping[str, Any],
        owner_id: str | None = None,
    ) -> list[Document]: ...

    async def update(
        self,
        collection: str,
        record_id: str,
        data: Document,
        *,
        owner_id: str | None = None,
        natural_key: str | None = None,
    ) -> None: ...

    async def delete(
        self, collection: str, record_id: str, *, owner_id: str | None = None
    ) -> bool: ...

    async def merge_or_create(
        self,
        collection: str,
        *,
        natural_key: str,
        create: Document,
        merge: Callable[[Document], Document],
        owner_id: str | None = None,
    ) -> MergeResult: ...

    async def subscribe(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        direction: SortDirection = "desc",
        owner_id: str | None = None,
    ) -> Subscription: ...
