from __future__ import annotations

from typing import Protocol

from herdbook.application.interfaces.record_store import Subscription
from herdbook.domain.models.medical_observation import MedicalObservation


class MedicalObservationsRepository(Protocol):
    async def add(self, observation: MedicalObservation) -> MedicalObservation: ...

    async def get(
        self, observation_id: str, *, owner_id: str | None = None
    ) -> MedicalObservation | None: ...

    async def list(
        self, owner_id: str | None = None, *, animal_id: str | None = None
    ) -> list[MedicalObservation]: ...

    async def update(
        self, observation: MedicalObservation, *, owner_id: str | None = None
    ) -> MedicalObservation: ...

    async def delete(self, observation_id: str, *, owner_id: str | None = None) -> bool: ...

    async def subscribe(self, owner_id: str | None = None) -> Subscription: ...
