from __future__ import annotations

from herdbook.application.interfaces.herd_store import HerdStore
from herdbook.application.interfaces.record_store import RecordStore
from herdbook.infrastructure.repos.animals_documents import AnimalsDocumentRepository
from herdbook.infrastructure.repos.medical_observations_documents import (
    MedicalObservationsDocumentRepository,
)
from herdbook.infrastructure.repos.milk_records_documents import MilkRecordsDocumentRepository
from herdbook.infrastructure.repos.weight_records_documents import (
    WeightRecordsDocumentRepository,
)


class DocumentHerdStore(HerdStore):
    def __init__(self, store: RecordStore) -> None:
        self.store = store
        self.animals = AnimalsDocumentRepository(store)
        self.milk_records = MilkRecordsDocumentRepository(store)
        self.weight_records = WeightRecordsDocumentRepository(store)
        self.medical_observations = MedicalObservationsDocumentRepository(store)
