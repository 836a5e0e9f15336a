from __future__ import annotations

from typing import Protocol

from herdbook.application.interfaces.repositories.animals import AnimalRepository
from herdbook.application.interfaces.repositories.medical_observations import (
    MedicalObservationsRepository,
)
from herdbook.application.interfaces.repositories.milk_records import MilkRecordsRepository
from herdbook.application.interfaces.repositories.weight_records import WeightRecordsRepository


class HerdStore(Protocol):
    """Handle on the four herd collections, built once by the composition root."""

    animals: AnimalRepository
    milk_records: MilkRecordsRepository
    weight_records: WeightRecordsRepository
    medical_observations: MedicalObservationsRepository
