from __future__ import annotations

from enum import Enum


class ObservationType(str, Enum):
    ILLNESS = "illness"
    TREATMENT = "treatment"
    VACCINATION = "vaccination"
    CHECKUP = "checkup"
    OTHER = "other"

    def affects_health_status(self) -> bool:
        return self in {ObservationType.ILLNESS, ObservationType.TREATMENT}


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class ObservationStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    SUSPENDED = "suspended"
