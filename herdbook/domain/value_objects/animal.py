from __future__ import annotations

from enum import Enum


class Sex(str, Enum):
    FEMALE = "female"
    MALE = "male"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    SICK = "sick"
    TREATMENT = "treatment"
