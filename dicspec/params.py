"""Input schema for DICSpec."""

from dataclasses import dataclass


class DomainError(ValueError):
    """Raised in strict mode when a speciation output is not finite."""


@dataclass(frozen=True, slots=True)
class SampleInput:
    dic_mg_per_l: float
    ph: float
    temp_c: float
    pressure_kpa: float
    sample_id: str | None = None
