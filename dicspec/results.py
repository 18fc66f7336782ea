"""Speciation result data structures."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
import csv
import json
from pathlib import Path
from typing import Any

import numpy as np

from .constants import INPUT_FIELDS, OUTPUT_COLUMNS
from .model import EquilibriumConstants, FloatOrArray
from .params import DomainError, SampleInput

_RESULT_FIELDS = (
    "co2_um",
    "hco3_um",
    "co3_um",
    "carb_alk_um",
    "pco2_uatm",
    "pco2_pct_sat",
)


@dataclass(frozen=True, slots=True)
class SpeciationResult:
    co2_um: FloatOrArray
    hco3_um: FloatOrArray
    co3_um: FloatOrArray
    carb_alk_um: FloatOrArray
    pco2_uatm: FloatOrArray
    pco2_pct_sat: FloatOrArray
    constants: EquilibriumConstants
    metadata: dict[str, Any]

    def as_record(self) -> dict[str, FloatOrArray]:
        """Map output column names to values, in output column order."""

        return {
            column: getattr(self, field)
            for column, field in zip(OUTPUT_COLUMNS, _RESULT_FIELDS)
        }


def ensure_finite(result: SpeciationResult) -> None:
    """Raise DomainError naming every output that holds NaN or infinity."""

    errors: list[str] = []
    for column, value in result.as_record().items():
        if not np.all(np.isfinite(value)):
            errors.append(f"{column} is not finite")
    if errors:
        raise DomainError("; ".join(errors))


def _check_lengths(samples: Sequence[SampleInput], results: Sequence[SpeciationResult]) -> None:
    if len(samples) != len(results):
        raise ValueError("samples and results must have the same length")


def export_csv(
    samples: Sequence[SampleInput],
    results: Sequence[SpeciationResult],
    path: str | Path,
) -> None:
    """Export per-sample inputs and outputs to CSV with deterministic column order."""

    _check_lengths(samples, results)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(["sample_id", *INPUT_FIELDS, *OUTPUT_COLUMNS])
        for sample, result in zip(samples, results):
            inputs = [getattr(sample, field) for field in INPUT_FIELDS]
            outputs = list(result.as_record().values())
            writer.writerow(
                [sample.sample_id or ""]
                + [f"{float(v):.12g}" for v in inputs]
                + [f"{float(v):.12g}" for v in outputs]
            )


def export_metadata_json(
    samples: Sequence[SampleInput],
    results: Sequence[SpeciationResult],
    path: str | Path,
) -> None:
    """Export inputs, outputs and equilibrium constants per sample to JSON."""

    _check_lengths(samples, results)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload: dict[str, Any] = {
        "n_samples": len(samples),
        "samples": [
            {
                "inputs": asdict(sample),
                "outputs": {k: float(v) for k, v in result.as_record().items()},
                "constants": {k: float(v) for k, v in asdict(result.constants).items()},
                "metadata": {k: float(v) for k, v in result.metadata.items()},
            }
            for sample, result in zip(samples, results)
        ],
    }

    with output_path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
