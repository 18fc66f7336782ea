"""Carbonate speciation of dissolved inorganic carbon."""

from .constants import ATMOSPHERIC_CO2_PPM, OUTPUT_COLUMNS
from .frame import example_frame, samples_from_frame, speciate_frame
from .model import (
    EquilibriumConstants,
    celsius_to_kelvin,
    compute_alpha_denominators,
    compute_equilibrium_constants,
    compute_k0,
    compute_k1,
    compute_k2,
    compute_kw,
    compute_species_fractions,
    dic_mg_l_to_um,
    kpa_to_atm,
    ph_to_h_um,
)
from .params import DomainError, SampleInput
from .results import SpeciationResult, ensure_finite, export_csv, export_metadata_json
from .solver import speciate, speciate_sample, speciate_samples

__all__ = [
    "ATMOSPHERIC_CO2_PPM",
    "OUTPUT_COLUMNS",
    "DomainError",
    "SampleInput",
    "SpeciationResult",
    "EquilibriumConstants",
    "dic_mg_l_to_um",
    "celsius_to_kelvin",
    "ph_to_h_um",
    "kpa_to_atm",
    "compute_k1",
    "compute_k2",
    "compute_kw",
    "compute_k0",
    "compute_equilibrium_constants",
    "compute_alpha_denominators",
    "compute_species_fractions",
    "speciate",
    "speciate_sample",
    "speciate_samples",
    "speciate_frame",
    "samples_from_frame",
    "example_frame",
    "ensure_finite",
    "export_csv",
    "export_metadata_json",
]
