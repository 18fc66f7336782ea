"""DIC speciation engine for DICSpec."""

from collections.abc import Iterable
import logging

import numpy as np

from .constants import ATMOSPHERIC_CO2_PPM
from .model import (
    EquilibriumConstants,
    FloatOrArray,
    celsius_to_kelvin,
    compute_alpha_denominators,
    compute_equilibrium_constants,
    dic_mg_l_to_um,
    kpa_to_atm,
    ph_to_h_um,
)
from .params import SampleInput
from .results import SpeciationResult, ensure_finite

logger = logging.getLogger(__name__)


def _unwrap(value: np.ndarray) -> FloatOrArray:
    return float(value) if np.ndim(value) == 0 else value


def speciate(
    dic_mg_per_l: FloatOrArray,
    ph: FloatOrArray,
    temp_c: FloatOrArray,
    pressure_kpa: FloatOrArray,
    *,
    atmospheric_co2_ppm: float = ATMOSPHERIC_CO2_PPM,
    strict: bool = False,
) -> SpeciationResult:
    """Partition total DIC into CO2(aq), HCO3- and CO3-- and derive pCO2.

    Scalars give float fields; equal-length arrays give array fields in
    input order. Degenerate inputs yield NaN or infinity rather than an
    exception. With ``strict=True`` a non-finite output raises DomainError.
    """

    dic = np.asarray(dic_mg_per_l, dtype=float)
    ph_arr = np.asarray(ph, dtype=float)
    temp = np.asarray(temp_c, dtype=float)
    pressure = np.asarray(pressure_kpa, dtype=float)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        dic_um = dic_mg_l_to_um(dic)
        temp_k = celsius_to_kelvin(temp)
        h_um = ph_to_h_um(ph_arr)
        p_atm = kpa_to_atm(pressure)

        k = compute_equilibrium_constants(temp_k)
        d_co2, d_hco3, d_co3 = compute_alpha_denominators(h_um, k.k1, k.k2)

        co2_um = dic_um / d_co2
        hco3_um = dic_um / d_hco3
        co3_um = dic_um / d_co3
        carb_alk_um = hco3_um + 2 * co3_um
        pco2_uatm = co2_um / k.k0
        pco2_pct_sat = ((co2_um / 1e6) / (k.k0 * ((atmospheric_co2_ppm * 1e-6) * p_atm))) * 100

    result = SpeciationResult(
        co2_um=_unwrap(co2_um),
        hco3_um=_unwrap(hco3_um),
        co3_um=_unwrap(co3_um),
        carb_alk_um=_unwrap(carb_alk_um),
        pco2_uatm=_unwrap(pco2_uatm),
        pco2_pct_sat=_unwrap(pco2_pct_sat),
        constants=EquilibriumConstants(
            k1=_unwrap(k.k1),
            k2=_unwrap(k.k2),
            kw=_unwrap(k.kw),
            k0=_unwrap(k.k0),
        ),
        metadata={
            "dic_um": _unwrap(dic_um),
            "temp_k": _unwrap(temp_k),
            "h_um": _unwrap(h_um),
            "p_atm": _unwrap(p_atm),
            "atmospheric_co2_ppm": float(atmospheric_co2_ppm),
        },
    )
    if strict:
        ensure_finite(result)
    return result


def speciate_sample(sample: SampleInput, **kwargs) -> SpeciationResult:
    """Speciate a single sample record."""

    return speciate(
        sample.dic_mg_per_l,
        sample.ph,
        sample.temp_c,
        sample.pressure_kpa,
        **kwargs,
    )


def speciate_samples(samples: Iterable[SampleInput], **kwargs) -> list[SpeciationResult]:
    """Speciate each sample independently, preserving input order."""

    results = [speciate_sample(sample, **kwargs) for sample in samples]
    logger.debug("Speciated %d samples", len(results))
    return results
