"""Carbonate-system model helpers.

All helpers accept plain floats or numpy arrays and broadcast elementwise.
"""

from dataclasses import dataclass

import numpy as np

from .constants import (
    K0_COEFFS,
    K1_COEFFS,
    K2_COEFFS,
    KELVIN_OFFSET,
    KPA_TO_ATM,
    KW_COEFFS,
    MG_C_L_TO_UM,
)

FloatOrArray = float | np.ndarray


@dataclass(frozen=True, slots=True)
class EquilibriumConstants:
    k1: FloatOrArray
    k2: FloatOrArray
    kw: FloatOrArray
    k0: FloatOrArray


def dic_mg_l_to_um(dic_mg_per_l: FloatOrArray) -> FloatOrArray:
    """Convert DIC from mg C/L to umol C/L."""

    return dic_mg_per_l * MG_C_L_TO_UM


def celsius_to_kelvin(temp_c: FloatOrArray) -> FloatOrArray:
    return temp_c + KELVIN_OFFSET


def ph_to_h_um(ph: FloatOrArray) -> FloatOrArray:
    """Convert pH to the hydrogen ion term used by the K1/K2 fits.

    The value is 10^-pH with no 1e6 factor. K1 and K2 are on the same
    scale, so the speciation ratios are consistent as long as both are
    left untouched.
    """

    return np.power(10.0, -ph)


def kpa_to_atm(pressure_kpa: FloatOrArray) -> FloatOrArray:
    return pressure_kpa * KPA_TO_ATM


def compute_k1(temp_k: FloatOrArray) -> FloatOrArray:
    """First dissociation constant, CO2/HCO3-."""

    a, b, c = K1_COEFFS
    return np.power(10.0, (a / temp_k) + b + (c * temp_k))


def compute_k2(temp_k: FloatOrArray) -> FloatOrArray:
    """Second dissociation constant, HCO3-/CO3--."""

    a, b, c = K2_COEFFS
    return np.power(10.0, (a / temp_k) + b + (c * temp_k))


def compute_kw(temp_k: FloatOrArray) -> FloatOrArray:
    """Self-ionization constant of water.

    Kept in the published form 10^(log10(exp(...))) with a log10(T) term.
    No speciation output depends on it.
    """

    a, b, c = KW_COEFFS
    return np.power(10.0, np.log10(np.exp(a + (b / temp_k) + (c * np.log10(temp_k)))))


def compute_k0(temp_k: FloatOrArray) -> FloatOrArray:
    """Henry's law solubility coefficient of CO2 in water."""

    a, b, c = K0_COEFFS
    return np.power(10.0, -((a / temp_k) + b + (c * temp_k)))


def compute_equilibrium_constants(temp_k: FloatOrArray) -> EquilibriumConstants:
    """Evaluate K1, K2, Kw and K0 at a temperature in Kelvin."""

    return EquilibriumConstants(
        k1=compute_k1(temp_k),
        k2=compute_k2(temp_k),
        kw=compute_kw(temp_k),
        k0=compute_k0(temp_k),
    )


def compute_alpha_denominators(
    h_um: FloatOrArray,
    k1: FloatOrArray,
    k2: FloatOrArray,
) -> tuple[FloatOrArray, FloatOrArray, FloatOrArray]:
    """Return the inverse alpha factors for CO2, HCO3- and CO3--.

    Each species concentration is total DIC divided by its denominator.
    """

    d_co2 = 1 + (k1 / h_um) + (k1 * (k2 / np.square(h_um)))
    d_hco3 = 1 + (h_um / k1) + (k2 / h_um)
    d_co3 = (np.square(h_um) / (k1 * k2)) + (h_um / k2) + 1
    return d_co2, d_hco3, d_co3


def compute_species_fractions(
    h_um: FloatOrArray,
    k1: FloatOrArray,
    k2: FloatOrArray,
) -> tuple[FloatOrArray, FloatOrArray, FloatOrArray]:
    """Fraction of DIC present as CO2, HCO3- and CO3-- (Bjerrum fractions)."""

    d_co2, d_hco3, d_co3 = compute_alpha_denominators(h_um, k1, k2)
    return 1.0 / d_co2, 1.0 / d_hco3, 1.0 / d_co3
