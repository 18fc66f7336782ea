from dataclasses import replace
import math

import numpy as np
import pytest

from dicspec.model import compute_alpha_denominators
from dicspec.params import SampleInput
from dicspec.solver import speciate, speciate_sample, speciate_samples

# Reference outputs for the three-lake demonstration dataset.
GOLDEN = [
    (
        SampleInput(dic_mg_per_l=1.2, ph=6.8, temp_c=12.0, pressure_kpa=99.9, sample_id="Lake A"),
        {
            "co2_um": 30.6252829006957,
            "hco3_um": 69.2764424989434,
            "co3_um": 0.0150106536498355,
            "carb_alk_um": 69.3064638062431,
            "pco2_uatm": 609.978441050246,
            "pco2_pct_sat": 150.897439494397,
        },
    ),
    (
        SampleInput(dic_mg_per_l=8.5, ph=7.2, temp_c=15.0, pressure_kpa=98.8, sample_id="Lake B"),
        {
            "co2_um": 100.595844012668,
            "hco3_um": 606.79005734404,
            "co3_um": 0.357645687421596,
            "carb_alk_um": 607.505348718884,
            "pco2_uatm": 2203.57741133261,
            "pco2_pct_sat": 551.193693946955,
        },
    ),
    (
        SampleInput(dic_mg_per_l=15.0, ph=5.5, temp_c=18.0, pressure_kpa=98.9, sample_id="Lake C"),
        {
            "co2_um": 1108.20102631571,
            "hco3_um": 140.756390742712,
            "co3_um": 0.00178360768693042,
            "carb_alk_um": 140.759957958086,
            "pco2_uatm": 26587.9977088055,
            "pco2_pct_sat": 6643.88664555531,
        },
    ),
]

FIELDS = ("co2_um", "hco3_um", "co3_um", "carb_alk_um", "pco2_uatm", "pco2_pct_sat")


def _baseline_sample() -> SampleInput:
    return GOLDEN[1][0]


@pytest.mark.parametrize("sample, expected", GOLDEN, ids=[s.sample_id for s, _ in GOLDEN])
def test_reference_lakes_match_published_outputs(sample: SampleInput, expected: dict[str, float]) -> None:
    result = speciate_sample(sample)
    for field, value in expected.items():
        assert getattr(result, field) == pytest.approx(value, rel=1e-6)


def test_scalar_inputs_return_floats() -> None:
    result = speciate(1.2, 6.8, 12.0, 99.9)
    for field in FIELDS:
        assert isinstance(getattr(result, field), float)
    assert isinstance(result.constants.kw, float)


def test_result_exposes_intermediates() -> None:
    result = speciate(1.2, 6.8, 12.0, 99.9)
    assert result.metadata["dic_um"] == pytest.approx(99.9167360532889, rel=1e-12)
    assert result.metadata["temp_k"] == pytest.approx(285.15, rel=1e-12)
    assert result.metadata["h_um"] == pytest.approx(1.58489319246111e-07, rel=1e-9)
    assert result.metadata["p_atm"] == pytest.approx(0.985936077, rel=1e-12)
    assert result.metadata["atmospheric_co2_ppm"] == 410.0
    assert result.constants.kw == pytest.approx(2.47121202147209e18, rel=1e-9)


def test_as_record_uses_output_column_names() -> None:
    record = speciate(8.5, 7.2, 15.0, 98.8).as_record()
    assert list(record) == [
        "calc_CO2_uM",
        "calc_HCO3_uM",
        "calc_CO3_uM",
        "calc_carb_alk_uM",
        "calc_pCO2_uatm",
        "calc_pCO2_perc_sat",
    ]
    assert record["calc_CO2_uM"] == pytest.approx(100.595844012668, rel=1e-6)


def test_speciation_is_deterministic() -> None:
    a = speciate_sample(_baseline_sample())
    b = speciate_sample(_baseline_sample())
    for field in FIELDS:
        assert getattr(a, field) == getattr(b, field)


def test_mass_balance_round_trip() -> None:
    for sample, _ in GOLDEN:
        result = speciate_sample(sample)
        dic_um = result.metadata["dic_um"]
        d_co2, d_hco3, d_co3 = compute_alpha_denominators(
            result.metadata["h_um"], result.constants.k1, result.constants.k2
        )
        assert result.co2_um * d_co2 == pytest.approx(dic_um, rel=1e-6)
        assert result.hco3_um * d_hco3 == pytest.approx(dic_um, rel=1e-6)
        assert result.co3_um * d_co3 == pytest.approx(dic_um, rel=1e-6)


def test_species_sum_to_total_dic() -> None:
    result = speciate_sample(_baseline_sample())
    total = result.co2_um + result.hco3_um + result.co3_um
    assert total == pytest.approx(result.metadata["dic_um"], rel=1e-9)


def test_carbonate_alkalinity_is_charge_weighted_sum() -> None:
    result = speciate_sample(_baseline_sample())
    assert result.carb_alk_um == result.hco3_um + 2 * result.co3_um


def test_ph_monotonicity() -> None:
    ph = np.arange(4.0, 12.01, 0.1)
    result = speciate(8.5, ph, 15.0, 98.8)
    assert np.all(np.diff(result.co2_um) < 0.0)
    assert np.all(np.diff(result.co3_um) > 0.0)

    peak = int(np.argmax(result.hco3_um))
    assert 0 < peak < len(ph) - 1
    assert np.all(np.diff(result.hco3_um[: peak + 1]) > 0.0)
    assert np.all(np.diff(result.hco3_um[peak:]) < 0.0)


def test_doubling_dic_doubles_species() -> None:
    base = speciate_sample(_baseline_sample())
    doubled = speciate_sample(replace(_baseline_sample(), dic_mg_per_l=17.0))
    assert doubled.co2_um == 2 * base.co2_um
    assert doubled.hco3_um == 2 * base.hco3_um
    assert doubled.co3_um == 2 * base.co3_um
    assert doubled.carb_alk_um == 2 * base.carb_alk_um


def test_low_ph_is_dominated_by_dissolved_co2() -> None:
    result = speciate(15.0, 5.5, 18.0, 98.9)
    assert result.co2_um > result.hco3_um > result.co3_um
    assert result.co3_um / result.metadata["dic_um"] < 1e-5


def test_batch_matches_single_sample_calls() -> None:
    samples = [sample for sample, _ in GOLDEN]
    batch = speciate(
        np.array([s.dic_mg_per_l for s in samples]),
        np.array([s.ph for s in samples]),
        np.array([s.temp_c for s in samples]),
        np.array([s.pressure_kpa for s in samples]),
    )
    for idx, sample in enumerate(samples):
        single = speciate_sample(sample)
        for field in FIELDS:
            assert getattr(batch, field)[idx] == pytest.approx(getattr(single, field), rel=1e-12)


def test_speciate_samples_preserves_order_and_row_independence() -> None:
    samples = [sample for sample, _ in GOLDEN]
    results = speciate_samples(reversed(samples))
    for sample, result in zip(reversed(samples), results):
        single = speciate_sample(sample)
        for field in FIELDS:
            assert getattr(result, field) == getattr(single, field)


def test_zero_pressure_gives_infinite_saturation_without_raising() -> None:
    result = speciate_sample(replace(_baseline_sample(), pressure_kpa=0.0))
    assert math.isinf(result.pco2_pct_sat)
    assert math.isfinite(result.co2_um)


def test_extreme_ph_propagates_floating_point_limits() -> None:
    # 10^-400 underflows to zero.
    result = speciate(8.5, 400.0, 15.0, 98.8)
    assert result.co2_um == 0.0
    assert result.hco3_um == 0.0
    assert result.co3_um == pytest.approx(result.metadata["dic_um"])


def test_nan_input_propagates_nan() -> None:
    result = speciate(float("nan"), 7.2, 15.0, 98.8)
    assert math.isnan(result.co2_um)
    assert math.isnan(result.pco2_pct_sat)


def test_negative_dic_is_not_rejected() -> None:
    result = speciate(-1.0, 7.2, 15.0, 98.8)
    assert result.co2_um < 0.0
    assert result.hco3_um < 0.0


def test_atmospheric_co2_override_scales_saturation_only() -> None:
    base = speciate_sample(_baseline_sample())
    doubled_ref = speciate_sample(_baseline_sample(), atmospheric_co2_ppm=820.0)
    assert doubled_ref.co2_um == base.co2_um
    assert doubled_ref.pco2_uatm == base.pco2_uatm
    assert doubled_ref.pco2_pct_sat == pytest.approx(base.pco2_pct_sat / 2.0, rel=1e-12)
