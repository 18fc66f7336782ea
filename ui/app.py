"""Streamlit UI for DICSpec."""

from __future__ import annotations

import io
import json
import logging

import altair as alt
import numpy as np
import pandas as pd
import streamlit as st

from dicspec import (
    ATMOSPHERIC_CO2_PPM,
    OUTPUT_COLUMNS,
    DomainError,
    celsius_to_kelvin,
    compute_equilibrium_constants,
    compute_species_fractions,
    example_frame,
    ph_to_h_um,
    speciate_frame,
)

logger = logging.getLogger(__name__)

SPECIES_COLUMNS = {
    "calc_CO2_uM": "CO2(aq)",
    "calc_HCO3_uM": "HCO3-",
    "calc_CO3_uM": "CO3--",
}


def _build_csv_text(df: pd.DataFrame) -> str:
    buffer = io.StringIO()
    df.to_csv(buffer, index=False, float_format="%.12g")
    return buffer.getvalue()


def _build_excel_bytes(df: pd.DataFrame) -> bytes:
    """Build XLSX export bytes for the speciation table."""

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="speciation", index=False)
    return output.getvalue()


def _species_long_frame(df: pd.DataFrame, label_col: str | None) -> pd.DataFrame:
    """Reshape species columns to long form for a stacked bar chart."""

    labels = df[label_col].astype(str) if label_col else pd.Series(
        [f"row {idx}" for idx in range(len(df))], index=df.index
    )
    wide = df[list(SPECIES_COLUMNS)].rename(columns=SPECIES_COLUMNS)
    wide.insert(0, "sample", labels.to_numpy())
    return wide.melt(id_vars=["sample"], var_name="species", value_name="concentration_um")


def _bjerrum_curve_frame(
    temp_c: float,
    ph_min: float = 2.0,
    ph_max: float = 12.0,
    n_points: int = 201,
) -> pd.DataFrame:
    """Species fractions of DIC across a pH range at a fixed temperature."""

    if ph_min >= ph_max:
        raise ValueError("ph_min must be smaller than ph_max")
    if n_points < 2:
        raise ValueError("n_points must be >= 2")

    ph = np.linspace(ph_min, ph_max, n_points)
    constants = compute_equilibrium_constants(celsius_to_kelvin(temp_c))
    f_co2, f_hco3, f_co3 = compute_species_fractions(ph_to_h_um(ph), constants.k1, constants.k2)
    wide = pd.DataFrame({"pH": ph, "CO2(aq)": f_co2, "HCO3-": f_hco3, "CO3--": f_co3})
    return wide.melt(id_vars=["pH"], var_name="species", value_name="fraction")


def _guess_column(columns: list[str], hints: tuple[str, ...]) -> int:
    """Index of the first column whose lowercase name contains a hint."""

    for idx, column in enumerate(columns):
        lowered = column.lower()
        if any(hint in lowered for hint in hints):
            return idx
    return 0


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title="DICSpec", layout="wide")
    st.title("DICSpec - Carbonate Speciation from DIC, pH and Temperature")
    st.caption("Closed-form freshwater carbonate equilibrium with temperature-dependent K1, K2 and K0.")

    with st.sidebar:
        st.header("Settings")
        atmospheric_co2_ppm = st.number_input(
            "Reference atmospheric CO2 [ppm]",
            min_value=0.0,
            value=ATMOSPHERIC_CO2_PPM,
            step=1.0,
            help="Mixing ratio used for pCO2 percent saturation.",
        )
        strict = st.checkbox(
            "Strict mode",
            value=False,
            help="Stop with an error when any output is NaN or infinite.",
        )
        uploaded = st.file_uploader("Upload samples CSV", type=["csv"])

    source_df = pd.read_csv(uploaded) if uploaded is not None else example_frame()
    st.markdown("### Samples")
    samples_df = st.data_editor(source_df, num_rows="dynamic", use_container_width=True)

    columns = [str(c) for c in samples_df.columns]
    if not columns:
        st.info("Add columns to the samples table to continue.")
        return

    c1, c2, c3, c4, c5 = st.columns(5)
    dic_col = c1.selectbox("DIC [mg C/L]", columns, index=_guess_column(columns, ("dic",)))
    ph_col = c2.selectbox("pH", columns, index=_guess_column(columns, ("ph",)))
    temp_col = c3.selectbox("Temperature [C]", columns, index=_guess_column(columns, ("temp",)))
    pressure_col = c4.selectbox("Pressure [kPa]", columns, index=_guess_column(columns, ("baro", "press", "kpa")))
    label_options = ["(row index)"] + columns
    label_choice = c5.selectbox("Label", label_options, index=1 + _guess_column(columns, ("sample", "site", "name")))
    label_col = None if label_choice == "(row index)" else label_choice

    try:
        result_df = speciate_frame(
            samples_df,
            dic_col,
            ph_col,
            temp_col,
            pressure_col,
            atmospheric_co2_ppm=float(atmospheric_co2_ppm),
            strict=strict,
        )
    except (DomainError, KeyError, ValueError) as exc:
        st.error(str(exc))
        return

    st.markdown("### Results")
    st.dataframe(result_df, use_container_width=True)

    species_df = _species_long_frame(result_df, label_col)
    species_chart = (
        alt.Chart(species_df)
        .mark_bar()
        .encode(
            x=alt.X("sample:N", title="Sample"),
            y=alt.Y("concentration_um:Q", title="Concentration [umol/L]", stack="zero"),
            color=alt.Color("species:N", title="Species"),
            tooltip=[
                alt.Tooltip("sample:N", title="Sample"),
                alt.Tooltip("species:N", title="Species"),
                alt.Tooltip("concentration_um:Q", title="umol/L", format=".3f"),
            ],
        )
        .properties(height=320)
    )
    st.altair_chart(species_chart, use_container_width=True)

    st.markdown("### Species Fractions vs pH")
    bcol1, bcol2, bcol3 = st.columns(3)
    curve_temp_c = bcol1.number_input("Temperature [C]", value=15.0, step=1.0)
    ph_min = bcol2.number_input("pH min", value=2.0, step=0.5)
    ph_max = bcol3.number_input("pH max", value=12.0, step=0.5)
    if ph_min >= ph_max:
        st.warning("pH min must be smaller than pH max for the fraction plot.")
    else:
        curve_df = _bjerrum_curve_frame(float(curve_temp_c), float(ph_min), float(ph_max))
        curve_chart = (
            alt.Chart(curve_df)
            .mark_line()
            .encode(
                x=alt.X("pH:Q", title="pH"),
                y=alt.Y("fraction:Q", title="Fraction of DIC [-]"),
                color=alt.Color("species:N", title="Species"),
            )
            .properties(height=280)
        )
        st.altair_chart(curve_chart, use_container_width=True)

    st.markdown("### Export")
    metadata = {
        "settings": {
            "atmospheric_co2_ppm": float(atmospheric_co2_ppm),
            "strict": bool(strict),
        },
        "columns": {
            "dic": dic_col,
            "ph": ph_col,
            "temperature": temp_col,
            "pressure": pressure_col,
        },
        "n_samples": int(len(result_df)),
        "outputs": {column: [float(v) for v in result_df[column]] for column in OUTPUT_COLUMNS},
    }
    metadata_json = json.dumps(metadata, indent=2, sort_keys=True)

    d1, d2, d3 = st.columns(3)
    d1.download_button(
        "Download CSV",
        data=_build_csv_text(result_df),
        file_name="dicspec_speciation.csv",
        mime="text/csv",
    )
    d2.download_button(
        "Download Excel",
        data=_build_excel_bytes(result_df),
        file_name="dicspec_speciation.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    d3.download_button(
        "Download Metadata JSON",
        data=metadata_json,
        file_name="dicspec_metadata.json",
        mime="application/json",
    )
    logger.info("Rendered speciation for %d samples", len(result_df))


if __name__ == "__main__":
    main()
