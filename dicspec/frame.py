"""pandas adapter: speciate samples held in named DataFrame columns."""

import logging

import numpy as np
import pandas as pd

from .constants import OUTPUT_COLUMNS
from .params import SampleInput
from .solver import speciate

logger = logging.getLogger(__name__)


def _require_columns(df: pd.DataFrame, columns: list[str]) -> None:
    missing = [column for column in columns if column not in df.columns]
    if missing:
        raise KeyError(f"Missing input columns: {', '.join(missing)}")


def example_frame() -> pd.DataFrame:
    """Three-lake demonstration dataset."""

    return pd.DataFrame(
        {
            "sample": ["Lake A", "Lake B", "Lake C"],
            "Baro_kPa": [99.9, 98.8, 98.9],
            "DIC_mgC.L": [1.2, 8.5, 15.0],
            "pH": [6.8, 7.2, 5.5],
            "Temp_C": [12.0, 15.0, 18.0],
        }
    )


def speciate_frame(
    df: pd.DataFrame,
    dic_col: str,
    ph_col: str,
    temp_col: str,
    pressure_col: str,
    **kwargs,
) -> pd.DataFrame:
    """Return a copy of ``df`` with the calc_* speciation columns appended.

    The input frame is left unchanged. Existing calc_* columns in the copy
    are overwritten.
    """

    _require_columns(df, [dic_col, ph_col, temp_col, pressure_col])

    result = speciate(
        df[dic_col].to_numpy(dtype=float),
        df[ph_col].to_numpy(dtype=float),
        df[temp_col].to_numpy(dtype=float),
        df[pressure_col].to_numpy(dtype=float),
        **kwargs,
    )

    out = df.copy()
    for column, values in result.as_record().items():
        out[column] = values

    non_finite = ~np.isfinite(out[list(OUTPUT_COLUMNS)].to_numpy(dtype=float)).all(axis=1)
    if non_finite.any():
        logger.warning(
            "%d of %d rows produced non-finite speciation outputs",
            int(non_finite.sum()),
            len(out),
        )
    logger.debug("Speciated frame with %d rows", len(out))
    return out


def samples_from_frame(
    df: pd.DataFrame,
    dic_col: str,
    ph_col: str,
    temp_col: str,
    pressure_col: str,
    id_col: str | None = None,
) -> list[SampleInput]:
    """Build SampleInput records from named DataFrame columns, in row order."""

    columns = [dic_col, ph_col, temp_col, pressure_col]
    if id_col is not None:
        columns.append(id_col)
    _require_columns(df, columns)

    samples: list[SampleInput] = []
    for _, row in df.iterrows():
        samples.append(
            SampleInput(
                dic_mg_per_l=float(row[dic_col]),
                ph=float(row[ph_col]),
                temp_c=float(row[temp_col]),
                pressure_kpa=float(row[pressure_col]),
                sample_id=str(row[id_col]) if id_col is not None else None,
            )
        )
    return samples
