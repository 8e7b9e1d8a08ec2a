# pcoa_biplot/analysis/scores.py

import logging
from typing import Optional, Sequence, Tuple
import numpy as np
import pandas as pd

from pcoa_biplot.models.ordination import OrdinationResult

logger = logging.getLogger(__name__)


def axis_names(axes: Sequence[int], prefix: str = "PCoA") -> list[str]:
    return [f"{prefix}{axis}" for axis in axes]


def check_axes(ordination: OrdinationResult, axes: Sequence[int]) -> None:
    for axis in axes:
        if axis < 1 or axis > ordination.n_axes:
            raise ValueError(
                f"Axis {axis} is out of range; the ordination has {ordination.n_axes} axes."
            )
        if axis > len(ordination.eigenvalues):
            raise ValueError(
                f"Axis {axis} has no eigenvalue; got {len(ordination.eigenvalues)} eigenvalues."
            )


def select_axes(ordination: OrdinationResult, axes: Sequence[int], prefix: str = "PCoA") -> pd.DataFrame:
    """Observation coordinates on the two requested (1-based) axes."""
    check_axes(ordination, axes)
    cols = [axis - 1 for axis in axes]
    return pd.DataFrame(
        ordination.points[:, cols],
        index=pd.Index(ordination.sample_ids, name="SampleID"),
        columns=axis_names(axes, prefix),
    )


def axis_titles(ordination: OrdinationResult, axes: Sequence[int], prefix: str = "PCoA") -> Tuple[str, str]:
    """
    Axis titles carrying the percentage of total variance on each axis,
    e.g. "PCoA1 (42.17%)". The total is the sum of every eigenvalue.
    """
    check_axes(ordination, axes)
    explained = ordination.explained_variance()
    titles = [
        f"{name} ({round(100 * explained[axis - 1], 2)}%)"
        for name, axis in zip(axis_names(axes, prefix), axes)
    ]
    return titles[0], titles[1]


def wascores(coords: pd.DataFrame, data: pd.DataFrame) -> pd.DataFrame:
    """
    Weighted averages scores: every column of `data` is placed at the
    centroid of the observation coordinates, weighted by that column's
    values at each observation.
    """
    weights = data.to_numpy(dtype=float)
    if weights.shape[0] != coords.shape[0]:
        raise ValueError(
            f"Data has {weights.shape[0]} rows but the ordination has {coords.shape[0]} observations."
        )
    if np.any(weights < 0) or weights.sum() == 0:
        raise ValueError("weights must be non-negative and not all zero")

    totals = weights.sum(axis=0)
    empty = totals == 0
    if empty.any():
        logger.warning(f"Variables with zero total weight have no score: {list(data.columns[empty])}")

    scores = np.full((weights.shape[1], coords.shape[1]), np.nan)
    scores[~empty] = weights[:, ~empty].T @ coords.to_numpy(dtype=float) / totals[~empty][:, None]
    return pd.DataFrame(scores, index=data.columns, columns=coords.columns)


def vector_lengths(table: pd.DataFrame) -> np.ndarray:
    values = table.to_numpy(dtype=float)
    return np.sqrt((values ** 2).sum(axis=1))


def label_geometry(table: pd.DataFrame, rotate: Optional[float]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-row label angle (degrees) and horizontal justification.

    With `rotate` set the label follows its vector: the angle is the vector
    direction folded into (-90, 90] so text never reads upside down, and the
    justification (1 - rotate * sign(x)) / 2 pushes the text away from the
    origin. Without it labels are horizontal and centred.
    """
    n = len(table)
    if rotate is None:
        return np.zeros(n), np.full(n, 0.5)

    x = table.iloc[:, 0].to_numpy(dtype=float)
    y = table.iloc[:, 1].to_numpy(dtype=float)
    angles = np.degrees(np.arctan2(y, x))
    angles = np.where(angles > 90, angles - 180, angles)
    angles = np.where(angles <= -90, angles + 180, angles)
    hjusts = (1 - rotate * np.sign(x)) / 2
    return angles, hjusts
