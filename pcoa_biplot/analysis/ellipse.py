# pcoa_biplot/analysis/ellipse.py

import logging
from typing import Sequence
import numpy as np
import pandas as pd
from scipy.stats import chi2

logger = logging.getLogger(__name__)

MIN_GROUP_SIZE = 3


def unit_circle(n_half: int = 50) -> np.ndarray:
    # Out and back around the circle so the path closes on its first point.
    theta = np.concatenate([
        np.linspace(-np.pi, np.pi, n_half),
        np.linspace(np.pi, -np.pi, n_half),
    ])
    return np.column_stack([np.cos(theta), np.sin(theta)])


def confidence_ellipse(xy: np.ndarray, level: float = 0.95) -> np.ndarray:
    """
    Outline of the `level` confidence ellipse of a bivariate sample.

    The unit circle is stretched by the Cholesky factor of the sample
    covariance, scaled by the chi-squared (df=2) radius and moved to the
    sample mean. Raises numpy.linalg.LinAlgError for a singular covariance.
    """
    xy = np.asarray(xy, dtype=float)
    sigma = np.cov(xy, rowvar=False)
    mu = xy.mean(axis=0)
    radius = np.sqrt(chi2.ppf(level, df=2))
    upper = np.linalg.cholesky(sigma).T
    return unit_circle() @ upper * radius + mu


def group_ellipses(coords: pd.DataFrame, groups: Sequence, level: float = 0.95) -> pd.DataFrame:
    """
    One ellipse outline per group, in the same columns as `coords` plus a
    "group" column. Groups with fewer than three members are left out.
    """
    df = coords.iloc[:, :2].copy()
    df["group"] = pd.Categorical(groups)

    frames = []
    for group, members in df.groupby("group", observed=True, sort=True):
        if len(members) < MIN_GROUP_SIZE:
            logger.info(f"Group '{group}' has {len(members)} members; no ellipse drawn.")
            continue
        outline = confidence_ellipse(members.iloc[:, :2].to_numpy(), level)
        frame = pd.DataFrame(outline, columns=coords.columns[:2])
        frame["group"] = group
        frames.append(frame)

    if not frames:
        return pd.DataFrame(columns=list(coords.columns[:2]) + ["group"])
    return pd.concat(frames, ignore_index=True)
