# pcoa_biplot/analysis/envfit.py

"""
Fitting environmental vectors onto an ordination.

Each environmental variable is regressed on the (centred) ordination scores.
The regression coefficients give the direction of steepest increase of the
variable in ordination space; r² measures how well the ordination explains
it. Significance comes from permuting the rows of the environmental table.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence
import numpy as np
import pandas as pd

from pcoa_biplot.analysis.scores import select_axes
from pcoa_biplot.models.ordination import OrdinationResult

logger = logging.getLogger(__name__)

EPS = np.sqrt(np.finfo(float).eps)


@dataclass
class EnvFitResult:
    arrows: pd.DataFrame
    r2: pd.Series
    p_values: Optional[pd.Series]
    permutations: int

    def scaled_vectors(self, zoom: float = 1.0) -> pd.DataFrame:
        return self.arrows.mul(np.sqrt(self.r2), axis=0) * zoom

    def to_frame(self) -> pd.DataFrame:
        df = self.arrows.copy()
        df["r2"] = self.r2
        if self.p_values is not None:
            df["p_value"] = self.p_values
        return df


def _numeric_env(env: pd.DataFrame) -> pd.DataFrame:
    numeric = env.select_dtypes(include="number")
    skipped = [c for c in env.columns if c not in numeric.columns]
    if skipped:
        logger.warning(f"Skipping non-numeric environmental variables: {skipped}")
    if numeric.shape[1] == 0:
        raise ValueError("No numeric environmental variables to fit.")
    return numeric


def _fitted_r2(Q: np.ndarray, P: np.ndarray) -> np.ndarray:
    """Squared correlation between each centred column of P and its projection on Q."""
    H = Q @ (Q.T @ P)
    num = (H * P).sum(axis=0)
    den = np.sqrt((H ** 2).sum(axis=0) * (P ** 2).sum(axis=0))
    with np.errstate(invalid="ignore", divide="ignore"):
        r = num / den
    return np.nan_to_num(r ** 2)


def envfit(
    ordination: OrdinationResult,
    env: pd.DataFrame,
    axes: Sequence[int] = (1, 2),
    permutations: int = 999,
    seed: Optional[int] = None,
    prefix: str = "Dim",
) -> EnvFitResult:
    scores = select_axes(ordination, axes, prefix=prefix)
    env = _numeric_env(env)
    if len(env) != len(scores):
        raise ValueError(
            f"Environmental table has {len(env)} rows but the ordination has {len(scores)} observations."
        )

    X = scores.to_numpy(dtype=float)
    X = X - X.mean(axis=0)
    P = env.to_numpy(dtype=float)
    P = P - P.mean(axis=0)

    Q, _ = np.linalg.qr(X)
    heads, *_ = np.linalg.lstsq(X, P, rcond=None)
    norms = np.sqrt((heads ** 2).sum(axis=0))
    with np.errstate(invalid="ignore", divide="ignore"):
        heads = np.nan_to_num(heads / norms)
    r2 = _fitted_r2(Q, P)

    arrows = pd.DataFrame(heads.T, index=env.columns, columns=scores.columns)
    r2_series = pd.Series(r2, index=env.columns, name="r2")

    p_values = None
    if permutations:
        rng = np.random.default_rng(seed)
        exceed = np.zeros(P.shape[1])
        raw = env.to_numpy(dtype=float)
        for _ in range(permutations):
            take = raw[rng.permutation(raw.shape[0])]
            take = take - take.mean(axis=0)
            exceed += _fitted_r2(Q, take) >= r2 - EPS
        p_values = pd.Series((exceed + 1) / (permutations + 1), index=env.columns, name="p_value")

    logger.debug(f"Fitted {len(arrows)} environmental vectors with {permutations} permutations.")
    return EnvFitResult(arrows=arrows, r2=r2_series, p_values=p_values, permutations=permutations)
