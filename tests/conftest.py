import numpy as np
import pandas as pd
import pytest
from scipy.spatial.distance import pdist, squareform

from pcoa_biplot.models.ordination import OrdinationResult


def classical_scaling(dist: np.ndarray) -> OrdinationResult:
    n = dist.shape[0]
    J = np.eye(n) - np.ones((n, n)) / n
    B = -0.5 * J @ (dist ** 2) @ J
    eigvals, eigvecs = np.linalg.eigh(B)
    idx = np.argsort(eigvals)[::-1]
    eigvals = eigvals[idx]
    eigvecs = eigvecs[:, idx]
    k = 4
    points = eigvecs[:, :k] * np.sqrt(np.clip(eigvals[:k], 0, None))
    return OrdinationResult(points=points, eigenvalues=eigvals, sample_ids=[f"S{i + 1}" for i in range(n)])


@pytest.fixture
def community():
    rng = np.random.default_rng(7)
    centers = np.array([
        [30, 5, 5, 10, 1, 2],
        [5, 30, 5, 2, 10, 1],
        [5, 5, 30, 1, 2, 10],
        [15, 15, 2, 8, 8, 8],
    ], dtype=float)
    rows = [rng.poisson(centers[i // 5]) + 1 for i in range(20)]
    return pd.DataFrame(
        rows,
        index=[f"S{i + 1}" for i in range(20)],
        columns=["Abra", "Bufo", "Cerco", "Daph", "Erpo", "Fissi"],
    )


@pytest.fixture
def groups():
    return [f"G{i // 5 + 1}" for i in range(20)]


@pytest.fixture
def ordination(community):
    dist = squareform(pdist(community.to_numpy(dtype=float), metric="braycurtis"))
    return classical_scaling(dist)


@pytest.fixture
def envs(ordination):
    rng = np.random.default_rng(11)
    pts = ordination.points
    return pd.DataFrame({
        "depth": 3 * pts[:, 0] + 0.01 * rng.normal(size=len(pts)),
        "temp": -2 * pts[:, 1] + 0.5 * rng.normal(size=len(pts)),
        "noise": rng.normal(size=len(pts)),
    })
