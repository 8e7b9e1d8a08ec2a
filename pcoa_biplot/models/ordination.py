# pcoa_biplot/models/ordination.py

from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np


@dataclass
class OrdinationResult:
    """
    Output of a principal coordinates analysis computed elsewhere.

    `points` holds one row per observation and one column per axis,
    `eigenvalues` holds every eigenvalue of the decomposition (negative
    ones included) in axis order.
    """
    points: np.ndarray
    eigenvalues: np.ndarray
    sample_ids: Optional[List[str]] = None
    metadata: dict = field(default_factory=dict)

    def __post_init__(self):
        self.points = np.atleast_2d(np.asarray(self.points, dtype=float))
        self.eigenvalues = np.asarray(self.eigenvalues, dtype=float).ravel()
        if self.sample_ids is None:
            self.sample_ids = [str(i + 1) for i in range(self.points.shape[0])]
        elif len(self.sample_ids) != self.points.shape[0]:
            raise ValueError(
                f"Got {len(self.sample_ids)} sample ids for {self.points.shape[0]} observations."
            )

    @property
    def n_observations(self) -> int:
        return self.points.shape[0]

    @property
    def n_axes(self) -> int:
        return self.points.shape[1]

    def explained_variance(self) -> np.ndarray:
        return self.eigenvalues / self.eigenvalues.sum()

    def to_dict(self) -> dict:
        return {
            "points": self.points.tolist(),
            "eigenvalues": self.eigenvalues.tolist(),
            "sample_ids": list(self.sample_ids),
            "metadata": self.metadata,
        }

    @staticmethod
    def from_dict(data: dict) -> "OrdinationResult":
        return OrdinationResult(
            points=np.array(data["points"], dtype=float),
            eigenvalues=np.array(data["eigenvalues"], dtype=float),
            sample_ids=data.get("sample_ids"),
            metadata=data.get("metadata", {}),
        )
