# pcoa_biplot/utils/palette.py

from itertools import cycle, islice
from typing import List, Optional, Sequence, Tuple
import numpy as np
import pandas as pd
import plotly.express as px

from pcoa_biplot.models.layers import GroupScale

DEFAULT_SYMBOLS = ["circle", "triangle-up", "square", "cross", "diamond", "x", "star", "triangle-down"]

# Font sizes (px) that size-mapped labels are rescaled into.
SIZE_RANGE = (8.0, 20.0)


def group_levels(groups: Sequence) -> List[str]:
    """Category order of a grouping vector: its own order if categorical, else sorted."""
    return [str(c) for c in pd.Categorical(groups).categories]


def build_group_scale(
    groups: Sequence,
    colors: Optional[Sequence[str]] = None,
    symbols: Optional[Sequence[str]] = None,
    title: str = "groups",
) -> GroupScale:
    levels = group_levels(groups)
    colors = colors or px.colors.qualitative.Plotly
    symbols = symbols or DEFAULT_SYMBOLS
    return GroupScale(
        categories=tuple(levels),
        colors=tuple(islice(cycle(colors), len(levels))),
        symbols=tuple(islice(cycle(symbols), len(levels))),
        title=title,
    )


def scale_sizes(values: Sequence[float], size_range: Tuple[float, float] = SIZE_RANGE) -> np.ndarray:
    """
    Linearly rescale values into `size_range`; constant input maps to the
    midpoint. Missing values get the smallest size.
    """
    values = np.asarray(values, dtype=float)
    low, high = size_range
    finite = np.isfinite(values)
    if not finite.any():
        return np.full(values.shape, low)
    vmin, vmax = values[finite].min(), values[finite].max()
    if vmax == vmin:
        scaled = np.full(values.shape, (low + high) / 2)
    else:
        scaled = low + (values - vmin) / (vmax - vmin) * (high - low)
    return np.where(finite, scaled, low)
