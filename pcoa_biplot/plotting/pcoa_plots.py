# pcoa_biplot/plotting/pcoa_plots.py

import pandas as pd
from typing import Optional, Sequence

from pcoa_biplot.biplot import build_biplot
from pcoa_biplot.config.biplot_config import BiplotConfig
from pcoa_biplot.models.ordination import OrdinationResult
from pcoa_biplot.plotting.plotly_backend import render_figure


def plot_pcoa(
    ordination: OrdinationResult,
    data: pd.DataFrame,
    groups: Optional[Sequence] = None,
    envs: Optional[pd.DataFrame] = None,
    config: Optional[BiplotConfig] = None,
    height: int = 550,
):
    """Build the biplot layers and draw them as a plotly Figure."""
    spec = build_biplot(ordination, data, groups=groups, envs=envs, config=config)
    return render_figure(spec, height=height)
