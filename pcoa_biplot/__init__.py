# pcoa_biplot/__init__.py

from pcoa_biplot.biplot import BiplotBuilder, build_biplot
from pcoa_biplot.config.biplot_config import BiplotConfig
from pcoa_biplot.models.layers import PlotSpec
from pcoa_biplot.models.ordination import OrdinationResult
from pcoa_biplot.plotting.pcoa_plots import plot_pcoa
from pcoa_biplot.plotting.plotly_backend import render_figure

__version__ = "0.1.0"

__all__ = [
    "BiplotBuilder",
    "BiplotConfig",
    "OrdinationResult",
    "PlotSpec",
    "build_biplot",
    "plot_pcoa",
    "render_figure",
]
