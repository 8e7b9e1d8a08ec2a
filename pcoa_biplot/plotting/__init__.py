from .pcoa_plots import plot_pcoa
from .plotly_backend import register_layer_renderer, render_figure

__all__ = ["plot_pcoa", "register_layer_renderer", "render_figure"]
