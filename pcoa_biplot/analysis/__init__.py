from .ellipse import confidence_ellipse, group_ellipses
from .envfit import EnvFitResult, envfit
from .scores import axis_titles, label_geometry, select_axes, wascores

__all__ = [
    "EnvFitResult",
    "axis_titles",
    "confidence_ellipse",
    "envfit",
    "group_ellipses",
    "label_geometry",
    "select_axes",
    "wascores",
]
