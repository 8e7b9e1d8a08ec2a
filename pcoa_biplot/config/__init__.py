from .biplot_config import (
    BiplotConfig,
    EllipseStyle,
    FittedVectorStyle,
    ObservationDisplay,
    ObservationStyle,
    VariableDisplay,
    VariableStyle,
)

__all__ = [
    "BiplotConfig",
    "EllipseStyle",
    "FittedVectorStyle",
    "ObservationDisplay",
    "ObservationStyle",
    "VariableDisplay",
    "VariableStyle",
]
