# pcoa_biplot/config/biplot_config.py

from enum import Enum
from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, Field, model_validator

LineDash = Literal["solid", "dot", "dash", "longdash", "dashdot", "longdashdot"]
FontFace = Literal["plain", "bold", "italic", "bold.italic"]


class ObservationDisplay(str, Enum):
    POINTS = "points"
    LABELS = "labels"


class VariableDisplay(str, Enum):
    LABELS = "labels"
    POINTS = "points"


class ObservationStyle(BaseModel):
    display: ObservationDisplay = ObservationDisplay.POINTS
    labels: Optional[List[str]] = None
    size: float = Field(8.0, gt=0)
    color: str = "black"
    symbol: str = "circle"
    font_family: str = "serif"
    font_face: FontFace = "plain"

    @model_validator(mode="after")
    def validate_display(self) -> "ObservationStyle":
        if self.display == ObservationDisplay.POINTS and self.labels is not None:
            raise ValueError("labels only apply when observations are displayed as labels.")
        return self


class VectorStyle(BaseModel):
    """Arrow and label styling shared by variable scores and fitted vectors."""
    labels: Optional[List[str]] = None
    arrow_length: Optional[float] = Field(0.2, gt=0)  # cm; None drops the arrows
    size_map_offset: Optional[float] = None
    arrow_dash: LineDash = "solid"
    arrow_width: float = Field(1.0, gt=0)
    arrow_color: str = "grey"
    rotate: Optional[float] = None
    size: float = Field(12.0, gt=0)
    color: str = "red"
    font_family: str = "serif"
    font_face: FontFace = "plain"


class VariableStyle(VectorStyle):
    show: bool = True
    display: VariableDisplay = VariableDisplay.LABELS
    symbol: str = "circle"

    @model_validator(mode="after")
    def validate_display(self) -> "VariableStyle":
        if self.display == VariableDisplay.POINTS and self.size_map_offset is not None:
            raise ValueError("size_map_offset only applies when variables are displayed as labels.")
        if self.display == VariableDisplay.POINTS and self.rotate is not None:
            raise ValueError("rotate only applies when variables are displayed as labels.")
        if self.display == VariableDisplay.POINTS and self.labels is not None:
            raise ValueError("labels only apply when variables are displayed as labels.")
        return self


class FittedVectorStyle(VectorStyle):
    arrow_color: str = "blue"
    color: str = "blue"
    size: float = Field(14.0, gt=0)
    zoom: float = Field(1.0, gt=0)
    permutations: int = Field(999, ge=0)
    seed: Optional[int] = None


class EllipseStyle(BaseModel):
    show: bool = False
    level: float = Field(0.95, gt=0.0, lt=1.0)
    line_width: float = Field(1.5, gt=0)
    line_dash: LineDash = "dash"


class BiplotConfig(BaseModel):
    axes: Tuple[int, int] = (1, 2)
    axis_prefix: str = "PCoA"
    group_title: str = "groups"
    group_colors: Optional[List[str]] = None
    group_symbols: Optional[List[str]] = None
    font_family: str = "serif"
    axis_title_size: int = Field(13, gt=0)

    observations: ObservationStyle = Field(default_factory=ObservationStyle)
    variables: VariableStyle = Field(default_factory=VariableStyle)
    fitted: FittedVectorStyle = Field(default_factory=FittedVectorStyle)
    ellipse: EllipseStyle = Field(default_factory=EllipseStyle)

    @model_validator(mode="after")
    def validate_axes(self) -> "BiplotConfig":
        first, second = self.axes
        if first < 1 or second < 1:
            raise ValueError(f"Axes are 1-based; got {self.axes}.")
        if first == second:
            raise ValueError(f"Two distinct axes are required; got {self.axes}.")
        if self.group_colors is not None and not self.group_colors:
            raise ValueError("group_colors must not be empty when given.")
        if self.group_symbols is not None and not self.group_symbols:
            raise ValueError("group_symbols must not be empty when given.")
        return self
