# pcoa_biplot/models/layers.py

"""
Declarative description of a biplot.

A PlotSpec is an ordered tuple of immutable layer descriptors plus the axis
titles and the group scale shared by every group-coloured layer. Nothing in
here knows about plotly; see pcoa_biplot.plotting for the backend.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class GroupScale:
    categories: Tuple[str, ...]
    colors: Tuple[str, ...]
    symbols: Tuple[str, ...]
    title: str = "groups"

    def color_for(self, group: str) -> str:
        return self.colors[self.categories.index(group)]

    def symbol_for(self, group: str) -> str:
        return self.symbols[self.categories.index(group)]


@dataclass(frozen=True)
class Theme:
    font_family: str = "serif"
    font_face: str = "bold"
    axis_title_size: int = 13


@dataclass(frozen=True)
class ReferenceLineLayer:
    role: str
    orientation: str  # "vertical" or "horizontal"
    intercept: float = 0.0
    dash: str = "dash"
    kind: str = field(default="reference_line", init=False)


@dataclass(frozen=True)
class PointLayer:
    role: str
    x: Tuple[float, ...]
    y: Tuple[float, ...]
    names: Tuple[str, ...]
    size: float
    color: Optional[str] = None
    symbol: Optional[str] = None
    groups: Optional[Tuple[str, ...]] = None
    kind: str = field(default="point", init=False)


@dataclass(frozen=True)
class TextLayer:
    role: str
    x: Tuple[float, ...]
    y: Tuple[float, ...]
    labels: Tuple[str, ...]
    sizes: Tuple[float, ...]
    angles: Tuple[float, ...]
    hjusts: Tuple[float, ...]
    color: Optional[str] = None
    groups: Optional[Tuple[str, ...]] = None
    font_family: str = "serif"
    font_face: str = "plain"
    size_mapped: bool = False
    show_size_legend: bool = True
    hover: Optional[Tuple[str, ...]] = None
    kind: str = field(default="text", init=False)

    @property
    def rotated(self) -> bool:
        return any(a != 0 for a in self.angles) or any(h != 0.5 for h in self.hjusts)


@dataclass(frozen=True)
class ArrowLayer:
    role: str
    x_end: Tuple[float, ...]
    y_end: Tuple[float, ...]
    names: Tuple[str, ...]
    head_length: float
    color: str
    width: float
    dash: str = "solid"
    kind: str = field(default="arrow", init=False)


@dataclass(frozen=True)
class EllipsePath:
    group: str
    x: Tuple[float, ...]
    y: Tuple[float, ...]


@dataclass(frozen=True)
class PathLayer:
    role: str
    paths: Tuple[EllipsePath, ...]
    width: float
    dash: str = "dash"
    kind: str = field(default="path", init=False)


@dataclass(frozen=True)
class PlotSpec:
    x_title: str
    y_title: str
    layers: Tuple[object, ...] = ()
    group_scale: Optional[GroupScale] = None
    theme: Theme = field(default_factory=Theme)

    def add(self, layer) -> "PlotSpec":
        return replace(self, layers=self.layers + (layer,))

    def layers_with_role(self, role: str) -> Tuple[object, ...]:
        return tuple(layer for layer in self.layers if layer.role == role)

    def layer(self, role: str):
        matches = self.layers_with_role(role)
        return matches[0] if matches else None

    @property
    def roles(self) -> Tuple[str, ...]:
        return tuple(layer.role for layer in self.layers)
