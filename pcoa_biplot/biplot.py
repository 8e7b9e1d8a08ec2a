# pcoa_biplot/biplot.py

"""
Builds the layered description of a PCoA biplot.

BiplotBuilder turns an ordination result, the raw data table it was computed
from, optional groups and an optional environmental table into a PlotSpec:
reference lines, observations, weighted-average variable scores with arrows,
fitted environmental vectors and per-group confidence ellipses. Every layer
family is switched on and styled through BiplotConfig.
"""

import logging
from typing import Optional, Sequence
import numpy as np
import pandas as pd

from pcoa_biplot.analysis.ellipse import group_ellipses
from pcoa_biplot.analysis.envfit import envfit
from pcoa_biplot.analysis.scores import (
    axis_titles,
    label_geometry,
    select_axes,
    vector_lengths,
    wascores,
)
from pcoa_biplot.config.biplot_config import (
    BiplotConfig,
    ObservationDisplay,
    VariableDisplay,
    VectorStyle,
)
from pcoa_biplot.models.layers import (
    ArrowLayer,
    EllipsePath,
    PathLayer,
    PlotSpec,
    PointLayer,
    ReferenceLineLayer,
    TextLayer,
    Theme,
)
from pcoa_biplot.models.ordination import OrdinationResult
from pcoa_biplot.utils.palette import build_group_scale

logger = logging.getLogger(__name__)

# Arrow shafts stop short of the label position.
ARROW_SHRINK = 0.9


def _floats(values) -> tuple:
    return tuple(float(v) for v in values)


def _resolve_labels(custom: Optional[Sequence[str]], default: Sequence[str], what: str) -> tuple:
    if custom is None:
        return tuple(str(v) for v in default)
    if len(custom) != len(default):
        raise ValueError(f"Got {len(custom)} {what} labels for {len(default)} {what}.")
    return tuple(str(v) for v in custom)


class BiplotBuilder:
    def __init__(
        self,
        ordination: OrdinationResult,
        data: pd.DataFrame,
        groups: Optional[Sequence] = None,
        envs: Optional[pd.DataFrame] = None,
        config: Optional[BiplotConfig] = None,
    ):
        self.ordination = ordination
        self.data = data
        self.envs = envs
        self.config = config or BiplotConfig()

        if groups is not None and len(groups) != ordination.n_observations:
            raise ValueError(
                f"Got {len(groups)} group labels for {ordination.n_observations} observations."
            )
        self.groups = None if groups is None else [str(g) for g in groups]
        self.group_scale = None
        if groups is not None:
            self.group_scale = build_group_scale(
                groups,
                colors=self.config.group_colors,
                symbols=self.config.group_symbols,
                title=self.config.group_title,
            )
        self._raw_groups = groups

        self.coords: Optional[pd.DataFrame] = None
        self.species: Optional[pd.DataFrame] = None
        self.fitted: Optional[pd.DataFrame] = None
        self.fit_result = None

    def build(self) -> PlotSpec:
        cfg = self.config
        self.coords = select_axes(self.ordination, cfg.axes, cfg.axis_prefix)
        x_title, y_title = axis_titles(self.ordination, cfg.axes, cfg.axis_prefix)

        spec = PlotSpec(
            x_title=x_title,
            y_title=y_title,
            group_scale=self.group_scale,
            theme=Theme(font_family=cfg.font_family, axis_title_size=cfg.axis_title_size),
        )
        spec = self.add_reference_lines(spec)
        spec = self.add_observations(spec)

        self.species = wascores(self.coords, self.data)
        if cfg.variables.show:
            spec = self.add_variables(spec)

        if self.envs is not None:
            spec = self.add_fitted_vectors(spec)

        if self.groups is not None and cfg.ellipse.show:
            spec = self.add_ellipses(spec)

        logger.debug(f"Biplot built with layers: {spec.roles}")
        return spec

    def add_reference_lines(self, spec: PlotSpec) -> PlotSpec:
        spec = spec.add(ReferenceLineLayer(role="reference", orientation="vertical"))
        return spec.add(ReferenceLineLayer(role="reference", orientation="horizontal"))

    def add_observations(self, spec: PlotSpec) -> PlotSpec:
        style = self.config.observations
        x = _floats(self.coords.iloc[:, 0])
        y = _floats(self.coords.iloc[:, 1])
        names = tuple(str(i) for i in self.coords.index)
        groups = tuple(self.groups) if self.groups is not None else None

        if style.display == ObservationDisplay.LABELS:
            labels = _resolve_labels(style.labels, names, "observation")
            n = len(labels)
            layer = TextLayer(
                role="observations",
                x=x,
                y=y,
                labels=labels,
                sizes=(float(style.size),) * n,
                angles=(0.0,) * n,
                hjusts=(0.5,) * n,
                color=None if groups else style.color,
                groups=groups,
                font_family=style.font_family,
                font_face=style.font_face,
                hover=names,
            )
        else:
            layer = PointLayer(
                role="observations",
                x=x,
                y=y,
                names=names,
                size=float(style.size),
                color=None if groups else style.color,
                symbol=None if groups else style.symbol,
                groups=groups,
            )
        return spec.add(layer)

    def _vector_layers(self, spec: PlotSpec, table: pd.DataFrame, style: VectorStyle,
                       role: str, as_points: bool = False, symbol: str = "circle",
                       hover: Optional[Sequence[str]] = None) -> PlotSpec:
        names = [str(i) for i in table.index]
        x = table.iloc[:, 0].to_numpy(dtype=float)
        y = table.iloc[:, 1].to_numpy(dtype=float)

        if style.arrow_length is not None:
            spec = spec.add(ArrowLayer(
                role=f"{role}_arrows",
                x_end=_floats(x * ARROW_SHRINK),
                y_end=_floats(y * ARROW_SHRINK),
                names=tuple(names),
                head_length=float(style.arrow_length),
                color=style.arrow_color,
                width=float(style.arrow_width),
                dash=style.arrow_dash,
            ))

        if as_points:
            return spec.add(PointLayer(
                role=role,
                x=_floats(x),
                y=_floats(y),
                names=tuple(names),
                size=float(style.size),
                color=style.color,
                symbol=symbol,
            ))

        labels = _resolve_labels(style.labels, names, role)
        angles, hjusts = label_geometry(table, style.rotate)
        if style.size_map_offset is not None:
            sizes = vector_lengths(table) + style.size_map_offset
            size_mapped = True
        else:
            sizes = np.full(len(table), style.size)
            size_mapped = False

        return spec.add(TextLayer(
            role=role,
            x=_floats(x),
            y=_floats(y),
            labels=labels,
            sizes=_floats(sizes),
            angles=_floats(angles),
            hjusts=_floats(hjusts),
            color=style.color,
            font_family=style.font_family,
            font_face=style.font_face,
            size_mapped=size_mapped,
            show_size_legend=not size_mapped,
            hover=tuple(hover) if hover is not None else tuple(names),
        ))

    def add_variables(self, spec: PlotSpec) -> PlotSpec:
        style = self.config.variables
        return self._vector_layers(
            spec,
            self.species,
            style,
            role="variables",
            as_points=style.display == VariableDisplay.POINTS,
            symbol=style.symbol,
        )

    def add_fitted_vectors(self, spec: PlotSpec) -> PlotSpec:
        style = self.config.fitted
        self.fit_result = envfit(
            self.ordination,
            self.envs,
            axes=self.config.axes,
            permutations=style.permutations,
            seed=style.seed,
            prefix=self.config.axis_prefix,
        )
        self.fitted = self.fit_result.scaled_vectors(style.zoom)

        hover = []
        for name in self.fitted.index:
            text = f"{name}: r²={self.fit_result.r2[name]:.3f}"
            if self.fit_result.p_values is not None:
                text += f", p={self.fit_result.p_values[name]:.3f}"
            hover.append(text)

        return self._vector_layers(spec, self.fitted, style, role="fitted", hover=hover)

    def add_ellipses(self, spec: PlotSpec) -> PlotSpec:
        style = self.config.ellipse
        table = group_ellipses(self.coords, self._raw_groups, style.level)
        x_col, y_col = self.coords.columns[:2]
        paths = tuple(
            EllipsePath(group=str(group), x=_floats(frame[x_col]), y=_floats(frame[y_col]))
            for group, frame in table.groupby("group", sort=False)
        )
        return spec.add(PathLayer(
            role="ellipses",
            paths=paths,
            width=float(style.line_width),
            dash=style.line_dash,
        ))


def build_biplot(
    ordination: OrdinationResult,
    data: pd.DataFrame,
    groups: Optional[Sequence] = None,
    envs: Optional[pd.DataFrame] = None,
    config: Optional[BiplotConfig] = None,
) -> PlotSpec:
    return BiplotBuilder(ordination, data, groups=groups, envs=envs, config=config).build()
