# pcoa_biplot/plotting/plotly_backend.py

import logging
from typing import Optional, Sequence
import numpy as np
import plotly.graph_objects as go

from pcoa_biplot.models.layers import (
    ArrowLayer,
    GroupScale,
    PathLayer,
    PlotSpec,
    PointLayer,
    ReferenceLineLayer,
    TextLayer,
)
from pcoa_biplot.utils.palette import scale_sizes

logger = logging.getLogger(__name__)

PX_PER_CM = 96 / 2.54

LAYER_RENDERER_REGISTRY = {}


def register_layer_renderer(layer_type):
    def decorator(func):
        LAYER_RENDERER_REGISTRY[layer_type] = func
        return func
    return decorator


def get_layer_renderer(layer):
    renderer = LAYER_RENDERER_REGISTRY.get(type(layer))
    if not renderer:
        raise ValueError(f"No renderer registered for layer kind: {getattr(layer, 'kind', type(layer).__name__)}")
    return renderer


def styled_text(text: str, face: str) -> str:
    if face in ("bold", "bold.italic"):
        text = f"<b>{text}</b>"
    if face in ("italic", "bold.italic"):
        text = f"<i>{text}</i>"
    return text


def xanchor_for(hjust: float) -> str:
    if hjust <= 0.25:
        return "left"
    if hjust >= 0.75:
        return "right"
    return "center"


def _group_indices(groups: Sequence[str], scale: GroupScale):
    groups = np.asarray(groups)
    for category in scale.categories:
        idx = np.flatnonzero(groups == category)
        if idx.size:
            yield category, idx


def _take(values, idx):
    return [values[i] for i in idx]


@register_layer_renderer(ReferenceLineLayer)
def render_reference_line(fig: go.Figure, layer: ReferenceLineLayer, spec: PlotSpec) -> None:
    if layer.orientation == "vertical":
        fig.add_vline(x=layer.intercept, line_dash=layer.dash, line_color="black", line_width=1)
    else:
        fig.add_hline(y=layer.intercept, line_dash=layer.dash, line_color="black", line_width=1)


@register_layer_renderer(PointLayer)
def render_points(fig: go.Figure, layer: PointLayer, spec: PlotSpec) -> None:
    if layer.groups is None:
        fig.add_trace(go.Scatter(
            x=list(layer.x),
            y=list(layer.y),
            mode="markers",
            name=layer.role,
            text=list(layer.names),
            marker=dict(size=layer.size, color=layer.color, symbol=layer.symbol),
            hovertemplate="%{text}<extra></extra>",
            showlegend=False,
        ))
        return

    scale = spec.group_scale
    for category, idx in _group_indices(layer.groups, scale):
        fig.add_trace(go.Scatter(
            x=_take(layer.x, idx),
            y=_take(layer.y, idx),
            mode="markers",
            name=category,
            legendgroup=category,
            text=_take(layer.names, idx),
            marker=dict(
                size=layer.size,
                color=scale.color_for(category),
                symbol=scale.symbol_for(category),
            ),
            hovertemplate="%{text}<extra>" + category + "</extra>",
        ))


def _text_trace(layer: TextLayer, idx, sizes, color: str, name: str,
                legendgroup: Optional[str], showlegend: bool) -> go.Scatter:
    return go.Scatter(
        x=_take(layer.x, idx),
        y=_take(layer.y, idx),
        mode="text",
        name=name,
        legendgroup=legendgroup,
        showlegend=showlegend,
        text=[styled_text(label, layer.font_face) for label in _take(layer.labels, idx)],
        hovertext=_take(layer.hover, idx) if layer.hover else None,
        hoverinfo="text",
        textposition="middle center",
        textfont=dict(size=_take(sizes, idx), color=color, family=layer.font_family),
    )


def _text_annotations(fig: go.Figure, layer: TextLayer, idx, sizes, color: str) -> None:
    for i in idx:
        if not (np.isfinite(layer.x[i]) and np.isfinite(layer.y[i])):
            continue
        fig.add_annotation(
            x=layer.x[i],
            y=layer.y[i],
            xref="x",
            yref="y",
            text=styled_text(layer.labels[i], layer.font_face),
            showarrow=False,
            textangle=-layer.angles[i],
            xanchor=xanchor_for(layer.hjusts[i]),
            font=dict(size=float(sizes[i]), color=color, family=layer.font_family),
        )
    # Annotations do not take part in autorange; an invisible trace keeps labels in view.
    fig.add_trace(go.Scatter(
        x=_take(layer.x, idx),
        y=_take(layer.y, idx),
        mode="markers",
        marker=dict(size=1, opacity=0),
        hovertext=_take(layer.hover, idx) if layer.hover else None,
        hoverinfo="text",
        showlegend=False,
    ))


@register_layer_renderer(TextLayer)
def render_text(fig: go.Figure, layer: TextLayer, spec: PlotSpec) -> None:
    sizes = list(scale_sizes(layer.sizes)) if layer.size_mapped else list(layer.sizes)

    if layer.groups is None:
        idx = list(range(len(layer.labels)))
        if layer.rotated:
            _text_annotations(fig, layer, idx, sizes, layer.color)
        else:
            fig.add_trace(_text_trace(layer, idx, sizes, layer.color, layer.role, None, False))
        return

    scale = spec.group_scale
    for category, idx in _group_indices(layer.groups, scale):
        color = scale.color_for(category)
        if layer.rotated:
            _text_annotations(fig, layer, idx, sizes, color)
        else:
            fig.add_trace(_text_trace(layer, idx, sizes, color, category, category, layer.show_size_legend))


@register_layer_renderer(ArrowLayer)
def render_arrows(fig: go.Figure, layer: ArrowLayer, spec: PlotSpec) -> None:
    xs, ys, symbols, sizes = [], [], [], []
    head = layer.head_length * PX_PER_CM
    for x_end, y_end in zip(layer.x_end, layer.y_end):
        xs += [0.0, x_end, None]
        ys += [0.0, y_end, None]
        symbols += ["circle", "arrow", "circle"]
        sizes += [0, head, 0]

    fig.add_trace(go.Scatter(
        x=xs,
        y=ys,
        mode="lines+markers",
        name=layer.role,
        line=dict(color=layer.color, width=layer.width, dash=layer.dash),
        marker=dict(symbol=symbols, size=sizes, color=layer.color, angleref="previous"),
        hoverinfo="skip",
        showlegend=False,
    ))


@register_layer_renderer(PathLayer)
def render_paths(fig: go.Figure, layer: PathLayer, spec: PlotSpec) -> None:
    scale = spec.group_scale
    for path in layer.paths:
        color = scale.color_for(path.group) if scale else "black"
        fig.add_trace(go.Scatter(
            x=list(path.x),
            y=list(path.y),
            mode="lines",
            name=path.group,
            legendgroup=path.group,
            line=dict(color=color, width=layer.width, dash=layer.dash),
            hoverinfo="skip",
            showlegend=False,
        ))


def apply_theme(fig: go.Figure, spec: PlotSpec, height: int = 550) -> None:
    theme = spec.theme
    axis_style = dict(
        showgrid=True,
        gridcolor="#ebebeb",
        zeroline=False,
        mirror=True,
        showline=True,
        linecolor="#333333",
        ticks="outside",
    )
    title_font = dict(size=theme.axis_title_size)
    fig.update_layout(
        template="simple_white",
        font=dict(family=theme.font_family),
        xaxis=dict(title=dict(text=styled_text(spec.x_title, theme.font_face), font=title_font), **axis_style),
        yaxis=dict(title=dict(text=styled_text(spec.y_title, theme.font_face), font=title_font), **axis_style),
        legend_title_text=spec.group_scale.title if spec.group_scale else None,
        height=height,
        margin=dict(t=40, b=40, l=40, r=40),
        hovermode="closest",
    )


def render_figure(spec: PlotSpec, height: int = 550) -> go.Figure:
    fig = go.Figure()
    for layer in spec.layers:
        get_layer_renderer(layer)(fig, layer, spec)
    apply_theme(fig, spec, height=height)
    logger.debug(f"Rendered {len(spec.layers)} layers into {len(fig.data)} traces.")
    return fig
