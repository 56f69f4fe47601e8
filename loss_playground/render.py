"""Plotly figures for the playground panels."""

from typing import Dict, Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from .config import PlaygroundConfig
from .contours import ContourSegment
from .controller import Frame

POINT_COLOR = 'rgba(0, 255, 255, 1)'
PATH_COLOR = 'rgba(255, 0, 255, 0.8)'
LINE_COLOR = '#FF6B35'
PANEL_BG = '#1e1e2f'
GRID_COLOR = 'rgba(255, 255, 255, 0.1)'
TEXT_COLOR = 'rgba(255, 255, 255, 0.8)'

CLICK_TARGET_NAME = 'click-targets'


def _segment_paths(segments: Sequence[ContourSegment]) -> Dict[int, dict]:
    """Group segments by level into polylines separated by ``None`` gaps."""
    paths: Dict[int, dict] = {}
    for segment in segments:
        path = paths.setdefault(segment.level.index, {'x': [], 'y': [], 'level': segment.level})
        path['x'].extend([segment.p1[0], segment.p2[0], None])
        path['y'].extend([segment.p1[1], segment.p2[1], None])
    return paths


def _dark_layout(fig: go.Figure, title: str, height: int) -> None:
    fig.update_layout(
        title=title,
        height=height,
        paper_bgcolor=PANEL_BG,
        plot_bgcolor='rgba(0,0,0,0.3)',
        font=dict(color=TEXT_COLOR),
        showlegend=False,
        margin=dict(l=40, r=20, t=50, b=40),
    )
    fig.update_xaxes(gridcolor=GRID_COLOR, zeroline=False)
    fig.update_yaxes(gridcolor=GRID_COLOR, zeroline=False)


def regression_figure(frame: Frame, config: PlaygroundConfig, height: int = 400) -> go.Figure:
    """Data points and the current regression line."""
    fig = go.Figure()
    (x0, y0), (x1, y1) = frame.regression_line

    fig.add_trace(go.Scatter(
        x=[p.x for p in frame.dataset],
        y=[p.y for p in frame.dataset],
        mode='markers',
        marker=dict(color=POINT_COLOR, size=10, line=dict(width=1, color='white')),
        name='Data Points',
        hovertemplate='x: %{x:.3f}<br>y: %{y:.3f}<extra></extra>'
    ))
    fig.add_trace(go.Scatter(
        x=[x0, x1],
        y=[y0, y1],
        mode='lines',
        line=dict(color=LINE_COLOR, width=3),
        name='Regression Line',
        hovertemplate='x: %{x:.2f}<br>ŷ: %{y:.3f}<extra></extra>'
    ))

    _dark_layout(fig, "Data Points and Regression Line", height)
    fig.update_xaxes(range=[config.line_x_start, config.line_x_end], title='x')
    fig.update_yaxes(range=[0, config.chart_y_max], title='y')
    return fig


def contour_figure(frame: Frame, config: PlaygroundConfig, height: int = 400,
                   click_step: Optional[int] = None) -> go.Figure:
    """Loss contour bands drawn in pixel space, row 0 at the top.

    With ``click_step`` set, a lattice of invisible markers every
    ``click_step`` pixels is added so that point selection can report where
    the user clicked.
    """
    width, canvas_height = config.canvas_width, config.canvas_height
    fig = go.Figure()

    for path in _segment_paths(frame.contour_segments).values():
        level = path['level']
        fig.add_trace(go.Scatter(
            x=path['x'],
            y=path['y'],
            mode='lines',
            line=dict(color=level.color(), width=1),
            name=level.label,
            hoverinfo='skip'
        ))

    fig.add_trace(go.Scatter(
        x=[frame.path.start[0], frame.path.end[0]],
        y=[frame.path.start[1], frame.path.end[1]],
        mode='lines',
        line=dict(color=PATH_COLOR, width=2),
        name='Path',
        hoverinfo='skip'
    ))
    fig.add_trace(go.Scatter(
        x=[frame.marker[0]],
        y=[frame.marker[1]],
        mode='markers',
        marker=dict(color=PATH_COLOR, size=10),
        name='Current',
        hovertemplate=f"w: {frame.state.w:.3f}<br>b: {frame.state.b:.3f}<br>"
                      f"loss: {frame.state.loss:.3f}<extra></extra>"
    ))

    if click_step:
        xs, ys = np.meshgrid(np.arange(0, width + 1, click_step),
                             np.arange(0, canvas_height + 1, click_step))
        fig.add_trace(go.Scatter(
            x=xs.ravel(),
            y=ys.ravel(),
            mode='markers',
            marker=dict(size=click_step, opacity=0),
            name=CLICK_TARGET_NAME,
            hoverinfo='none'
        ))

    for entry in frame.legend:
        fig.add_annotation(
            x=entry.position[0],
            y=entry.position[1],
            text=entry.text,
            showarrow=False,
            xanchor='left',
            font=dict(color=entry.color, size=11)
        )

    _dark_layout(fig, "Loss Function Contour Plot", height)
    fig.update_xaxes(range=[0, width], showticklabels=False, showgrid=False)
    fig.update_yaxes(range=[canvas_height, 0], showticklabels=False, showgrid=False,
                     scaleanchor='x', scaleratio=1)
    return fig


def loss_curve_figure(w_values: np.ndarray, losses: np.ndarray,
                      current_w: float, current_loss: float, b: float,
                      height: int = 350) -> go.Figure:
    """Loss against w at a fixed intercept, with the current w marked."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=w_values,
        y=losses,
        mode='lines',
        line=dict(color=POINT_COLOR, width=2),
        name='J(w)',
        hovertemplate='w: %{x:.3f}<br>loss: %{y:.3f}<extra></extra>'
    ))
    fig.add_trace(go.Scatter(
        x=[current_w],
        y=[current_loss],
        mode='markers',
        marker=dict(color=PATH_COLOR, size=10),
        name='current w'
    ))
    _dark_layout(fig, f"Loss vs w (b = {b:.3f})", height)
    fig.update_xaxes(title='w')
    fig.update_yaxes(title='loss')
    return fig
