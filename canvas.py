from __future__ import annotations

from typing import Optional, Sequence, Tuple

import plotly.graph_objects as go

PathCommand = Tuple  # ("M", x, y) | ("L", x, y) | ("Q", cx, cy, x, y)

_ANCHOR_X = {"left": "left", "center": "center", "right": "right"}
_ANCHOR_Y = {"top": "top", "middle": "middle", "bottom": "bottom"}


def path_to_svg(commands: Sequence[PathCommand]) -> str:
    parts = []
    for cmd in commands:
        op, *coords = cmd
        pairs = [f"{coords[i]:.2f},{coords[i + 1]:.2f}" for i in range(0, len(coords), 2)]
        parts.append(f"{op} {' '.join(pairs)}")
    return " ".join(parts)


def _blank_figure(width: int, height: int) -> go.Figure:
    fig = go.Figure()
    # Axes pinned to pixels: x grows right, y grows down like a canvas.
    fig.update_layout(
        width=width,
        height=height,
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    fig.update_xaxes(range=[0, width], visible=False, fixedrange=True)
    fig.update_yaxes(range=[height, 0], visible=False, fixedrange=True)
    return fig


class PlotlyContext:
    """2D drawing context that records canvas-style calls as figure shapes."""

    def __init__(self, canvas: "PlotlyCanvas") -> None:
        self.canvas = canvas

    @property
    def figure(self) -> go.Figure:
        return self.canvas.figure

    def clear(self) -> None:
        self.figure.layout.shapes = ()
        self.figure.layout.annotations = ()

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.figure.add_shape(
            type="rect",
            x0=x,
            y0=y,
            x1=x + width,
            y1=y + height,
            xref="x",
            yref="y",
            fillcolor=color,
            line=dict(width=0),
        )

    def line(self, x0: float, y0: float, x1: float, y1: float, color: str, width: float = 1.0) -> None:
        self.figure.add_shape(
            type="line",
            x0=x0,
            y0=y0,
            x1=x1,
            y1=y1,
            xref="x",
            yref="y",
            line=dict(color=color, width=width),
        )

    def path(self, commands: Sequence[PathCommand], color: str, width: float = 1.0) -> None:
        if not commands:
            return
        self.figure.add_shape(
            type="path",
            path=path_to_svg(commands),
            xref="x",
            yref="y",
            line=dict(color=color, width=width),
        )

    def circle(
        self,
        cx: float,
        cy: float,
        radius: float,
        *,
        fill: Optional[str] = None,
        stroke: Optional[str] = None,
        width: float = 1.0,
    ) -> None:
        self.figure.add_shape(
            type="circle",
            x0=cx - radius,
            y0=cy - radius,
            x1=cx + radius,
            y1=cy + radius,
            xref="x",
            yref="y",
            fillcolor=fill if fill is not None else "rgba(0,0,0,0)",
            line=dict(color=stroke if stroke is not None else "rgba(0,0,0,0)", width=width if stroke else 0),
        )

    def text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        color: str,
        size: int = 12,
        bold: bool = False,
        align: str = "center",
        baseline: str = "middle",
        angle: float = 0.0,
    ) -> None:
        self.figure.add_annotation(
            x=x,
            y=y,
            xref="x",
            yref="y",
            text=f"<b>{text}</b>" if bold else text,
            showarrow=False,
            xanchor=_ANCHOR_X[align],
            yanchor=_ANCHOR_Y[baseline],
            textangle=angle,
            font=dict(color=color, size=size, family="Arial"),
        )


class PlotlyCanvas:
    """Fixed-size drawing surface; the caller owns sizing and recreates it on resize."""

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.figure = _blank_figure(self.width, self.height)

    def get_context(self, kind: str = "2d") -> Optional[PlotlyContext]:
        if kind != "2d":
            return None
        return PlotlyContext(self)
