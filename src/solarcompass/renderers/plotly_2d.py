"""Plotly 2D interactive compass renderer.

Uses the projector output (x, y) directly, with the y axis reversed so the
screen convention (y down) shows north at the top.
"""

import logging
from pathlib import Path

import numpy as np
import plotly.graph_objects as go

from solarcompass.export import format_clock
from solarcompass.i18n import t
from solarcompass.models import CompassData

logger = logging.getLogger(__name__)

_BG = "#0d1b35"
_RING_COLOR = "#3a4f7a"
_PATH_COLOR = "#f4b942"
_SUN_COLOR = "#ffd34d"


def _ring(radius: float, n: int = 121) -> tuple[np.ndarray, np.ndarray]:
    theta = np.linspace(0.0, 2 * np.pi, n)
    return radius * np.cos(theta), radius * np.sin(theta)


def render_plotly_chart(compass: CompassData, lang: str = "es") -> go.Figure:
    """Render CompassData as a Plotly figure.

    Hovering the path shows the local time and elevation of each sample.

    Args:
        compass: Fully computed compass data.
        lang: Label language.

    Returns:
        Plotly Figure object.
    """
    R = compass.radius
    traces: list[go.Scatter] = []

    for frac, dash in ((1.0, "solid"), (2 / 3, "dot"), (1 / 3, "dot")):
        rx, ry = _ring(R * frac)
        traces.append(
            go.Scatter(
                x=rx, y=ry, mode="lines",
                line=dict(color=_RING_COLOR, width=1, dash=dash),
                hoverinfo="skip", name="ring",
            )
        )

    if compass.path_points:
        traces.append(
            go.Scatter(
                x=[p.x for p in compass.path_points],
                y=[p.y for p in compass.path_points],
                mode="lines",
                line=dict(color=_PATH_COLOR, width=3),
                text=[
                    f"{format_clock(s.minute_of_day)} · {s.elevation_deg:.1f}°"
                    for s in compass.trajectory
                ],
                hoverinfo="text",
                name="path",
            )
        )

    markers = [
        (compass.sunrise_point, t("sunrise", lang), compass.sun.sunrise_minutes),
        (compass.sunset_point, t("sunset", lang), compass.sun.sunset_minutes),
    ]
    mx, my, mtext = [], [], []
    for point, label, minutes in markers:
        if point is not None:
            mx.append(point.x)
            my.append(point.y)
            mtext.append(f"{label} {format_clock(minutes)}")
    if mx:
        traces.append(
            go.Scatter(
                x=mx, y=my, mode="markers",
                marker=dict(size=9, color="#ff9d5c"),
                text=mtext, hoverinfo="text", name="horizon",
            )
        )

    cur = compass.current_point
    above = compass.sun.current_elevation_deg >= 0
    traces.append(
        go.Scatter(
            x=[cur.x], y=[cur.y], mode="markers",
            marker=dict(
                size=16,
                color=_SUN_COLOR if above else "rgba(0,0,0,0)",
                line=dict(color=_SUN_COLOR, width=2),
            ),
            hoverinfo="text",
            text=[f"{compass.sun.current_azimuth_deg:.1f}° / {compass.sun.current_elevation_deg:.1f}°"],
            name="sun",
        )
    )

    fig = go.Figure(data=traces)
    lim = R * 1.2
    annotations = [
        dict(x=x * R * 1.08, y=y * R * 1.08, text=t(key, lang), showarrow=False,
             font=dict(color="#c9a96e", size=14))
        for key, (x, y) in (
            ("compass_n", (0, -1)),
            ("compass_e", (1, 0)),
            ("compass_s", (0, 1)),
            ("compass_w", (-1, 0)),
        )
    ]
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        width=600,
        height=600,
        xaxis=dict(visible=False, range=[-lim, lim]),
        # Screen convention: y grows downwards
        yaxis=dict(visible=False, range=[lim, -lim], scaleanchor="x"),
        annotations=annotations,
    )
    return fig


def save_plotly_html(compass: CompassData, output_path: Path, lang: str = "es") -> Path:
    """Write the interactive compass as a standalone HTML page (plotly.js from CDN)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    render_plotly_chart(compass, lang=lang).write_html(output_path, include_plotlyjs="cdn")
    logger.info(f"Saved interactive compass to {output_path}")
    return output_path
