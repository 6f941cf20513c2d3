"""SVG solar compass renderer.

Produces a standalone SVG string (and an HTML page wrapping it for
st.components.v1.html()). Projected points from CompassData are already in
screen convention, so they go into the SVG without flipping.

Coordinate system:
  viewBox centred on (0, 0), compass radius = CompassData.radius
  north at the top, east on the right
"""

from __future__ import annotations

from solarcompass.export import format_clock
from solarcompass.i18n import t
from solarcompass.models import CompassData, PlotPoint, TrajectorySample
from solarcompass.projection import project

_BG = "#0d1b35"
_RING_COLOR = "#3a4f7a"
_PATH_COLOR = "#f4b942"
_SUN_COLOR = "#ffd34d"
_RISE_COLOR = "#ff9d5c"
_SET_COLOR = "#e0604f"
_PANEL_COLOR = "#7ec8e3"
_TEXT_COLOR = "#c9a96e"

_ELEVATION_RINGS = (30.0, 60.0)


def _ring_radius(elevation_deg: float, radius: float) -> float:
    return radius * (1.0 - elevation_deg / 90.0)


def _rim(azimuth_deg: float, radius: float) -> PlotPoint:
    marker = TrajectorySample(minute_of_day=0.0, azimuth_deg=azimuth_deg, elevation_deg=0.0)
    return project(marker, PlotPoint(0.0, 0.0), radius)


def render_svg(compass: CompassData, lang: str = "es") -> str:
    """Return an SVG document for the compass.

    Draws the horizon ring, 30°/60° elevation rings, cardinal labels, the
    sun path polyline, sunrise/sunset markers, the optimal panel direction and
    the current sun position. The current position is drawn hollow when the sun
    is below the horizon.

    Args:
        compass: Fully computed compass data.
        lang: Label language ('es' or 'en').

    Returns:
        SVG markup string.
    """
    R = compass.radius
    margin = R * 0.2
    view = f"{-R - margin:.4f} {-R - margin:.4f} {2 * (R + margin):.4f} {2 * (R + margin):.4f}"
    stroke = R * 0.006

    parts: list[str] = [
        f'<rect x="{-R - margin:.4f}" y="{-R - margin:.4f}" width="{2 * (R + margin):.4f}"'
        f' height="{2 * (R + margin):.4f}" fill="{_BG}"/>',
        f'<circle cx="0" cy="0" r="{R:.4f}" fill="none" stroke="{_RING_COLOR}"'
        f' stroke-width="{stroke * 2:.4f}"/>',
    ]
    for elev in _ELEVATION_RINGS:
        parts.append(
            f'<circle cx="0" cy="0" r="{_ring_radius(elev, R):.4f}" fill="none"'
            f' stroke="{_RING_COLOR}" stroke-width="{stroke:.4f}" stroke-dasharray="{R * 0.02:.4f}"/>'
        )

    font = R * 0.09
    for key, az in (("compass_n", 0), ("compass_e", 90), ("compass_s", 180), ("compass_w", 270)):
        p = _rim(az, R * 1.08)
        parts.append(
            f'<text x="{p.x:.4f}" y="{p.y:.4f}" fill="{_TEXT_COLOR}" font-size="{font:.4f}"'
            f' text-anchor="middle" dominant-baseline="middle">{t(key, lang)}</text>'
        )

    # Panel facing direction: a spoke from the centre to the rim
    panel_tip = _rim(compass.panel.azimuth_deg, R)
    parts.append(
        f'<line id="panel" x1="0" y1="0" x2="{panel_tip.x:.4f}" y2="{panel_tip.y:.4f}"'
        f' stroke="{_PANEL_COLOR}" stroke-width="{stroke * 2:.4f}" stroke-opacity="0.6"/>'
    )

    if compass.path_points:
        pts = " ".join(f"{p.x:.4f},{p.y:.4f}" for p in compass.path_points)
        parts.append(
            f'<polyline id="sun-path" points="{pts}" fill="none" stroke="{_PATH_COLOR}"'
            f' stroke-width="{stroke * 3:.4f}" stroke-linejoin="round"/>'
        )
    else:
        parts.append(
            f'<text id="no-path" x="0" y="{R * 0.5:.4f}" fill="{_TEXT_COLOR}"'
            f' font-size="{font * 0.6:.4f}" text-anchor="middle">{t("no_trajectory", lang)}</text>'
        )

    sun = compass.sun
    for marker_id, point, color, minutes in (
        ("sunrise", compass.sunrise_point, _RISE_COLOR, sun.sunrise_minutes),
        ("sunset", compass.sunset_point, _SET_COLOR, sun.sunset_minutes),
    ):
        if point is None:
            continue
        parts.append(
            f'<circle id="{marker_id}" cx="{point.x:.4f}" cy="{point.y:.4f}" r="{R * 0.03:.4f}"'
            f' fill="{color}"><title>{t(marker_id, lang)} {format_clock(minutes)}</title></circle>'
        )

    cur = compass.current_point
    above = sun.current_elevation_deg >= 0
    parts.append(
        f'<circle id="sun" cx="{cur.x:.4f}" cy="{cur.y:.4f}" r="{R * 0.05:.4f}"'
        f' fill="{_SUN_COLOR if above else "none"}" stroke="{_SUN_COLOR}"'
        f' stroke-width="{stroke * 2:.4f}"/>'
    )

    body = "\n  ".join(parts)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{view}">\n'
        f"  {body}\n"
        f"</svg>"
    )


def render_svg_html(compass: CompassData, lang: str = "es") -> str:
    """Return a self-contained HTML page with the SVG compass filling the viewport."""
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{ width: 100%; height: 100%; background: {_BG}; overflow: hidden; }}
svg {{ display: block; width: 100%; height: 100%; }}
</style>
</head>
<body>
{render_svg(compass, lang)}
</body>
</html>
"""
