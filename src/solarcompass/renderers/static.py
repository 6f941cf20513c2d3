"""Matplotlib static PNG renderer."""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from solarcompass.i18n import t
from solarcompass.models import CompassData

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent.parent


def render_static_chart(compass: CompassData, chart_size: int = 8, lang: str = "es") -> Figure:
    """Render CompassData as a static matplotlib image.

    Projected points use screen convention (y down); matplotlib's y axis
    points up, so every y is negated.

    Args:
        compass: Fully computed compass data.
        chart_size: Output image size in inches.
        lang: Label language.

    Returns:
        matplotlib Figure object.
    """
    R = compass.radius
    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor("#0d1b35")
    ax.set_facecolor("#0d1b35")

    ax.add_patch(Circle((0, 0), R, fill=False, color="#3a4f7a", linewidth=1.5))
    for elev in (30.0, 60.0):
        ax.add_patch(
            Circle((0, 0), R * (1 - elev / 90), fill=False, color="#3a4f7a", linestyle="--")
        )

    for key, (x, y) in (
        ("compass_n", (0, 1)),
        ("compass_e", (1, 0)),
        ("compass_s", (0, -1)),
        ("compass_w", (-1, 0)),
    ):
        ax.text(
            x * R * 1.08, y * R * 1.08, t(key, lang),
            color="#c9a96e", ha="center", va="center", fontsize=14,
        )

    if compass.path_points:
        xs = np.array([p.x for p in compass.path_points])
        ys = -np.array([p.y for p in compass.path_points])
        ax.plot(xs, ys, color="#f4b942", linewidth=2, zorder=2)
    else:
        ax.text(0, -R * 0.5, t("no_trajectory", lang), color="#c9a96e", ha="center")

    for point, color in ((compass.sunrise_point, "#ff9d5c"), (compass.sunset_point, "#e0604f")):
        if point is not None:
            ax.scatter([point.x], [-point.y], s=60, color=color, zorder=3)

    cur = compass.current_point
    above = compass.sun.current_elevation_deg >= 0
    ax.scatter(
        [cur.x], [-cur.y], s=180,
        color="#ffd34d" if above else "none",
        edgecolors="#ffd34d", linewidths=2, zorder=4,
    )

    lim = R * 1.2
    ax.set_xlim(-lim, lim)
    ax.set_ylim(-lim, lim)
    ax.set_aspect("equal")
    ax.axis("off")

    return fig


def save_static_chart(
    compass: CompassData, output_path: Path | None = None, lang: str = "es"
) -> Path:
    """Save CompassData as a PNG file.

    Args:
        compass: Fully computed compass data.
        output_path: Destination path. Auto-generated under results/ if None.
        lang: Label language.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        ctx = compass.context
        when_str = ctx.instant.local.strftime("%Y_%m_%d_%H_%M")
        coord = ctx.coordinate
        filename = f"compass_{coord.latitude:.4f}_{coord.longitude:.4f}__{when_str}.png"
        output_path = _ROOT / "results" / filename

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_chart(compass, lang=lang)
    fig.savefig(output_path, facecolor=fig.get_facecolor())
    plt.close(fig)
    logger.info(f"Saved compass chart to {output_path}")
    return output_path
