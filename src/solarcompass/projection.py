"""Polar projector — azimuth/elevation to compass-diagram coordinates.

Elevation maps linearly to radius (zenith at the centre, horizon on the rim)
and azimuth to angle with north at the top. Points below the horizon are
drawn on the rim.
"""

import math
import numbers
from collections.abc import Iterable
from typing import Protocol

from solarcompass.models import InvalidInputError, PlotPoint


class AltAz(Protocol):
    azimuth_deg: float
    elevation_deg: float


def _finite(name: str, value: float) -> float:
    if not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite number, got {value!r}")
    return float(value)


def project(sample: AltAz, center: PlotPoint, radius: float) -> PlotPoint:
    """Project one azimuth/elevation pair onto the compass.

    Args:
        sample: Anything with `azimuth_deg` and `elevation_deg`.
        center: Compass centre in plot coordinates.
        radius: Compass radius (horizon ring) in plot units.

    Returns:
        PlotPoint in screen convention (y grows downwards).
    """
    azimuth = _finite("azimuth_deg", sample.azimuth_deg)
    elevation = _finite("elevation_deg", sample.elevation_deg)
    cx = _finite("center.x", center.x)
    cy = _finite("center.y", center.y)
    radius = _finite("radius", radius)

    r = radius * (1.0 - max(0.0, elevation) / 90.0)
    angle = math.radians(azimuth - 90.0)
    return PlotPoint(x=cx + r * math.cos(angle), y=cy + r * math.sin(angle))


def project_all(
    samples: Iterable[AltAz], center: PlotPoint, radius: float
) -> tuple[PlotPoint, ...]:
    """Project every sample, preserving order."""
    return tuple(project(s, center, radius) for s in samples)
