"""Trajectory sampler — the day's solar path between sunrise and sunset."""

import numpy as np

from solarcompass.ephemeris import sun_altaz
from solarcompass.models import (
    GeoCoordinate,
    InvalidInputError,
    SunPosition,
    TrajectorySample,
)


def sample_trajectory(
    sun: SunPosition, coord: GeoCoordinate, steps: int
) -> tuple[TrajectorySample, ...]:
    """Sample the solar path at `steps + 1` evenly spaced minutes.

    The first sample sits exactly on sunrise and the last on sunset. A value of
    0 for `steps` is treated as 1, giving just the two endpoints. In polar day
    or polar night there is no path and an empty tuple is returned.

    Args:
        sun: Calculator output for the day (declination and solar noon are reused).
        coord: Same coordinate the SunPosition was computed for.
        steps: Number of intervals between sunrise and sunset.

    Returns:
        Tuple of TrajectorySample ordered by minute of day.

    Raises:
        InvalidInputError: If steps is negative or not an integer.
    """
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
        raise InvalidInputError(f"steps must be an integer, got {steps!r}")
    if steps < 0:
        raise InvalidInputError(f"steps must be >= 0, got {steps}")
    if sun.sunrise_minutes is None or sun.sunset_minutes is None:
        return ()

    minutes = np.linspace(sun.sunrise_minutes, sun.sunset_minutes, max(int(steps), 1) + 1)

    samples: list[TrajectorySample] = []
    for minute in minutes:
        elevation, azimuth = sun_altaz(
            coord.latitude, sun.declination_deg, float(minute) - sun.solar_noon_minutes
        )
        samples.append(
            TrajectorySample(
                minute_of_day=float(minute),
                azimuth_deg=azimuth,
                elevation_deg=elevation,
            )
        )
    return tuple(samples)
