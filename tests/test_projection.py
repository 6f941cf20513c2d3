import math

import numpy as np
import pytest
from hypothesis import given, strategies as st

from solarcompass.models import InvalidInputError, PlotPoint, TrajectorySample
from solarcompass.projection import project, project_all

CENTER = PlotPoint(x=150.0, y=150.0)
RADIUS = 100.0


def _sample(az: float, el: float) -> TrajectorySample:
    return TrajectorySample(minute_of_day=0.0, azimuth_deg=az, elevation_deg=el)


@given(az=st.floats(min_value=-720, max_value=720, allow_nan=False, allow_infinity=False))
def test_zenith_projects_to_center_for_any_azimuth(az):
    p = project(_sample(az, 90.0), CENTER, RADIUS)
    assert p == PlotPoint(x=CENTER.x, y=CENTER.y)


@pytest.mark.parametrize(
    "az, expected",
    [
        (0.0, (150.0, 50.0)),  # north: top
        (90.0, (250.0, 150.0)),  # east: right
        (180.0, (150.0, 250.0)),  # south: bottom
        (270.0, (50.0, 150.0)),  # west: left
    ],
)
def test_cardinal_directions_on_horizon(az, expected):
    p = project(_sample(az, 0.0), CENTER, RADIUS)
    assert (p.x, p.y) == pytest.approx(expected, abs=1e-9)


def test_elevation_maps_linearly_to_radius():
    p = project(_sample(90.0, 45.0), CENTER, RADIUS)
    assert math.hypot(p.x - CENTER.x, p.y - CENTER.y) == pytest.approx(50.0)


def test_below_horizon_clamps_to_rim():
    below = project(_sample(135.0, -30.0), CENTER, RADIUS)
    horizon = project(_sample(135.0, 0.0), CENTER, RADIUS)
    assert below == horizon
    assert math.hypot(below.x - CENTER.x, below.y - CENTER.y) == pytest.approx(RADIUS)


@pytest.mark.parametrize(
    "sample, center, radius",
    [
        (_sample(math.nan, 10.0), CENTER, RADIUS),
        (_sample(10.0, math.inf), CENTER, RADIUS),
        (_sample(10.0, 10.0), PlotPoint(math.nan, 0.0), RADIUS),
        (_sample(10.0, 10.0), CENTER, math.inf),
        (_sample(10.0, 10.0), CENTER, None),
    ],
)
def test_non_finite_input_rejected(sample, center, radius):
    with pytest.raises(InvalidInputError):
        project(sample, center, radius)


def test_project_all_preserves_order():
    samples = [_sample(90.0, 0.0), _sample(180.0, 45.0), _sample(270.0, 0.0)]
    points = project_all(samples, CENTER, RADIUS)
    assert points == tuple(project(s, CENTER, RADIUS) for s in samples)
    assert project_all([], CENTER, RADIUS) == ()


@pytest.mark.parametrize("cast", [np.float32, np.float64, np.int64])
def test_numpy_scalars_project_like_floats(cast):
    sample = _sample(cast(90), cast(10))
    point = project(sample, PlotPoint(cast(150), cast(150)), cast(100))
    expected = project(_sample(90.0, 10.0), CENTER, RADIUS)
    assert (point.x, point.y) == pytest.approx((expected.x, expected.y))
    assert isinstance(point.x, float)
