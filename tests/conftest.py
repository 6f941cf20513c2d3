from __future__ import annotations

from datetime import datetime, timedelta

import matplotlib
import pytest

matplotlib.use("Agg")

from solarcompass.models import GeoCoordinate, Instant, SiteContext  # noqa: E402

# ---------- Shared fixtures ----------


@pytest.fixture
def make_instant():
    """Factory: Instant on a given day of year at a local wall-clock time."""

    def _make(year: int, day_of_year: int, hour: int = 12, minute: int = 0,
              utc_offset_minutes: float = 0.0) -> Instant:
        local = datetime(year, 1, 1, hour, minute) + timedelta(days=day_of_year - 1)
        return Instant(local=local, utc_offset_minutes=utc_offset_minutes)

    return _make


@pytest.fixture
def mexico_city() -> GeoCoordinate:
    return GeoCoordinate(latitude=19.4326, longitude=-99.1332)


@pytest.fixture
def santiago() -> GeoCoordinate:
    return GeoCoordinate(latitude=-33.45, longitude=-70.66)


@pytest.fixture
def june_solstice_cdmx(make_instant) -> Instant:
    """June 21 (day 172 of 2025), noon, UTC-6."""
    return make_instant(2025, 172, utc_offset_minutes=-360)


@pytest.fixture
def cdmx_context(mexico_city, june_solstice_cdmx) -> SiteContext:
    return SiteContext(
        coordinate=mexico_city,
        instant=june_solstice_cdmx,
        address_display=str(mexico_city),
        timezone_name="America/Mexico_City",
    )


@pytest.fixture
def polar_context(make_instant) -> SiteContext:
    """Latitude 80°N on the December solstice: polar night."""
    coord = GeoCoordinate(latitude=80.0, longitude=15.0)
    return SiteContext(
        coordinate=coord,
        instant=make_instant(2025, 355, utc_offset_minutes=60),
        address_display=str(coord),
    )
