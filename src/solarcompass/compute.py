"""Site resolution and orchestration layer — geocoding, time zones, and the compass pipeline."""

import logging
from datetime import datetime

import httpx
from pytz import (
    AmbiguousTimeError,
    NonExistentTimeError,
    UnknownTimeZoneError,
    timezone,
)
from timezonefinder import TimezoneFinder

from solarcompass.config import Settings
from solarcompass.ephemeris import compute_sun_position, optimal_panel_orientation
from solarcompass.models import (
    CompassData,
    GeoCoordinate,
    Instant,
    InvalidInputError,
    PlotPoint,
    SiteContext,
    SiteQuery,
    TrajectorySample,
    looks_like_coordinates,
)
from solarcompass.projection import project, project_all
from solarcompass.trajectory import sample_trajectory

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()

COMPASS_RADIUS = 1.0
_CENTER = PlotPoint(x=0.0, y=0.0)


class LocationError(Exception):
    """Location provider failure."""


class LocationUnavailableError(LocationError):
    """Address could not be resolved, or no time zone covers the coordinate."""


class LocationTimeoutError(LocationError):
    """Location provider did not answer within the configured timeout."""


def geocode_address(address: str, settings: Settings | None = None) -> tuple[GeoCoordinate, str]:
    """Nominatim (OpenStreetMap) geocoder.

    Args:
        address: Free-form address string.
        settings: Endpoint, User-Agent and timeout. Defaults to Settings().

    Returns:
        (coordinate, display_name) of the best match.

    Raises:
        LocationTimeoutError: When the request times out.
        LocationUnavailableError: On HTTP failure or when nothing matches.
    """
    settings = settings or Settings()
    params = {"q": address, "format": "json", "limit": 1}
    headers = {"User-Agent": settings.user_agent}
    try:
        resp = httpx.get(
            settings.nominatim_url,
            params=params,
            headers=headers,
            timeout=settings.geocode_timeout,
        )
        resp.raise_for_status()
    except httpx.TimeoutException as e:
        raise LocationTimeoutError(f"Geocoder timed out for: {address}") from e
    except httpx.HTTPError as e:
        raise LocationUnavailableError(f"Geocoder error: {e}") from e

    results = resp.json()
    if not results:
        raise LocationUnavailableError(f"Address not found: {address}")
    r = results[0]
    coord = GeoCoordinate(latitude=float(r["lat"]), longitude=float(r["lon"]))
    logger.info(f"Geocoded '{address}' to {coord}")
    return coord, r.get("display_name", address)


def timezone_name_at(coord: GeoCoordinate) -> str:
    """IANA time zone covering the coordinate."""
    tz_str = _tf.timezone_at(lat=coord.latitude, lng=coord.longitude)
    if tz_str is None:
        raise LocationUnavailableError(f"Timezone not found: {coord}")
    return tz_str


def resolve_instant(when: str | datetime, coord: GeoCoordinate) -> tuple[Instant, str]:
    """Attach the coordinate's UTC offset (DST included) to a local wall-clock time.

    Args:
        when: "YYYY-MM-DD HH:MM" string, or a naive local datetime.
        coord: Site coordinate, used to look up the IANA zone.

    Returns:
        (Instant, timezone_name).

    Raises:
        InvalidInputError: If the time string is malformed or the wall-clock time
            does not exist / is ambiguous in that zone.
        LocationUnavailableError: If no time zone covers the coordinate.
    """
    if isinstance(when, datetime):
        dt = when
    else:
        try:
            dt = datetime.strptime(when, "%Y-%m-%d %H:%M")
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Expected 'YYYY-MM-DD HH:MM', got {when!r}") from e

    tz_str = timezone_name_at(coord)
    try:
        local_tz = timezone(tz_str)
    except UnknownTimeZoneError as e:
        raise LocationUnavailableError(f"Unknown time zone: {tz_str}") from e
    try:
        local_dt = local_tz.localize(dt.replace(tzinfo=None), is_dst=None)
    except (AmbiguousTimeError, NonExistentTimeError) as e:
        raise InvalidInputError(f"{dt} is not a valid local time in {tz_str}: {e}") from e

    return Instant.from_datetime(local_dt), tz_str


def locate_site(address: str, settings: Settings | None = None) -> tuple[GeoCoordinate, str]:
    """GPS field value ("lat, lon") or postal address → (coordinate, display name).

    Only postal addresses go through the geocoder.
    """
    if looks_like_coordinates(address):
        coord = GeoCoordinate.parse(address)
        return coord, str(coord)
    return geocode_address(address, settings)


def resolve_site(query: SiteQuery, settings: Settings | None = None) -> SiteContext:
    """Resolve a SiteQuery to a SiteContext.

    The address may be either a GPS field value ("lat, lon") or a postal address;
    the latter goes through the geocoder.
    """
    coord, address_display = locate_site(query.address, settings)
    instant, tz_str = resolve_instant(query.when, coord)
    return SiteContext(
        coordinate=coord,
        instant=instant,
        address_display=address_display,
        timezone_name=tz_str,
    )


def _horizon_marker(azimuth_deg: float, radius: float) -> PlotPoint:
    marker = TrajectorySample(minute_of_day=0.0, azimuth_deg=azimuth_deg, elevation_deg=0.0)
    return project(marker, _CENTER, radius)


def compute_compass_data(
    context: SiteContext,
    steps: int = 48,
    radius: float = COMPASS_RADIUS,
) -> CompassData:
    """Run calculator, sampler and projector for one site and instant.

    Args:
        context: Resolved coordinate and instant.
        steps: Trajectory intervals between sunrise and sunset.
        radius: Compass radius; the compass is centred on (0, 0).

    Returns:
        CompassData ready for any renderer.
    """
    coord = context.coordinate
    sun = compute_sun_position(context.instant, coord)
    trajectory = sample_trajectory(sun, coord, steps)
    current = TrajectorySample(
        minute_of_day=context.instant.minute_of_day,
        azimuth_deg=sun.current_azimuth_deg,
        elevation_deg=sun.current_elevation_deg,
    )

    has_horizon_crossing = sun.sunrise_minutes is not None
    return CompassData(
        context=context,
        sun=sun,
        panel=optimal_panel_orientation(coord),
        trajectory=trajectory,
        path_points=project_all(trajectory, _CENTER, radius),
        current_point=project(current, _CENTER, radius),
        sunrise_point=(
            _horizon_marker(sun.azimuth_at_sunrise_deg, radius)
            if has_horizon_crossing
            else None
        ),
        sunset_point=(
            _horizon_marker(sun.azimuth_at_sunset_deg, radius)
            if has_horizon_crossing
            else None
        ),
        radius=radius,
    )


def run(query: SiteQuery, settings: Settings | None = None) -> CompassData:
    """Top-level entry point: takes a SiteQuery and returns a CompassData.

    Args:
        query: User input (address or GPS string, local time string).
        settings: Geocoder and sampler settings.

    Returns:
        Fully computed CompassData.
    """
    settings = settings or Settings()
    context = resolve_site(query, settings)
    return compute_compass_data(context, steps=settings.trajectory_steps)
