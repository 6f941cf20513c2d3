"""Solar ephemeris engine — NOAA-simplified closed-form sun position.

Every function here is pure: results depend only on the explicit arguments,
no clock is read and nothing is cached.
"""

import logging
import math

from solarcompass.models import GeoCoordinate, Instant, PanelOrientation, SunPosition

logger = logging.getLogger(__name__)

# Apparent sunrise/sunset altitude: refraction + solar disk radius
HORIZON_ELEVATION_DEG = -0.833
MINUTES_PER_DEGREE = 4.0


def _clamp(x: float) -> float:
    return max(-1.0, min(1.0, x))


def _ratio(num: float, den: float) -> float:
    """num/den, saturated to ±1 when den is exactly zero."""
    if den == 0.0:
        return 1.0 if num >= 0.0 else -1.0
    return num / den


def annual_phase(day_of_year: int) -> float:
    """Annual angle B in radians; day 81 (~March equinox) is phase zero."""
    return math.radians((360.0 / 365.0) * (day_of_year - 81))


def equation_of_time(day_of_year: int) -> float:
    """Apparent minus mean solar time, in minutes."""
    b = annual_phase(day_of_year)
    return 9.87 * math.sin(2 * b) - 7.53 * math.cos(b) - 1.5 * math.sin(b)


def declination(day_of_year: int) -> float:
    """Solar declination in degrees (±23.45)."""
    return 23.45 * math.sin(annual_phase(day_of_year))


def solar_noon(longitude: float, utc_offset_minutes: float, eot: float) -> float:
    """Solar noon in minutes from local midnight."""
    return 720.0 - MINUTES_PER_DEGREE * longitude - eot + utc_offset_minutes


def sun_altaz(
    latitude: float, declination_deg: float, minutes_from_noon: float
) -> tuple[float, float]:
    """Return (elevation_deg, azimuth_deg) for a time offset from solar noon.

    Azimuth is measured clockwise from north and mirrored for afternoon hour
    angles so it increases through the day.
    """
    hour_angle = minutes_from_noon / MINUTES_PER_DEGREE
    lat = math.radians(latitude)
    dec = math.radians(declination_deg)
    ha = math.radians(hour_angle)

    sin_elev = _clamp(
        math.sin(lat) * math.sin(dec) + math.cos(lat) * math.cos(dec) * math.cos(ha)
    )
    elev = math.asin(sin_elev)
    cos_az = _ratio(
        math.sin(dec) - math.sin(lat) * sin_elev, math.cos(lat) * math.cos(elev)
    )
    azimuth = math.degrees(math.acos(_clamp(cos_az)))
    if hour_angle > 0:
        azimuth = 360.0 - azimuth
    return math.degrees(elev), azimuth


def compute_sun_position(instant: Instant, coord: GeoCoordinate) -> SunPosition:
    """Compute the day's solar ephemeris and the sun's position at `instant`.

    Polar day and polar night are not errors: sunrise/sunset come back as None
    and daylight_hours is 24 or 0.

    Args:
        instant: Local wall-clock time with its UTC offset.
        coord: Observer latitude/longitude.

    Returns:
        SunPosition for the instant's local calendar day.
    """
    day = instant.day_of_year
    eot = equation_of_time(day)
    decl = declination(day)
    noon = solar_noon(coord.longitude, instant.utc_offset_minutes, eot)

    lat = math.radians(coord.latitude)
    dec = math.radians(decl)
    horizon = math.radians(HORIZON_ELEVATION_DEG)

    cos_ha = _ratio(
        math.sin(horizon) - math.sin(lat) * math.sin(dec),
        math.cos(lat) * math.cos(dec),
    )
    sunrise: float | None
    sunset: float | None
    if cos_ha > 1:
        sunrise = sunset = None
        daylight = 0.0
        logger.debug(f"Polar night at lat={coord.latitude} day={day}")
    elif cos_ha < -1:
        sunrise = sunset = None
        daylight = 24.0
        logger.debug(f"Polar day at lat={coord.latitude} day={day}")
    else:
        ha = math.degrees(math.acos(cos_ha))
        sunrise = noon - MINUTES_PER_DEGREE * ha
        sunset = noon + MINUTES_PER_DEGREE * ha
        daylight = (sunset - sunrise) / 60.0

    cos_az_rise = _ratio(
        math.sin(dec) - math.sin(lat) * math.sin(horizon),
        math.cos(lat) * math.cos(horizon),
    )
    az_sunrise = math.degrees(math.acos(_clamp(cos_az_rise)))

    elevation, azimuth = sun_altaz(coord.latitude, decl, instant.minute_of_day - noon)

    return SunPosition(
        sunrise_minutes=sunrise,
        sunset_minutes=sunset,
        solar_noon_minutes=noon,
        daylight_hours=daylight,
        declination_deg=decl,
        max_elevation_deg=90.0 - abs(coord.latitude - decl),
        azimuth_at_sunrise_deg=az_sunrise,
        azimuth_at_sunset_deg=360.0 - az_sunrise,
        current_elevation_deg=elevation,
        current_azimuth_deg=azimuth,
        equation_of_time_minutes=eot,
    )


def optimal_panel_orientation(coord: GeoCoordinate) -> PanelOrientation:
    """Fixed-tilt rule of thumb: tilt equal to |latitude|, facing the equator."""
    return PanelOrientation(
        tilt_deg=abs(coord.latitude),
        azimuth_deg=0.0 if coord.latitude < 0 else 180.0,
    )
