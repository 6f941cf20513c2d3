"""Frozen value types passed between site resolution, the ephemeris engine and the renderers."""

import math
import re
from dataclasses import dataclass
from datetime import datetime


class InvalidInputError(ValueError):
    """Degenerate input rejected before it reaches any trigonometry."""


def _require_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return value


_COORDS_RE = re.compile(r"^\s*([-+]?\d+(?:\.\d+)?)\s*[,;]\s*([-+]?\d+(?:\.\d+)?)\s*$")


def looks_like_coordinates(text: str) -> bool:
    """True when text has the "lat, lon" shape, whether or not the values are in range."""
    return bool(_COORDS_RE.match(text or ""))


@dataclass(frozen=True)
class SiteQuery:
    """Raw user input. Not yet validated."""

    address: str  # Free-form site address ("Av. Reforma 222, CDMX")
    when: str  # "YYYY-MM-DD HH:MM" local wall-clock string


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer position on the WGS84 ellipsoid, validated on construction."""

    latitude: float  # Decimal degrees, south negative
    longitude: float  # Decimal degrees, east positive

    def __post_init__(self) -> None:
        lat = _require_finite("latitude", self.latitude)
        lon = _require_finite("longitude", self.longitude)
        if not -90.0 <= lat <= 90.0:
            raise InvalidInputError(f"latitude out of range [-90, 90]: {lat}")
        if not -180.0 <= lon <= 180.0:
            raise InvalidInputError(f"longitude out of range [-180, 180]: {lon}")
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)

    @classmethod
    def parse(cls, text: str) -> "GeoCoordinate":
        """Parse a GPS field value such as ``"19.432600, -99.133200"``."""
        match = _COORDS_RE.match(text or "")
        if match is None:
            raise InvalidInputError(f"Unrecognised coordinates: {text!r}")
        return cls(latitude=float(match.group(1)), longitude=float(match.group(2)))

    def __str__(self) -> str:
        return f"{self.latitude:.6f}, {self.longitude:.6f}"


@dataclass(frozen=True)
class Instant:
    """Local wall-clock time together with its UTC offset.

    The offset is positive east of Greenwich (UTC-6 → -360). Both halves are
    needed: the calendar date drives declination, the offset drives solar noon.
    """

    local: datetime  # Naive local wall-clock time
    utc_offset_minutes: float  # Minutes east of UTC

    def __post_init__(self) -> None:
        if not isinstance(self.local, datetime):
            raise InvalidInputError(f"local must be a datetime, got {self.local!r}")
        if self.local.tzinfo is not None:
            raise InvalidInputError(
                "Instant.local must be naive; use Instant.from_datetime() for aware values"
            )
        offset = _require_finite("utc_offset_minutes", self.utc_offset_minutes)
        if abs(offset) > 24 * 60:
            raise InvalidInputError(f"utc_offset_minutes out of range: {offset}")
        object.__setattr__(self, "utc_offset_minutes", offset)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """Build from a timezone-aware datetime. Naive datetimes are rejected."""
        if not isinstance(dt, datetime):
            raise InvalidInputError(f"Expected a datetime, got {dt!r}")
        offset = dt.utcoffset()
        if offset is None:
            raise InvalidInputError(f"Datetime has no UTC offset: {dt.isoformat()}")
        return cls(
            local=dt.replace(tzinfo=None),
            utc_offset_minutes=offset.total_seconds() / 60.0,
        )

    @property
    def day_of_year(self) -> int:
        return self.local.timetuple().tm_yday

    @property
    def minute_of_day(self) -> float:
        t = self.local
        return t.hour * 60 + t.minute + (t.second + t.microsecond / 1e6) / 60.0


@dataclass(frozen=True)
class SunPosition:
    """Calculator output for one day at one site. All angles in degrees."""

    sunrise_minutes: float | None  # Minutes since local midnight; None = no sunrise
    sunset_minutes: float | None  # Minutes since local midnight; None = no sunset
    solar_noon_minutes: float
    daylight_hours: float  # [0, 24]
    declination_deg: float
    max_elevation_deg: float
    azimuth_at_sunrise_deg: float
    azimuth_at_sunset_deg: float
    current_elevation_deg: float  # Position at the requested instant
    current_azimuth_deg: float  # 0=N, 90=E, 180=S, 270=W
    equation_of_time_minutes: float = 0.0

    @property
    def is_polar_day(self) -> bool:
        return self.sunrise_minutes is None and self.daylight_hours >= 24.0

    @property
    def is_polar_night(self) -> bool:
        return self.sunrise_minutes is None and self.daylight_hours <= 0.0


@dataclass(frozen=True)
class TrajectorySample:
    """A single point on the day's solar path."""

    minute_of_day: float
    azimuth_deg: float
    elevation_deg: float


@dataclass(frozen=True)
class PlotPoint:
    """Drawable position. Screen convention: y grows downwards."""

    x: float
    y: float


@dataclass(frozen=True)
class PanelOrientation:
    """Fixed-tilt panel recommendation for a site."""

    tilt_deg: float  # Tilt from horizontal
    azimuth_deg: float  # Facing direction (0=N, 180=S)


@dataclass(frozen=True)
class SiteContext:
    """Result of location + clock resolution. Input to the ephemeris engine."""

    coordinate: GeoCoordinate
    instant: Instant
    address_display: str  # Normalized address returned by geocoder (for display)
    timezone_name: str = ""  # IANA zone name, empty when the caller supplied the offset


@dataclass(frozen=True)
class CompassData:
    """The sole input to renderers. Fully computed state."""

    context: SiteContext
    sun: SunPosition
    panel: PanelOrientation
    trajectory: tuple[TrajectorySample, ...]  # Empty in polar day/night
    path_points: tuple[PlotPoint, ...]  # Projected trajectory, same order
    current_point: PlotPoint
    sunrise_point: PlotPoint | None
    sunset_point: PlotPoint | None
    radius: float  # Compass radius used for projection, centred on (0, 0)
