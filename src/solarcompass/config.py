"""Environment-driven settings. Entry points call load_dotenv() before load_settings()."""

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

LANGUAGES = ("es", "en")


class ConfigError(Exception):
    """Malformed SOLARCOMPASS_* environment value."""


@dataclass(frozen=True)
class Settings:
    nominatim_url: str = "https://nominatim.openstreetmap.org/search"
    user_agent: str = "SolarCompass/1.0"
    geocode_timeout: float = 10.0  # seconds
    trajectory_steps: int = 48
    lang: str = "es"
    log_level: str = "WARNING"


def _number(env: Mapping[str, str], key: str, default, cast):
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw.strip())
    except ValueError as e:
        raise ConfigError(f"{key}={raw!r} is not a valid {cast.__name__}") from e
    if not math.isfinite(value) or value < 0:
        raise ConfigError(f"{key} must be a finite number >= 0, got {value}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read SOLARCOMPASS_* variables, falling back to Settings defaults.

    Raises:
        ConfigError: On unparsable numbers, negative values, or an unknown language.
    """
    env = os.environ if environ is None else environ
    defaults = Settings()

    lang = env.get("SOLARCOMPASS_LANG", defaults.lang).strip().lower()
    if lang not in LANGUAGES:
        raise ConfigError(f"SOLARCOMPASS_LANG must be one of {LANGUAGES}, got {lang!r}")

    return Settings(
        nominatim_url=env.get("SOLARCOMPASS_NOMINATIM_URL", defaults.nominatim_url),
        user_agent=env.get("SOLARCOMPASS_USER_AGENT", defaults.user_agent),
        geocode_timeout=_number(
            env, "SOLARCOMPASS_GEOCODE_TIMEOUT", defaults.geocode_timeout, float
        ),
        trajectory_steps=_number(
            env, "SOLARCOMPASS_TRAJECTORY_STEPS", defaults.trajectory_steps, int
        ),
        lang=lang,
        log_level=env.get("SOLARCOMPASS_LOG_LEVEL", defaults.log_level).strip().upper(),
    )
