"""Simple two-language (es/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "es": "Brújula solar",
        "en": "Solar Compass",
    },
    "label_coords": {
        "es": "Coordenadas GPS",
        "en": "GPS coordinates",
    },
    "label_date": {
        "es": "Fecha",
        "en": "Date",
    },
    "label_time": {
        "es": "Hora",
        "en": "Time",
    },
    "btn_compute": {
        "es": "☀ Calcular",
        "en": "☀ Compute",
    },
    "sunrise": {
        "es": "Amanecer",
        "en": "Sunrise",
    },
    "sunset": {
        "es": "Atardecer",
        "en": "Sunset",
    },
    "solar_noon": {
        "es": "Mediodía solar",
        "en": "Solar noon",
    },
    "equation_of_time": {
        "es": "Ecuación del tiempo",
        "en": "Equation of time",
    },
    "daylight_hours": {
        "es": "Horas de luz",
        "en": "Daylight hours",
    },
    "declination": {
        "es": "Declinación solar",
        "en": "Solar declination",
    },
    "max_elevation": {
        "es": "Elevación máxima",
        "en": "Maximum elevation",
    },
    "azimuth_sunrise": {
        "es": "Azimut al amanecer",
        "en": "Azimuth at sunrise",
    },
    "azimuth_sunset": {
        "es": "Azimut al atardecer",
        "en": "Azimuth at sunset",
    },
    "current_elevation": {
        "es": "Elevación actual",
        "en": "Current elevation",
    },
    "current_azimuth": {
        "es": "Azimut actual",
        "en": "Current azimuth",
    },
    "panel_tilt": {
        "es": "Inclinación óptima",
        "en": "Optimal tilt",
    },
    "panel_azimuth": {
        "es": "Orientación óptima",
        "en": "Optimal orientation",
    },
    "polar_day": {
        "es": "Sol de medianoche",
        "en": "Midnight sun",
    },
    "polar_night": {
        "es": "Noche polar",
        "en": "Polar night",
    },
    "no_trajectory": {
        "es": "El sol no sale ni se pone este día",
        "en": "The sun neither rises nor sets on this day",
    },
    "error_location": {
        "es": "No se pudo obtener la ubicación. ({error})",
        "en": "Location unavailable. ({error})",
    },
    "error_config": {
        "es": "Configuración inválida, se usan los valores por defecto. ({error})",
        "en": "Invalid configuration, using defaults. ({error})",
    },
    "error_input": {
        "es": "Datos inválidos. ({error})",
        "en": "Invalid input. ({error})",
    },
    "compass_n": {"es": "N", "en": "N"},
    "compass_e": {"es": "E", "en": "E"},
    "compass_s": {"es": "S", "en": "S"},
    "compass_w": {"es": "O", "en": "W"},
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'es', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("es") or key
