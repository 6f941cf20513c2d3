"""Record export — flatten a SunPosition into a labelled spreadsheet row."""

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

from solarcompass.i18n import t
from solarcompass.models import PanelOrientation, SunPosition

logger = logging.getLogger(__name__)

MISSING = "—"


def format_clock(minutes: float | None) -> str:
    """Minutes since local midnight → "HH:MM", wrapped into one day."""
    if minutes is None:
        return MISSING
    total = round(minutes) % (24 * 60)
    return f"{total // 60:02d}:{total % 60:02d}"


def format_degrees(value: float, digits: int = 1) -> str:
    return f"{value:.{digits}f}°"


def snapshot_row(
    sun: SunPosition, panel: PanelOrientation | None = None, lang: str = "es"
) -> dict[str, str]:
    """Textual snapshot of the engine output, keyed by display label.

    In polar day/night the sunrise and sunset cells carry the polar condition
    instead of a time.
    """
    if sun.sunrise_minutes is None:
        polar = t("polar_day" if sun.is_polar_day else "polar_night", lang)
        sunrise = sunset = polar
    else:
        sunrise = format_clock(sun.sunrise_minutes)
        sunset = format_clock(sun.sunset_minutes)

    row = {
        t("sunrise", lang): sunrise,
        t("sunset", lang): sunset,
        t("solar_noon", lang): format_clock(sun.solar_noon_minutes),
        t("equation_of_time", lang): f"{sun.equation_of_time_minutes:+.1f} min",
        t("daylight_hours", lang): f"{sun.daylight_hours:.1f} h",
        t("declination", lang): format_degrees(sun.declination_deg),
        t("max_elevation", lang): format_degrees(sun.max_elevation_deg),
        t("azimuth_sunrise", lang): format_degrees(sun.azimuth_at_sunrise_deg),
        t("azimuth_sunset", lang): format_degrees(sun.azimuth_at_sunset_deg),
        t("current_elevation", lang): format_degrees(sun.current_elevation_deg),
        t("current_azimuth", lang): format_degrees(sun.current_azimuth_deg),
    }
    if panel is not None:
        row[t("panel_tilt", lang)] = format_degrees(panel.tilt_deg, 0)
        row[t("panel_azimuth", lang)] = format_degrees(panel.azimuth_deg, 0)
    return row


def write_rows_csv(rows: Sequence[dict[str, str]], path: Path) -> Path:
    """Write snapshot rows to a UTF-8 CSV; the first row's keys are the header."""
    if not rows:
        raise ValueError("No rows to write")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0]))
        writer.writeheader()
        writer.writerows(rows)
    logger.info(f"Wrote {len(rows)} row(s) to {path}")
    return path
