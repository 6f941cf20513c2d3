"""CLI entry point for the solar compass.

    solarcompass --coords "19.4326, -99.1332" --when "2025-06-21 12:00" --png out.png
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from pytz import timezone

from solarcompass.compute import (
    LocationError,
    compute_compass_data,
    locate_site,
    resolve_site,
    timezone_name_at,
)
from solarcompass.config import ConfigError, Settings, load_settings
from solarcompass.export import snapshot_row, write_rows_csv
from solarcompass.models import (
    GeoCoordinate,
    Instant,
    InvalidInputError,
    SiteContext,
    SiteQuery,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solarcompass",
        description="Sunrise, sunset, sun path and panel orientation for a site visit.",
    )
    where = parser.add_mutually_exclusive_group(required=True)
    where.add_argument("--coords", help='GPS coordinates, "LAT, LON"')
    where.add_argument("--address", help="Postal address (geocoded)")
    parser.add_argument(
        "--when",
        help='Local time "YYYY-MM-DD HH:MM" (default: now at the site)',
    )
    parser.add_argument("--steps", type=int, help="Trajectory intervals")
    parser.add_argument("--lang", choices=("es", "en"), help="Label language")
    parser.add_argument("--png", type=Path, help="Save a matplotlib PNG")
    parser.add_argument("--svg", type=Path, help="Save an SVG compass")
    parser.add_argument("--csv", type=Path, help="Save the snapshot row as CSV")
    parser.add_argument("--html", type=Path, help="Save an interactive plotly compass")
    return parser


def _resolve_context(args: argparse.Namespace, settings: Settings) -> SiteContext:
    # --coords must parse as GPS and never falls through to the geocoder
    address = str(GeoCoordinate.parse(args.coords)) if args.coords else args.address
    if args.when is not None:
        return resolve_site(SiteQuery(address=address, when=args.when), settings)

    coord, address_display = locate_site(address, settings)
    tz_str = timezone_name_at(coord)
    # The aware clock already carries the right offset, even in a repeated DST hour
    instant = Instant.from_datetime(datetime.now(timezone(tz_str)))
    return SiteContext(
        coordinate=coord,
        instant=instant,
        address_display=address_display,
        timezone_name=tz_str,
    )


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ConfigError as e:
        logging.basicConfig(level=logging.WARNING)
        logger.error(f"Configuration error: {e}")
        return 2
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    lang = args.lang or settings.lang
    steps = settings.trajectory_steps if args.steps is None else args.steps

    try:
        context = _resolve_context(args, settings)
        compass = compute_compass_data(context, steps=steps)
    except (InvalidInputError, LocationError) as e:
        logger.error(str(e))
        return 2

    row = snapshot_row(compass.sun, compass.panel, lang=lang)
    print(f"{context.address_display} · {context.instant.local:%Y-%m-%d %H:%M} "
          f"({context.timezone_name})")
    width = max(len(k) for k in row)
    for label, value in row.items():
        print(f"  {label:<{width}}  {value}")

    if args.csv:
        write_rows_csv([row], args.csv)
    if args.svg:
        from solarcompass.renderers.svg_2d import render_svg

        args.svg.parent.mkdir(parents=True, exist_ok=True)
        args.svg.write_text(render_svg(compass, lang=lang), encoding="utf-8")
        logger.info(f"Saved SVG to {args.svg}")
    if args.png:
        from solarcompass.renderers.static import save_static_chart

        save_static_chart(compass, args.png, lang=lang)
    if args.html:
        from solarcompass.renderers.plotly_2d import save_plotly_html

        save_plotly_html(compass, args.html, lang=lang)
    return 0


if __name__ == "__main__":
    sys.exit(main())
