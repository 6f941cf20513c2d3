import csv
from datetime import datetime

import pytest
import pytz

from solarcompass import compass, compute
from solarcompass.compute import LocationUnavailableError
from solarcompass.models import GeoCoordinate


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Keep a developer's .env and SOLARCOMPASS_* variables out of the run
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(compass, "load_dotenv", lambda: False)
    for key in ("SOLARCOMPASS_LANG", "SOLARCOMPASS_TRAJECTORY_STEPS", "SOLARCOMPASS_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


def test_cli_prints_snapshot(capsys):
    code = compass.main(["--coords", "19.4326, -99.1332", "--when", "2025-06-21 12:00", "--lang", "en"])
    out = capsys.readouterr().out
    assert code == 0
    assert "America/Mexico_City" in out
    assert "Solar noon" in out and "12:38" in out


def test_cli_writes_outputs(tmp_path):
    code = compass.main(
        [
            "--coords=-33.45, -70.66",
            "--when", "2025-12-21 09:00",
            "--steps", "8",
            "--svg", str(tmp_path / "out" / "c.svg"),
            "--csv", str(tmp_path / "out" / "c.csv"),
            "--png", str(tmp_path / "out" / "c.png"),
            "--html", str(tmp_path / "out" / "c.html"),
        ]
    )
    assert code == 0
    assert (tmp_path / "out" / "c.svg").read_text(encoding="utf-8").startswith("<svg")
    assert (tmp_path / "out" / "c.png").exists()
    assert "plotly" in (tmp_path / "out" / "c.html").read_text(encoding="utf-8")
    with (tmp_path / "out" / "c.csv").open(encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["Amanecer"] != "—"


def test_cli_defaults_to_now(capsys):
    assert compass.main(["--coords", "40.4168, -3.7038"]) == 0
    assert "Europe/Madrid" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv",
    [
        ["--coords", "123, 456", "--when", "2025-06-21 12:00"],
        ["--coords", "19.4, -99.1", "--when", "yesterday"],
    ],
)
def test_cli_invalid_input_exits_2(argv):
    assert compass.main(argv) == 2


def test_cli_location_error_exits_2(monkeypatch):
    def fail(address, settings):
        raise LocationUnavailableError(f"Address not found: {address}")

    monkeypatch.setattr(compute, "geocode_address", fail)
    assert compass.main(["--address", "Calle Falsa 123"]) == 2


def test_cli_config_error_exits_2(monkeypatch):
    monkeypatch.setenv("SOLARCOMPASS_LANG", "klingon")
    assert compass.main(["--coords", "0, 0"]) == 2


def test_cli_requires_a_location():
    with pytest.raises(SystemExit):
        compass.main([])


def test_cli_default_time_inside_repeated_dst_hour(monkeypatch, capsys):
    # 00:30 UTC on 2025-10-26 is 02:30 CEST, the first pass of Madrid's repeated hour
    frozen = datetime(2025, 10, 26, 0, 30, tzinfo=pytz.utc)

    class FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return frozen.astimezone(tz) if tz is not None else frozen.replace(tzinfo=None)

    monkeypatch.setattr(compass, "datetime", FrozenDatetime)
    assert compass.main(["--coords", "40.4168, -3.7038", "--lang", "en"]) == 0
    assert "2025-10-26 02:30 (Europe/Madrid)" in capsys.readouterr().out


def test_cli_address_with_time_goes_through_geocoder(monkeypatch, capsys):
    def fake_geocode(address, settings):
        return GeoCoordinate(19.4326, -99.1332), "Zócalo, CDMX"

    monkeypatch.setattr(compute, "geocode_address", fake_geocode)
    assert compass.main(["--address", "Zócalo", "--when", "2025-06-21 12:00"]) == 0
    assert "Zócalo, CDMX" in capsys.readouterr().out
