import xml.etree.ElementTree as ET

import plotly.graph_objects as go
import pytest
from matplotlib.figure import Figure

from solarcompass.compute import compute_compass_data
from solarcompass.renderers.plotly_2d import render_plotly_chart, save_plotly_html
from solarcompass.renderers.static import render_static_chart, save_static_chart
from solarcompass.renderers.svg_2d import render_svg, render_svg_html

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def cdmx_compass(cdmx_context):
    return compute_compass_data(cdmx_context, steps=16)


@pytest.fixture
def polar_compass(polar_context):
    return compute_compass_data(polar_context)


# ---------- SVG ----------


def test_svg_is_well_formed_and_has_all_layers(cdmx_compass):
    root = ET.fromstring(render_svg(cdmx_compass))
    ids = {el.get("id") for el in root.iter() if el.get("id")}
    assert {"sun-path", "sunrise", "sunset", "sun", "panel"} <= ids
    path = next(el for el in root.iter(f"{SVG_NS}polyline"))
    assert len(path.get("points").split()) == 17


def test_svg_labels_follow_language(cdmx_compass):
    es = render_svg(cdmx_compass, lang="es")
    en = render_svg(cdmx_compass, lang="en")
    assert ">O</text>" in es and ">W</text>" in en
    assert "Amanecer" in es and "Sunrise" in en


def test_svg_polar_shows_no_path_message(polar_compass):
    root = ET.fromstring(render_svg(polar_compass, lang="en"))
    ids = {el.get("id") for el in root.iter() if el.get("id")}
    assert "sun-path" not in ids and "sunrise" not in ids
    assert "no-path" in ids
    sun = next(el for el in root.iter(f"{SVG_NS}circle") if el.get("id") == "sun")
    assert sun.get("fill") == "none"


def test_svg_html_wraps_svg(cdmx_compass):
    html = render_svg_html(cdmx_compass)
    assert html.startswith("<!DOCTYPE html>")
    assert "<svg" in html and "</svg>" in html


# ---------- matplotlib ----------


def test_render_static_chart(cdmx_compass):
    fig = render_static_chart(cdmx_compass)
    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert len(ax.lines) == 1
    xs, ys = ax.lines[0].get_data()
    # North-up: matplotlib y is the negated screen y
    assert ys[0] == pytest.approx(-cdmx_compass.path_points[0].y)


def test_save_static_chart(tmp_path, polar_compass):
    out = save_static_chart(polar_compass, tmp_path / "charts" / "polar.png")
    assert out.exists()
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


# ---------- Plotly ----------


def test_render_plotly_chart(cdmx_compass):
    fig = render_plotly_chart(cdmx_compass, lang="en")
    assert isinstance(fig, go.Figure)
    names = [tr.name for tr in fig.data]
    assert "path" in names and "sun" in names and "horizon" in names
    path = next(tr for tr in fig.data if tr.name == "path")
    assert len(path.x) == 17
    assert "Sunrise" in next(tr for tr in fig.data if tr.name == "horizon").text[0]
    # Screen convention: reversed y axis
    assert fig.layout.yaxis.range[0] > fig.layout.yaxis.range[1]


def test_render_plotly_chart_polar(polar_compass):
    names = [tr.name for tr in render_plotly_chart(polar_compass).data]
    assert "path" not in names and "horizon" not in names
    assert "sun" in names


def test_save_plotly_html(tmp_path, cdmx_compass):
    out = save_plotly_html(cdmx_compass, tmp_path / "html" / "compass.html", lang="en")
    assert out.exists()
    assert "cdn.plot.ly" in out.read_text(encoding="utf-8")
