"""SolarCompass — Streamlit page showing the sun path for a site visit.

    streamlit run src/solarcompass/app.py
"""

import datetime

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv

load_dotenv()

from solarcompass.compute import LocationError, compute_compass_data, resolve_site  # noqa: E402
from solarcompass.config import ConfigError, Settings, load_settings  # noqa: E402
from solarcompass.export import snapshot_row  # noqa: E402
from solarcompass.i18n import t  # noqa: E402
from solarcompass.models import InvalidInputError, SiteQuery  # noqa: E402
from solarcompass.renderers.svg_2d import render_svg_html  # noqa: E402

config_error = None
try:
    settings = load_settings()
except ConfigError as e:
    config_error = e
    settings = Settings()
lang = settings.lang

st.set_page_config(page_title=t("page_title", lang), page_icon="☀", layout="centered")

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
        color: #e8e8e8;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] { display: none !important; }
    label, [data-testid="stWidgetLabel"] p { color: #c9a96e !important; }
    </style>
    """,
    unsafe_allow_html=True,
)

if config_error is not None:
    st.warning(t("error_config", lang).format(error=config_error))

# --- Session state initialization ---
if "compass" not in st.session_state:
    st.session_state.compass = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

# --- Input row ---
col1, col2, col3, col4 = st.columns([3, 2, 2, 1])
with col1:
    coords = st.text_input(t("label_coords", lang), value="19.432600, -99.133200")
with col2:
    date_val = st.date_input(t("label_date", lang), value=datetime.date(2025, 6, 21))
with col3:
    time_val = st.time_input(t("label_time", lang), value=datetime.time(12, 0), step=300)
with col4:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    submitted = st.button(t("btn_compute", lang))

if submitted and coords:
    when_str = f"{date_val.strftime('%Y-%m-%d')} {time_val.strftime('%H:%M')}"
    st.session_state.error_msg = None
    try:
        context = resolve_site(SiteQuery(address=coords, when=when_str), settings)
        st.session_state.compass = compute_compass_data(
            context, steps=settings.trajectory_steps
        )
    except LocationError as e:
        st.session_state.compass = None
        st.session_state.error_msg = t("error_location", lang).format(error=e)
    except InvalidInputError as e:
        st.session_state.compass = None
        st.session_state.error_msg = t("error_input", lang).format(error=e)

# --- Error message ---
if st.session_state.error_msg:
    st.error(st.session_state.error_msg)

# --- Compass + snapshot ---
compass = st.session_state.compass
if compass is not None:
    components.html(render_svg_html(compass, lang=lang), height=520)
    row = snapshot_row(compass.sun, compass.panel, lang=lang)
    st.table({"": list(row.keys()), " ": list(row.values())})
