import logging

import streamlit as st
import pandas as pd
import pydeck as pdk
import plotly.express as px
import requests

from certmap.config import (
    CITY_INDEX_PATH,
    CITY_ZOOM,
    DATASET_PATH,
    FETCH_TIMEOUT,
    INDIA_STATES_GEOJSON_URL,
    MAP_CENTER,
    MAP_STYLE,
    MAP_ZOOM,
    MARKER_FILL_OPACITY,
    MARKER_LINE_WIDTH_PX,
    MARKER_RADIUS_PX,
)
from certmap.city_index import FALLBACK
from certmap.dataset import rows_to_frame
from certmap.errors import DatasetLoadError
from certmap.filters import FilterSelection
from certmap.legend import legend_html
from certmap.markers import MarkerLayer, status_breakdown
from certmap.session import CertMapSession

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Certified Companies Map", layout="wide")
st.title("Certified Companies Map")

# =========================================================
# Helpers
# =========================================================

# Filter controls: (session field, label)
FILTER_CONTROLS = [
    ("status", "Status"),
    ("category", "Category"),
    ("city", "City"),
    ("state", "State"),
    ("poc", "PoC"),
    ("gp_team", "GP Team"),
    ("year", "Year of Certification"),
]


# one session per distinct upload; keep only the latest few alive
@st.cache_resource(show_spinner="Loading dataset and city index...", max_entries=4)
def load_session(dataset_path, city_path, dataset_bytes=None) -> CertMapSession:
    source = dataset_bytes if dataset_bytes is not None else dataset_path
    return CertMapSession.load(city_source=city_path, dataset_source=source)


@st.cache_data(show_spinner=False)
def load_states_geojson() -> dict:
    r = requests.get(INDIA_STATES_GEOJSON_URL, timeout=FETCH_TIMEOUT)
    r.raise_for_status()
    return r.json()


def fill_select(label: str, values: list, key: str):
    """Selectbox with an "All" option (None) ahead of the sorted facet values."""
    return st.sidebar.selectbox(
        label,
        [None] + list(values),
        format_func=lambda v: "All" if v is None else str(v),
        key=key,
    )


def view_for(df_map: pd.DataFrame) -> pdk.ViewState:
    # zoom in when everything plotted sits on one city
    if len(df_map) and df_map[["lat", "lon"]].drop_duplicates().shape[0] == 1:
        return pdk.ViewState(
            latitude=float(df_map["lat"].iloc[0]),
            longitude=float(df_map["lon"].iloc[0]),
            zoom=CITY_ZOOM,
        )
    return pdk.ViewState(latitude=MAP_CENTER[0], longitude=MAP_CENTER[1], zoom=MAP_ZOOM)


# =========================================================
# Upload + Load
# =========================================================
st.sidebar.header("Data")
uploaded = st.sidebar.file_uploader("Replace roster (.xlsx)", type=["xlsx"])

try:
    session = load_session(
        str(DATASET_PATH),
        str(CITY_INDEX_PATH),
        uploaded.getvalue() if uploaded else None,
    )
except DatasetLoadError as e:
    logger.error("Dataset load failed: %s", e)
    st.error(f"Could not load the roster: {e}")
    st.stop()

if session.city_index.source == FALLBACK:
    st.sidebar.caption(
        f"⚠️ {CITY_INDEX_PATH.name} not found; using the built-in list of "
        f"{len(session.city_index)} cities."
    )
elif not session.city_index.ready:
    st.sidebar.caption("⚠️ City index is empty; no markers can be placed.")

# =========================================================
# Filters
# =========================================================
st.sidebar.header("Filters")
search = st.sidebar.text_input("Search company", "")

choices = {
    name: fill_select(label, session.facets[name], key=f"filter_{name}")
    for name, label in FILTER_CONTROLS
}
selection = FilterSelection(
    search=search,
    **{name: ("" if v is None else v) for name, v in choices.items()},
)

st.sidebar.header("Map Boundaries")
show_state_borders = st.sidebar.checkbox("State boundaries (overlay)", value=False)

st.sidebar.markdown(legend_html(), unsafe_allow_html=True)

# =========================================================
# Filter + Render
# =========================================================
layer = st.session_state.setdefault("marker_layer", MarkerLayer())
filtered, result, layer = session.refresh(selection, layer)
df_map = layer.to_frame()

left, right = st.columns([1.35, 1.0], gap="large")

with left:
    st.subheader("Map")
    st.caption(
        f"Showing **{len(filtered):,}** of {len(session.rows):,} companies · "
        f"plotted **{result.plotted:,}**, missing coordinates **{result.missing:,}**"
    )

    tooltip = {
        "html": "{popup_html}",
        "style": {"backgroundColor": "white", "color": "black"},
    }

    layers = [
        pdk.Layer(
            "ScatterplotLayer",
            data=df_map,
            get_position="[lon, lat]",
            radius_units="pixels",
            get_radius=MARKER_RADIUS_PX,
            filled=True,
            stroked=True,
            get_fill_color="fill_rgb",
            get_line_color="line_rgb",
            line_width_min_pixels=MARKER_LINE_WIDTH_PX,
            opacity=MARKER_FILL_OPACITY,
            pickable=True,
        )
    ]

    if show_state_borders:
        try:
            states_geo = load_states_geojson()
        except requests.RequestException as e:
            logger.warning("State boundaries unavailable: %s", e)
            st.warning("State boundaries could not be loaded.")
        else:
            layers.insert(0, pdk.Layer(
                "GeoJsonLayer",
                data=states_geo,
                stroked=True,
                filled=False,
                get_line_color=[40, 40, 40],
                line_width_min_pixels=0.5,
                opacity=0.3,
                pickable=False,
            ))

    deck = pdk.Deck(
        layers=layers,
        initial_view_state=view_for(df_map),
        tooltip=tooltip,
        map_style=MAP_STYLE,
    )
    st.pydeck_chart(deck, use_container_width=True)

with right:
    st.subheader("Companies by status")

    if filtered:
        counts, colors = status_breakdown(filtered)
        fig = px.bar(
            counts,
            y="Status",
            x="count",
            color="Status",
            orientation="h",
            color_discrete_map=colors,
            title="",
        )
        fig.update_layout(
            height=420,
            yaxis_title="",
            xaxis_title="Companies",
            showlegend=False,
            margin=dict(l=10, r=10, t=10, b=10),
        )
        st.plotly_chart(fig, use_container_width=True)
    else:
        st.info("No companies match the current filters.")

# =========================================================
# Tables
# =========================================================
with st.expander("Filtered companies"):
    st.dataframe(rows_to_frame(filtered), use_container_width=True, hide_index=True)

with st.expander("Cities without coordinates"):
    st.write(f"Rows missing coordinates: **{result.missing:,}**")
    if result.unresolved:
        st.dataframe(
            rows_to_frame(result.unresolved)[["Company Name", "City", "State", "Status"]],
            use_container_width=True,
            hide_index=True,
        )
