"""
app.py — Siilit kartalla (Streamlit entry point)

Run with::

    streamlit run frontend/hedgehog_ui/app.py

Layout: list | details + form | map. Map clicks and list selections are
lifted into the shared ``AppState``; the form hands the created record back so
the list refreshes and the new hedgehog is selected without a second fetch.
"""
import logging

import streamlit as st

from hedgehog_ui.api_client import HedgehogApi
from hedgehog_ui.detail import render_detail
from hedgehog_ui.form import render_form
from hedgehog_ui.listing import render_list
from hedgehog_ui.map_view import render_map
from hedgehog_ui.settings import API_TIMEOUT, API_URL
from hedgehog_ui.state import get_state, set_coordinates

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@st.cache_resource
def get_api() -> HedgehogApi:
    return HedgehogApi(API_URL, timeout=API_TIMEOUT)


st.set_page_config(page_title="Siilit kartalla", page_icon="🦔", layout="wide")
st.markdown("### Siilit kartalla")

api = get_api()
state = get_state(st.session_state)

col_list, col_info, col_map = st.columns([1, 1.5, 2])

with col_list:
    render_list(api, state)

with col_info:
    render_detail(api, state)
    render_form(api, state)

with col_map:
    clicked = render_map(state)

if clicked is not None:
    set_coordinates(state, clicked)
    st.rerun()

st.caption("Powered by Ubigu Oy")
