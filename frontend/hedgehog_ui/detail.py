"""Details of the selected hedgehog."""
from __future__ import annotations

import logging

import requests
import streamlit as st

from hedgehog_ui.api_client import HedgehogApi
from hedgehog_ui.errors import ApiError, classify_error
from hedgehog_ui.form import GENDER_LABELS
from hedgehog_ui.state import AppState

logger = logging.getLogger(__name__)


def load_detail(api: HedgehogApi, state: AppState) -> bool:
    """
    Fetch the selected record when the selection changes.
    Returns True when a request was made.
    """
    requested = state.selected_id
    if requested is None:
        state.detail = None
        state.detail_loaded_for = None
        state.detail_error = None
        return False
    if state.detail_loaded_for == requested:
        return False

    try:
        record = api.get_hedgehog(requested)
    except (ApiError, requests.RequestException) as exc:
        info = classify_error(exc)
        logger.warning("Error fetching hedgehog %s: %s", requested, info.message)
        if state.selected_id == requested:
            state.detail = None
            state.detail_error = info.message
            state.detail_loaded_for = requested
        return True

    # 選択が変わっていれば古い応答は破棄
    if state.selected_id != requested:
        return True
    state.detail = record
    state.detail_loaded_for = requested
    state.detail_error = None
    return True


def format_coordinates(coordinates) -> str:
    e, n = coordinates
    return f"E {e:.0f}, N {n:.0f}"


def render_detail(api: HedgehogApi, state: AppState) -> None:
    with st.container(border=True):
        if state.selected_id is not None and state.detail_loaded_for != state.selected_id:
            with st.spinner("Loading..."):
                load_detail(api, state)
        else:
            load_detail(api, state)

        h = state.detail
        if state.detail_error:
            st.warning(state.detail_error)
        if h:
            st.subheader(h["name"])
            st.write(f"Ikä: {h['age']}")
            st.write(f"Sukupuoli: {GENDER_LABELS.get(h['gender'], h['gender'])}")
            st.write(f"Sijainti: {format_coordinates(h['location']['coordinates'])}")
        elif not state.detail_error:
            st.write("Valitse siili vasemmalla olevasta listasta")
