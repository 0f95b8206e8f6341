"""List of registered hedgehogs."""
from __future__ import annotations

import logging

import requests
import streamlit as st

from hedgehog_ui.api_client import HedgehogApi
from hedgehog_ui.errors import ApiError, classify_error
from hedgehog_ui.state import AppState, select_hedgehog

logger = logging.getLogger(__name__)


def load_list(api: HedgehogApi, state: AppState) -> bool:
    """
    Fetch the list once per refresh trigger value.
    Returns True when a request was made.
    """
    trigger = state.refresh_trigger
    if state.list_loaded_for == trigger:
        return False

    try:
        rows = api.list_hedgehogs()
    except (ApiError, requests.RequestException) as exc:
        info = classify_error(exc)
        logger.warning("Error while fetching hedgehogs: %s", info.message)
        state.list_error = info.message
        state.list_loaded_for = trigger
        return True

    # 取得中にトリガーが進んでいたら古い応答は捨てる
    if state.refresh_trigger != trigger:
        return True
    state.hedgehogs = rows
    state.list_loaded_for = trigger
    state.list_error = None
    return True


def render_list(api: HedgehogApi, state: AppState) -> None:
    load_list(api, state)

    with st.container(border=True):
        st.markdown("**Rekisteröidyt siilit**")
        if state.list_error:
            st.warning(state.list_error)
        if not state.hedgehogs:
            st.write("Ei siilejä tietokannassa.")
            return
        for h in state.hedgehogs:
            st.button(
                h["name"],
                key=f"hedgehog-{h['id']}",
                type="primary" if h["id"] == state.selected_id else "secondary",
                on_click=select_hedgehog,
                args=(state, h["id"]),
                use_container_width=True,
            )
