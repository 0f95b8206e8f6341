"""
form.py — New hedgehog form

Validation bounds come from the shared server schema
(``hedgehog_map.schemas.commons``) so both sides reject the same input.
Server-side rejections and network failures are shown under the location
field.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Optional

import requests
import streamlit as st

from hedgehog_map.schemas.commons import AGE_MAX, AGE_MIN, GENDERS
from hedgehog_ui.api_client import HedgehogApi
from hedgehog_ui.errors import ApiError, classify_error
from hedgehog_ui.state import AppState, FormValues, handle_created

logger = logging.getLogger(__name__)

GENDER_LABELS = {"female": "Naaras", "male": "Uros", "unknown": "Tuntematon"}

LOCATION_HINT = "Valitse sijainti kartalta klikkaamalla"
SUCCESS_MESSAGE = "Siili lisätty onnistuneesti!"

_WIDGET_KEYS = {"name": "form_name", "age": "form_age", "gender": "form_gender"}


def _parse_number(raw: str) -> Optional[float]:
    try:
        num = float(raw)
    except ValueError:
        return None
    return num if math.isfinite(num) else None


def validate_form(values: FormValues, coordinates: Optional[tuple[float, float]]) -> dict[str, str]:
    errors: dict[str, str] = {}

    if not values.name.strip():
        errors["name"] = "Lisää nimi"

    age = values.age.strip()
    if not age:
        errors["age"] = "Lisää ikä"
    else:
        num = _parse_number(age)
        if num is None or num < AGE_MIN:
            errors["age"] = "Ikä täytyy olla positiivinen numero tai nolla"
        elif num > AGE_MAX:
            errors["age"] = f"Ikä ei voi olla yli {AGE_MAX} vuotta"
        elif not num.is_integer():
            errors["age"] = "Ikä täytyy olla kokonaisluku"

    if values.gender not in GENDERS:
        errors["gender"] = "Valitse sukupuoli"

    if not coordinates or len(coordinates) != 2:
        errors["location"] = LOCATION_HINT

    return errors


def build_payload(values: FormValues, coordinates: tuple[float, float]) -> dict[str, Any]:
    return {
        "name": values.name,
        # validate_form の後なので整数値
        "age": int(float(values.age.strip())),
        "gender": values.gender,
        "location": {"type": "Point", "coordinates": [float(coordinates[0]), float(coordinates[1])]},
    }


def submit_form(api: HedgehogApi, state: AppState) -> bool:
    """Validate and create. Returns True when the record was stored."""
    state.submit_success = False
    errors = validate_form(state.form, state.coordinates)
    state.form_errors = errors
    if errors:
        state.submitting = False
        return False

    state.submitting = True
    try:
        created = api.create_hedgehog(build_payload(state.form, state.coordinates))
    except (ApiError, requests.RequestException) as exc:
        info = classify_error(exc)
        logger.warning("Error submitting form: %s", info.message)
        state.form_errors = {"location": info.message}
        return False
    finally:
        state.submitting = False

    state.submit_success = True
    state.form = FormValues()
    state.form_errors = {}
    state.reset_form = True
    handle_created(state, created)
    return True


def _request_submit(state: AppState) -> None:
    # フォーム送信時のコールバック。値を取り込み、次の実行で送信する
    ss = st.session_state
    state.form = FormValues(
        name=ss.get(_WIDGET_KEYS["name"]) or "",
        age=ss.get(_WIDGET_KEYS["age"]) or "",
        gender=ss.get(_WIDGET_KEYS["gender"]),
    )
    state.submitting = True


def render_form_fields(state: AppState) -> None:
    """Draw the form. Every widget is disabled while a submit is in flight."""
    if state.reset_form:
        # ウィジェット生成前にのみ値を書き換えられる
        st.session_state[_WIDGET_KEYS["name"]] = ""
        st.session_state[_WIDGET_KEYS["age"]] = ""
        st.session_state[_WIDGET_KEYS["gender"]] = None
        state.reset_form = False

    busy = state.submitting
    errors = state.form_errors

    with st.container(border=True):
        st.markdown("#### Lisää uusi siili")
        if state.submit_success:
            st.success(SUCCESS_MESSAGE)

        with st.form("hedgehog_form", clear_on_submit=False):
            st.text_input("Nimi", key=_WIDGET_KEYS["name"], disabled=busy)
            if errors.get("name"):
                st.error(errors["name"])

            st.text_input("Ikä", key=_WIDGET_KEYS["age"], disabled=busy, placeholder=f"{AGE_MIN}–{AGE_MAX}")
            if errors.get("age"):
                st.error(errors["age"])

            st.radio(
                "Sukupuoli",
                options=list(GENDERS),
                format_func=lambda g: GENDER_LABELS[g],
                index=None,
                horizontal=True,
                key=_WIDGET_KEYS["gender"],
                disabled=busy,
            )
            if errors.get("gender"):
                st.error(errors["gender"])

            st.markdown("**Sijainti**")
            if state.coordinates:
                e, n = state.coordinates
                st.caption("Siilin koordinaatit (ETRS-TM35FIN):")
                st.code(f"E {e:.0f}, N {n:.0f}", language=None)
            else:
                st.info(LOCATION_HINT)
            if errors.get("location"):
                st.error(errors["location"])

            st.form_submit_button(
                "Tallennetaan..." if busy else "Tallenna siili",
                disabled=busy,
                use_container_width=True,
                on_click=_request_submit,
                args=(state,),
            )


def render_form(api: HedgehogApi, state: AppState) -> None:
    render_form_fields(state)
    if state.submitting:
        # 送信中はフォームを無効化した状態で描画してからリクエストする
        with st.spinner("Tallennetaan..."):
            submit_form(api, state)
        st.rerun()
