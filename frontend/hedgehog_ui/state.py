"""
state.py — App-wide UI state

A single ``AppState`` lives in ``st.session_state`` and is passed to every
component. Components only lift values into it (click coordinate, selected id,
created record); fetch decisions are keyed off the current values here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, MutableMapping, Optional

STATE_KEY = "app_state"


@dataclass
class FormValues:
    name: str = ""
    age: str = ""
    gender: Optional[str] = None


@dataclass
class AppState:
    # Latest map click (EPSG:3067)
    coordinates: Optional[tuple[float, float]] = None
    selected_id: Optional[int] = None
    refresh_trigger: int = 0

    hedgehogs: list[dict[str, Any]] = field(default_factory=list)
    list_loaded_for: Optional[int] = None
    list_error: Optional[str] = None

    detail: Optional[dict[str, Any]] = None
    detail_loaded_for: Optional[int] = None
    detail_error: Optional[str] = None

    form: FormValues = field(default_factory=FormValues)
    form_errors: dict[str, str] = field(default_factory=dict)
    submitting: bool = False
    submit_success: bool = False
    reset_form: bool = False


def get_state(store: MutableMapping[str, Any]) -> AppState:
    if STATE_KEY not in store:
        store[STATE_KEY] = AppState()
    return store[STATE_KEY]


def set_coordinates(state: AppState, coordinates: tuple[float, float]) -> None:
    state.coordinates = coordinates
    # 位置が選ばれたら位置エラーは消す
    state.form_errors.pop("location", None)


def select_hedgehog(state: AppState, hedgehog_id: Optional[int]) -> None:
    state.selected_id = hedgehog_id


def handle_created(state: AppState, record: dict[str, Any]) -> None:
    """New record: refresh the list and select it without a second fetch."""
    state.refresh_trigger += 1
    state.selected_id = record["id"]
    state.detail = record
    state.detail_loaded_for = record["id"]
    state.detail_error = None
