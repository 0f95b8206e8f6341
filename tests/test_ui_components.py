"""Tests for the UI controller logic (list, detail, form, map) with a fake API."""

from __future__ import annotations

from typing import Any, Optional

import folium
import pytest
import requests

from hedgehog_ui.detail import format_coordinates, load_detail
from hedgehog_ui.errors import NETWORK_MESSAGE, ApiError
from hedgehog_ui.form import LOCATION_HINT, build_payload, submit_form, validate_form
from hedgehog_ui.listing import load_list
from hedgehog_ui.map_view import MarkerKind, build_map, click_coordinates, features_for
from hedgehog_ui.state import AppState, FormValues, get_state, select_hedgehog, set_coordinates

FIXTURE = {
    "id": 1,
    "name": "Saara Siili",
    "age": 3,
    "gender": "female",
    "location": {"type": "Point", "coordinates": [385000.0, 6670000.0]},
}


class FakeApi:
    def __init__(self) -> None:
        self.records: dict[int, dict[str, Any]] = {FIXTURE["id"]: FIXTURE}
        self.calls: list[tuple] = []
        self.fail: Optional[Exception] = None
        self.on_get = None

    def list_hedgehogs(self) -> list[dict[str, Any]]:
        self.calls.append(("list",))
        if self.fail:
            raise self.fail
        return [{"id": r["id"], "name": r["name"]} for r in self.records.values()]

    def get_hedgehog(self, hedgehog_id: int) -> Optional[dict[str, Any]]:
        self.calls.append(("get", hedgehog_id))
        if self.on_get:
            self.on_get()
        if self.fail:
            raise self.fail
        return self.records.get(hedgehog_id)

    def create_hedgehog(self, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("create", payload))
        if self.fail:
            raise self.fail
        record = {"id": max(self.records) + 1, **payload}
        self.records[record["id"]] = record
        return record


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def state() -> AppState:
    return AppState()


class TestGetState:
    def test_created_once(self) -> None:
        store: dict = {}
        first = get_state(store)
        assert get_state(store) is first


class TestList:
    def test_fetches_once_per_trigger(self, api: FakeApi, state: AppState) -> None:
        assert load_list(api, state) is True
        assert load_list(api, state) is False
        assert state.hedgehogs == [{"id": 1, "name": "Saara Siili"}]

        state.refresh_trigger += 1
        assert load_list(api, state) is True
        assert api.calls.count(("list",)) == 2

    def test_failure_keeps_previous_list(self, api: FakeApi, state: AppState) -> None:
        load_list(api, state)
        api.fail = requests.ConnectionError("down")
        state.refresh_trigger += 1
        load_list(api, state)
        assert state.hedgehogs == [{"id": 1, "name": "Saara Siili"}]
        assert state.list_error == NETWORK_MESSAGE


class TestDetail:
    def test_selecting_triggers_one_fetch(self, api: FakeApi, state: AppState) -> None:
        select_hedgehog(state, 1)
        load_detail(api, state)
        load_detail(api, state)

        assert api.calls == [("get", 1)]
        assert state.detail["age"] == 3
        assert state.detail["gender"] == "female"
        assert format_coordinates(state.detail["location"]["coordinates"]) == "E 385000, N 6670000"

    def test_no_selection_clears(self, api: FakeApi, state: AppState) -> None:
        select_hedgehog(state, 1)
        load_detail(api, state)
        select_hedgehog(state, None)
        assert load_detail(api, state) is False
        assert state.detail is None

    def test_stale_response_discarded(self, api: FakeApi, state: AppState) -> None:
        select_hedgehog(state, 1)
        # 応答到着前に選択が変わる
        api.on_get = lambda: select_hedgehog(state, 2)
        load_detail(api, state)
        assert state.detail is None
        assert state.detail_loaded_for is None

    def test_missing_record(self, api: FakeApi, state: AppState) -> None:
        select_hedgehog(state, 404)
        load_detail(api, state)
        assert state.detail is None
        assert state.detail_loaded_for == 404

    def test_server_error_shown(self, api: FakeApi, state: AppState) -> None:
        api.fail = ApiError(500, "Database error")
        select_hedgehog(state, 1)
        load_detail(api, state)
        assert state.detail_error == "Database error"


class TestValidateForm:
    def test_all_missing(self) -> None:
        errors = validate_form(FormValues(), None)
        assert set(errors) == {"name", "age", "gender", "location"}
        assert errors["location"] == LOCATION_HINT

    @pytest.mark.parametrize(
        ("age", "message"),
        [
            ("", "Lisää ikä"),
            ("abc", "Ikä täytyy olla positiivinen numero tai nolla"),
            ("-1", "Ikä täytyy olla positiivinen numero tai nolla"),
            ("16", "Ikä ei voi olla yli 15 vuotta"),
            ("nan", "Ikä täytyy olla positiivinen numero tai nolla"),
            ("3.7", "Ikä täytyy olla kokonaisluku"),
            ("0.5", "Ikä täytyy olla kokonaisluku"),
        ],
    )
    def test_age_messages(self, age: str, message: str) -> None:
        errors = validate_form(FormValues(name="Siili", age=age, gender="male"), (1.0, 2.0))
        assert errors == {"age": message}

    def test_blank_name(self) -> None:
        errors = validate_form(FormValues(name="  ", age="3", gender="male"), (1.0, 2.0))
        assert errors == {"name": "Lisää nimi"}

    def test_valid(self) -> None:
        assert validate_form(FormValues(name="Siili", age="15", gender="unknown"), (1.0, 2.0)) == {}
        assert validate_form(FormValues(name="Siili", age="3.0", gender="unknown"), (1.0, 2.0)) == {}

    def test_payload(self) -> None:
        payload = build_payload(FormValues(name="Testi Siili", age="3", gender="male"), (385000.4, 6670000.6))
        assert payload == {
            "name": "Testi Siili",
            "age": 3,
            "gender": "male",
            "location": {"type": "Point", "coordinates": [385000.4, 6670000.6]},
        }


class TestSubmitForm:
    def _fill(self, state: AppState) -> None:
        state.form = FormValues(name="Testi Siili", age="3", gender="male")
        set_coordinates(state, (385000.0, 6670000.0))

    def test_success_selects_created_without_refetch(self, api: FakeApi, state: AppState) -> None:
        self._fill(state)
        assert submit_form(api, state) is True

        assert state.submit_success
        assert state.form == FormValues()
        assert state.reset_form
        assert state.refresh_trigger == 1
        assert state.selected_id == 2
        assert state.detail["name"] == "Testi Siili"

        load_detail(api, state)
        assert [c[0] for c in api.calls] == ["create"]

    def test_invalid_does_not_submit(self, api: FakeApi, state: AppState) -> None:
        state.submitting = True
        assert submit_form(api, state) is False
        assert api.calls == []
        assert not state.submitting
        assert "location" in state.form_errors

    def test_server_message_shown(self, api: FakeApi, state: AppState) -> None:
        self._fill(state)
        api.fail = ApiError(400, "Invalid hedgehog data")
        assert submit_form(api, state) is False
        assert state.form_errors == {"location": "Invalid hedgehog data"}
        assert state.form.name == "Testi Siili"
        assert not state.submitting

    def test_network_failure(self, api: FakeApi, state: AppState) -> None:
        self._fill(state)
        api.fail = requests.ConnectionError("down")
        submit_form(api, state)
        assert state.form_errors == {"location": NETWORK_MESSAGE}

    def test_click_clears_location_error(self, state: AppState) -> None:
        state.form_errors = {"location": LOCATION_HINT, "name": "Lisää nimi"}
        set_coordinates(state, (1.0, 2.0))
        assert state.form_errors == {"name": "Lisää nimi"}


class TestMap:
    def test_features_for_selection_and_click(self, state: AppState) -> None:
        state.selected_id = 1
        state.detail = FIXTURE
        state.coordinates = (400000.0, 7000000.0)

        feats = features_for(state)

        assert [f.kind for f in feats] == [MarkerKind.STORED_SIGHTING, MarkerKind.PENDING_CLICK]
        assert feats[0].coordinates == (385000.0, 6670000.0)
        assert feats[0].properties["name"] == "Saara Siili"

    def test_stale_detail_not_drawn(self, state: AppState) -> None:
        state.selected_id = 2
        state.detail = FIXTURE
        assert features_for(state) == []

    def test_build_map_has_one_marker_per_feature(self, state: AppState) -> None:
        state.selected_id = 1
        state.detail = FIXTURE
        state.coordinates = (400000.0, 7000000.0)

        m = build_map(features_for(state))

        assert isinstance(m, folium.Map)
        groups = [c for c in m._children.values() if isinstance(c, folium.FeatureGroup)]
        assert len(groups) == 1
        markers = [c for c in groups[0]._children.values() if isinstance(c, folium.CircleMarker)]
        assert len(markers) == 2

    def test_rebuilt_map_drops_old_markers(self) -> None:
        m = build_map([])
        groups = [c for c in m._children.values() if isinstance(c, folium.FeatureGroup)]
        assert list(groups[0]._children.values()) == []

    def test_click_converted_to_etrs_tm35fin(self) -> None:
        e, n = click_coordinates({"last_clicked": {"lat": 60.17, "lng": 24.94}})
        assert 380000 < e < 400000
        assert 6660000 < n < 6690000

    def test_click_outside_finland_ignored(self) -> None:
        assert click_coordinates({"last_clicked": {"lat": 48.85, "lng": 2.35}}) is None

    @pytest.mark.parametrize("out", [None, {}, {"last_clicked": None}])
    def test_no_click(self, out) -> None:
        assert click_coordinates(out) is None
