"""
map_view.py — Finland basemap with hedgehog markers

The map works in WGS84 (Leaflet); everything handed in or out of this module
is ETRS-TM35FIN (EPSG:3067). The marker layer is rebuilt from the feature list
on every render, so no stale marker survives a feature-list change.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import folium
from streamlit_folium import st_folium

from hedgehog_map.services.geometry.crs import MAP_CENTER, extent_lonlat, from_lonlat, in_extent, to_lonlat
from hedgehog_ui.state import AppState

INITIAL_ZOOM = 5
MIN_ZOOM = 5
MAX_ZOOM = 18


class MarkerKind(Enum):
    STORED_SIGHTING = "stored_sighting"
    PENDING_CLICK = "pending_click"


MARKER_STYLES: dict[MarkerKind, dict[str, Any]] = {
    MarkerKind.STORED_SIGHTING: {"radius": 7, "color": "darkblue", "fill_color": "#00B2A0", "weight": 3},
    MarkerKind.PENDING_CLICK: {"radius": 6, "color": "#B23A00", "fill_color": "#FFD166", "weight": 2, "dash_array": "4"},
}


@dataclass(frozen=True)
class MapFeature:
    kind: MarkerKind
    coordinates: tuple[float, float]  # EPSG:3067
    properties: dict[str, Any] = field(default_factory=dict)


def features_for(state: AppState) -> list[MapFeature]:
    feats: list[MapFeature] = []
    h = state.detail
    if h and h.get("id") == state.selected_id:
        e, n = h["location"]["coordinates"]
        feats.append(MapFeature(
            MarkerKind.STORED_SIGHTING,
            (e, n),
            {"id": h["id"], "name": h["name"], "age": h["age"], "gender": h["gender"]},
        ))
    if state.coordinates:
        feats.append(MapFeature(MarkerKind.PENDING_CLICK, state.coordinates))
    return feats


def build_map(features: list[MapFeature]) -> folium.Map:
    min_lon, min_lat, max_lon, max_lat = extent_lonlat()
    center_lon, center_lat = to_lonlat(MAP_CENTER)
    m = folium.Map(
        location=[center_lat, center_lon],
        zoom_start=INITIAL_ZOOM,
        min_zoom=MIN_ZOOM,
        max_zoom=MAX_ZOOM,
        max_bounds=True,
        min_lat=min_lat,
        max_lat=max_lat,
        min_lon=min_lon,
        max_lon=max_lon,
        tiles="OpenStreetMap",
        control_scale=True,
    )

    layer = folium.FeatureGroup(name="hedgehogs")
    for f in features:
        lon, lat = to_lonlat(f.coordinates)
        style = MARKER_STYLES[f.kind]
        folium.CircleMarker(
            location=[lat, lon],
            fill=True,
            fill_opacity=1.0,
            tooltip=f.properties.get("name"),
            **style,
        ).add_to(layer)
    layer.add_to(m)
    return m


def click_coordinates(map_state: Optional[dict[str, Any]]) -> Optional[tuple[float, float]]:
    """st_folium の last_clicked（lat/lng）を EPSG:3067 に変換。範囲外は None"""
    if not map_state:
        return None
    clicked = map_state.get("last_clicked")
    if not clicked:
        return None
    coords = from_lonlat(clicked["lng"], clicked["lat"])
    # 表示範囲外のクリックは無視
    return coords if in_extent(coords) else None


def render_map(state: AppState) -> Optional[tuple[float, float]]:
    """Draw the map; return a new click coordinate, if any."""
    out = st_folium(
        build_map(features_for(state)),
        key="map",
        height=640,
        use_container_width=True,
        returned_objects=["last_clicked"],
    )
    coords = click_coordinates(out)
    if coords is None or coords == state.coordinates:
        return None
    return coords
