# backend/hedgehog_map/services/geometry/codec.py
from geoalchemy2.elements import WKBElement
from geoalchemy2.shape import from_shape, to_shape
from shapely.geometry import Point, mapping

from hedgehog_map.schemas.commons import PointGeometry
from .crs import SRID


def encode_point(location: PointGeometry) -> WKBElement:
    x, y = location.coordinates
    return from_shape(Point(x, y), srid=SRID)


def decode_point(element: WKBElement) -> PointGeometry:
    geom = to_shape(element)
    # 許可する形状は Point のみ
    if geom.geom_type != "Point":
        raise ValueError(f"expected Point geometry, got {geom.geom_type}")
    gj = mapping(geom)
    return PointGeometry(type="Point", coordinates=[float(c) for c in gj["coordinates"][:2]])
