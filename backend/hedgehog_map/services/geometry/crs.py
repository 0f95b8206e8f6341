# backend/hedgehog_map/services/geometry/crs.py
"""
ETRS-TM35FIN (EPSG:3067) は保存・表示とも共通の座標系。
Web 地図（Leaflet）は WGS84 で動くため、ここで相互変換する。
"""
from pyproj import CRS, Transformer

SRID = 3067

PROJECTED_CRS = CRS.from_epsg(SRID)
LONLAT_CRS = CRS.from_epsg(4326)

# [minx, miny, maxx, maxy] (EPSG:3067)
FINLAND_EXTENT = (43547.79, 6549298.62, 764796.72, 7781019.10)
MAP_CENTER = (460000.0, 7125000.0)

_to_lonlat = Transformer.from_crs(PROJECTED_CRS, LONLAT_CRS, always_xy=True)
_from_lonlat = Transformer.from_crs(LONLAT_CRS, PROJECTED_CRS, always_xy=True)


def to_lonlat(coordinates) -> tuple[float, float]:
    e, n = coordinates
    lon, lat = _to_lonlat.transform(e, n)
    return lon, lat


def from_lonlat(lon: float, lat: float) -> tuple[float, float]:
    e, n = _from_lonlat.transform(lon, lat)
    return e, n


def in_extent(coordinates, extent=FINLAND_EXTENT) -> bool:
    e, n = coordinates
    minx, miny, maxx, maxy = extent
    return minx <= e <= maxx and miny <= n <= maxy


def extent_lonlat(extent=FINLAND_EXTENT) -> tuple[float, float, float, float]:
    """Extent の四隅を WGS84 に変換し、それを包む [min_lon, min_lat, max_lon, max_lat] を返す"""
    minx, miny, maxx, maxy = extent
    corners = [to_lonlat((x, y)) for x in (minx, maxx) for y in (miny, maxy)]
    lons = [c[0] for c in corners]
    lats = [c[1] for c in corners]
    return min(lons), min(lats), max(lons), max(lats)
