# scripts/validate_crs.py
from hedgehog_map.services.geometry.crs import FINLAND_EXTENT, MAP_CENTER, PROJECTED_CRS, from_lonlat, to_lonlat

print(PROJECTED_CRS.to_epsg(), PROJECTED_CRS.name)
minx, miny, maxx, maxy = FINLAND_EXTENT
for e, n in [(minx, miny), (maxx, maxy), MAP_CENTER]:
    lon, lat = to_lonlat((e, n))
    back = from_lonlat(lon, lat)
    print(f"E {e:.2f} N {n:.2f} -> lon {lon:.6f} lat {lat:.6f} -> E {back[0]:.2f} N {back[1]:.2f}")
