# backend/hedgehog_map/models/hedgehog.py
from geoalchemy2 import Geometry
from sqlalchemy import Column, Integer, String, Text

from hedgehog_map.services.geometry.crs import SRID
from .base import Base


class Hedgehog(Base):
    __tablename__ = "hedgehog"
    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(16), nullable=False)  # female|male|unknown
    # ETRS-TM35FIN（EPSG:3067）の点。GeoJSON との変換は services/geometry/codec
    location = Column(Geometry(geometry_type="POINT", srid=SRID, spatial_index=False), nullable=False)
