# backend/hedgehog_map/schemas/commons.py
from pydantic import BaseModel, Field
from typing import Annotated, List, Literal

Gender = Literal["female", "male", "unknown"]
GENDERS: tuple[str, ...] = ("female", "male", "unknown")

AGE_MIN = 0
AGE_MAX = 15

Coordinate = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class PointGeometry(BaseModel):
    """Boundary geometry: {"type": "Point", "coordinates": [easting, northing]} (EPSG:3067)"""
    type: Literal["Point"]
    coordinates: List[Coordinate] = Field(min_length=2, max_length=2)
