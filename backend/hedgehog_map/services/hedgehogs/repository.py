# backend/hedgehog_map/services/hedgehogs/repository.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hedgehog_map.models.hedgehog import Hedgehog
from hedgehog_map.schemas.hedgehog import HedgehogIn, HedgehogOut, HedgehogSummary
from hedgehog_map.services.geometry.codec import decode_point, encode_point

logger = logging.getLogger(__name__)

# PostgreSQL integer (int4)
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1


class DatabaseError(Exception):
    """Any storage-layer failure, carrying the original message."""

    def __init__(self, message: str):
        super().__init__(f"Database error: {message}")
        self.original = message


def _to_out(obj: Hedgehog) -> HedgehogOut:
    return HedgehogOut(
        id=obj.id,
        name=obj.name,
        age=obj.age,
        gender=obj.gender,
        location=decode_point(obj.location),
    )


class HedgehogRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_hedgehogs(self) -> list[HedgehogSummary]:
        try:
            rows = self.db.query(Hedgehog.id, Hedgehog.name).order_by(Hedgehog.id.asc()).all()
        except SQLAlchemyError as exc:
            logger.exception("Failed to retrieve hedgehogs list")
            raise DatabaseError(str(exc)) from exc
        return [HedgehogSummary(id=r.id, name=r.name) for r in rows]

    def get_hedgehog(self, hedgehog_id: int) -> Optional[HedgehogOut]:
        # 範囲外の id は採番され得ないので問い合わせずに None
        if not ID_MIN <= hedgehog_id <= ID_MAX:
            return None
        try:
            obj = self.db.get(Hedgehog, hedgehog_id)
        except SQLAlchemyError as exc:
            logger.exception("Failed to retrieve hedgehog with ID %s", hedgehog_id)
            raise DatabaseError(str(exc)) from exc
        # 該当なしはエラーではなく None
        if obj is None:
            return None
        return _to_out(obj)

    def create_hedgehog(self, payload: HedgehogIn) -> HedgehogOut:
        obj = Hedgehog(
            name=payload.name,
            age=payload.age,
            gender=payload.gender,
            location=encode_point(payload.location),
        )
        try:
            self.db.add(obj)
            self.db.commit()  # id 採番
            self.db.refresh(obj)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to create hedgehog")
            raise DatabaseError(str(exc)) from exc
        logger.info("created hedgehog id=%s", obj.id)
        return _to_out(obj)
