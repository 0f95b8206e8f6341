# backend/hedgehog_map/api/routers/hedgehog.py
import re

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hedgehog_map.api.errors import BadRequest, NotFound
from hedgehog_map.db import get_db
from hedgehog_map.schemas.hedgehog import (
    HedgehogCreatedOut,
    HedgehogDetailOut,
    HedgehogIn,
    HedgehogListOut,
)
from hedgehog_map.services.hedgehogs.repository import HedgehogRepository

router = APIRouter()

_ID_RE = re.compile(r"-?[0-9]+")


def get_repository(db: Session = Depends(get_db)) -> HedgehogRepository:
    return HedgehogRepository(db)


def parse_id(raw: str) -> int:
    # 数字のみ許可（int() は "_" や前後の空白も受け付けるため）
    if not _ID_RE.fullmatch(raw):
        raise BadRequest("ID must be a number")
    return int(raw)


@router.get("")
@router.get("/")
def list_hedgehogs(repo: HedgehogRepository = Depends(get_repository)) -> HedgehogListOut:
    return HedgehogListOut(hedgehogs=repo.list_hedgehogs())


@router.get("/{hedgehog_id}")
def get_hedgehog(hedgehog_id: str, repo: HedgehogRepository = Depends(get_repository)) -> HedgehogDetailOut:
    # id は文字列で受けて自前で数値化（不正値は 400）
    the_id = parse_id(hedgehog_id)
    h = repo.get_hedgehog(the_id)
    if h is None:
        raise NotFound(f"Hedgehog with ID {the_id} not found")
    return HedgehogDetailOut(hedgehog=h)


@router.post("", status_code=201)
@router.post("/", status_code=201)
def create_hedgehog(payload: HedgehogIn, repo: HedgehogRepository = Depends(get_repository)) -> HedgehogCreatedOut:
    created = repo.create_hedgehog(payload)
    return HedgehogCreatedOut(hedgehog=created, message="Hedgehog created successfully")
