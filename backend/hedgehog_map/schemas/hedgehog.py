# backend/hedgehog_map/schemas/hedgehog.py
from pydantic import BaseModel, Field, field_validator
from typing import Any, Iterable, List

from .commons import AGE_MAX, AGE_MIN, Gender, PointGeometry


class HedgehogIn(BaseModel):
    # id はサーバ採番。入力に含まれていても無視する
    name: str = Field(min_length=1)
    age: int = Field(ge=AGE_MIN, le=AGE_MAX, strict=True)
    gender: Gender
    location: PointGeometry

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v


class HedgehogOut(HedgehogIn):
    id: int


class HedgehogSummary(BaseModel):
    id: int
    name: str


class HedgehogListOut(BaseModel):
    hedgehogs: List[HedgehogSummary]


class HedgehogDetailOut(BaseModel):
    hedgehog: HedgehogOut


class HedgehogCreatedOut(BaseModel):
    hedgehog: HedgehogOut
    message: str


def violations(errors: Iterable[dict[str, Any]]) -> list[dict[str, str]]:
    """
    pydantic のエラー一覧をフィールド単位の違反リストに変換する。
    - loc 先頭の "body" は除去
    - 同一フィールドの違反は最初の1件のみ
    """
    out: list[dict[str, str]] = []
    seen: set[str] = set()
    for err in errors:
        if err.get("type") == "json_invalid":
            # loc は文字位置なのでフィールド名にならない
            field = "body"
        else:
            loc = [str(p) for p in err.get("loc", ()) if p != "body"]
            field = ".".join(loc) or "body"
        if field in seen:
            continue
        seen.add(field)
        out.append({
            "field": field,
            "message": str(err.get("msg", "Invalid value")),
            "type": str(err.get("type", "value_error")),
        })
    return out
