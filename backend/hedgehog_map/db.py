# backend/hedgehog_map/db.py
from __future__ import annotations

import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

# モデル定義側の Base（hedgehog_map.models.base）を利用してメタデータを統一
from hedgehog_map.models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Engine + session factory, built once at startup and held by the app."""

    def __init__(self, url: str, engine: Engine | None = None):
        self.url = url
        _is_sqlite = url.startswith("sqlite")
        _connect_args = {"check_same_thread": False} if _is_sqlite else {}
        self.engine = engine or create_engine(
            url,
            connect_args=_connect_args,
            pool_pre_ping=not _is_sqlite,
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_db(self) -> None:
        # モデルモジュールを明示 import してメタデータ登録を確実化
        import hedgehog_map.models.hedgehog  # noqa: F401

        with self.engine.begin() as conn:
            conn.execute(text("CREATE EXTENSION IF NOT EXISTS postgis"))
        Base.metadata.create_all(bind=self.engine)
        logger.info("database schema ready")

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
