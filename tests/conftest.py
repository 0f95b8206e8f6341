"""Shared fixtures: app wired to an in-memory repository."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hedgehog_map.api.routers.hedgehog import get_repository
from hedgehog_map.config import Settings
from hedgehog_map.main import create_app
from hedgehog_map.schemas.hedgehog import HedgehogIn, HedgehogOut, HedgehogSummary
from hedgehog_map.services.hedgehogs.repository import DatabaseError


class InMemoryRepository:
    """Stand-in for HedgehogRepository; ids are assigned sequentially."""

    def __init__(self) -> None:
        self.rows: dict[int, HedgehogOut] = {}
        self.next_id = 1
        self.fail_with: Optional[str] = None

    def _check(self) -> None:
        if self.fail_with:
            raise DatabaseError(self.fail_with)

    def list_hedgehogs(self) -> list[HedgehogSummary]:
        self._check()
        return [HedgehogSummary(id=h.id, name=h.name) for h in self.rows.values()]

    def get_hedgehog(self, hedgehog_id: int) -> Optional[HedgehogOut]:
        self._check()
        return self.rows.get(hedgehog_id)

    def create_hedgehog(self, payload: HedgehogIn) -> HedgehogOut:
        self._check()
        out = HedgehogOut(id=self.next_id, **payload.model_dump())
        self.rows[out.id] = out
        self.next_id += 1
        return out


@pytest.fixture
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def app(repo: InMemoryRepository) -> FastAPI:
    settings = Settings(database_url="sqlite://", init_db=False, log_level="WARNING")
    application = create_app(settings)
    application.dependency_overrides[get_repository] = lambda: repo
    return application


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    yield TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def valid_payload() -> dict:
    return {
        "name": "Testi Siili",
        "age": 3,
        "gender": "male",
        "location": {"type": "Point", "coordinates": [385000, 6670000]},
    }
