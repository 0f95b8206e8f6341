# backend/hedgehog_map/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hedgehog_map.api.errors import register_error_handlers
from hedgehog_map.api.routers import hedgehog
from hedgehog_map.config import Settings
from hedgehog_map.db import Database

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Hedgehog Map API", version="0.1.0")
    app.state.settings = settings
    # DB ハンドルは起動時に1度だけ生成し、リクエストには get_db 経由で渡す
    app.state.database = database or Database(settings.database_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    prefix = settings.api_prefix

    @app.get(f"{prefix}/health")
    def health():
        return {"ok": True}

    # 初回起動時に DB スキーマを作成
    @app.on_event("startup")
    def on_startup():
        if settings.init_db:
            app.state.database.init_db()
        logger.info("hedgehog API ready (prefix=%r)", prefix or "/")

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.database.dispose()

    app.include_router(hedgehog.router, prefix=f"{prefix}/hedgehog", tags=["hedgehog"])
    return app


app = create_app()
