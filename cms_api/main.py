import logging
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.engine import Engine

from cms_api.core.config import Settings, settings as default_settings
from cms_api.core.database import build_engine, build_session_factory, init_db
from cms_api.core.errors import register_exception_handlers
from cms_api.routers import cms_pages, health


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Construit l'app avec son pool de connexions (passé explicitement, pas de global)"""
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )

    engine = engine or build_engine(settings)
    # Init DB
    init_db(engine)

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    register_exception_handlers(app)

    # Routes
    app.include_router(health.router)
    app.include_router(cms_pages.router)
    return app
