import logging
import re
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from cms_api.core.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def mask_database_url(url: str) -> str:
    """Remplace le mot de passe de l'URL par ****"""
    return re.sub(r":[^:@/]+@", ":****@", url)


def build_engine(settings: Settings, url: Optional[str] = None) -> Engine:
    """Crée le pool de connexions à partir de la config"""
    url = url or settings.DATABASE_URL
    logger.info("Connecting to database: %s", mask_database_url(url))

    if url.startswith("sqlite"):
        # SQLite (tests / dev local) : pas de pool a configurer
        return create_engine(url, connect_args={"check_same_thread": False}, echo=False)

    return create_engine(
        url,
        echo=False,
        pool_size=settings.DB_MAX_CONNECTIONS,
        max_overflow=0,
        pool_timeout=settings.DB_CONNECTION_TIMEOUT / 1000,
        pool_recycle=max(1, settings.DB_IDLE_TIMEOUT // 1000),
        pool_pre_ping=True,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    # importe les modèles pour les enregistrer sur Base.metadata
    from cms_api.models import cms_page  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """Dépendance sessionDB (factory posée sur app.state par create_app)"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
