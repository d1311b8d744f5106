"""CMS page storage: CRUD + pagination sur la table cms_pages"""

import logging
import math
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cms_api.core.errors import ConflictError
from cms_api.models.cms_page import CmsPage, utcnow
from cms_api.schemas.cms_page import (
    CmsPageCreate,
    CmsPageStats,
    CmsPageUpdate,
    PaginationMeta,
    PaginationParams,
)

logger = logging.getLogger(__name__)

DUPLICATE_URL_KEY = "A page with this URL key already exists for this store"


def _commit(db: Session) -> None:
    # la contrainte idx_store_url reste le dernier rempart (inserts concurrents)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Unique constraint violation on cms_pages: {exc.orig}")
        raise ConflictError(DUPLICATE_URL_KEY) from exc


def get_page(db: Session, page_id: int) -> Optional[CmsPage]:
    return db.query(CmsPage).filter(CmsPage.id == page_id).first()


def get_page_by_store_and_url(db: Session, store_id: int, url_key: str) -> Optional[CmsPage]:
    return db.query(CmsPage).filter(
        CmsPage.store_id == store_id,
        CmsPage.url_key == url_key
    ).first()


def create_page(db: Session, data: CmsPageCreate) -> CmsPage:
    if get_page_by_store_and_url(db, data.store_id, data.url_key) is not None:
        logger.warning(f"Duplicate url_key '{data.url_key}' for store {data.store_id}")
        raise ConflictError(DUPLICATE_URL_KEY)

    page = CmsPage(**data.model_dump())
    db.add(page)
    _commit(db)
    db.refresh(page)
    return page


def update_page(db: Session, page_id: int, data: CmsPageUpdate) -> Optional[CmsPage]:
    """
    Maj partielle. Retourne None si la page n'existe pas.
    Si store_id ou url_key change, on revérifie l'unicité (en s'excluant soi-même).
    """
    page = get_page(db, page_id)
    if page is None:
        return None

    changes = data.changes()
    store_id = changes.get("store_id", page.store_id)
    url_key = changes.get("url_key", page.url_key)
    if (store_id, url_key) != (page.store_id, page.url_key):
        conflicting = get_page_by_store_and_url(db, store_id, url_key)
        if conflicting is not None and conflicting.id != page.id:
            logger.warning(f"Duplicate url_key '{url_key}' for store {store_id} (page {page_id})")
            raise ConflictError(DUPLICATE_URL_KEY)

    for field, value in changes.items():
        setattr(page, field, value)
    # onupdate ne se déclenche pas si aucun champ ne change
    page.updated_at = utcnow()

    _commit(db)
    db.refresh(page)
    return page


def delete_page(db: Session, page_id: int) -> bool:
    deleted = db.query(CmsPage).filter(CmsPage.id == page_id).delete()
    db.commit()
    return deleted > 0


def list_pages(db: Session, params: PaginationParams) -> Tuple[List[CmsPage], PaginationMeta]:
    query = db.query(CmsPage)
    if params.store_id is not None:
        query = query.filter(CmsPage.store_id == params.store_id)
    if params.is_active is not None:
        query = query.filter(CmsPage.is_active == params.is_active)

    # total d'abord (indépendant de la pagination), puis la page demandée
    total = query.count()
    pages = query.order_by(
        CmsPage.created_at.desc(),
        CmsPage.id.desc()
    ).offset(params.offset).limit(params.per_page).all()

    meta = PaginationMeta(
        current_page=params.page,
        per_page=params.per_page,
        total=total,
        last_page=math.ceil(total / params.per_page),
    )
    return pages, meta


def count_pages(db: Session, is_active: Optional[bool] = None) -> int:
    query = db.query(CmsPage)
    if is_active is not None:
        query = query.filter(CmsPage.is_active == is_active)
    return query.count()


def get_stats(db: Session) -> CmsPageStats:
    total = count_pages(db)
    active = count_pages(db, is_active=True)
    return CmsPageStats(
        total_pages=total,
        active_pages=active,
        inactive_pages=total - active,
    )
