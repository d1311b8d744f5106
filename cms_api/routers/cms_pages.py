import logging

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import Annotated, Optional

from cms_api.core.database import get_db
from cms_api.core.errors import NotFoundError
from cms_api.core.security import require_bearer_token
from cms_api.schemas.cms_page import (
    CmsPageCreate,
    CmsPageList,
    CmsPageResponse,
    CmsPageStats,
    CmsPageUpdate,
    MAX_PAGE_NUMBER,
    PAGE_ID_MAX,
    PAGE_ID_MIN,
    PaginationParams,
    STORE_ID_MAX,
    STORE_ID_MIN,
)
from cms_api.services import cms_page_service

logger = logging.getLogger(__name__)

# toutes les routes /api/cms-pages exigent le bearer token
router = APIRouter(
    prefix="/api/cms-pages",
    tags=["cms-pages"],
    dependencies=[Depends(require_bearer_token)],
)

PAGE_NOT_FOUND = "CMS page not found"

# id hors de la plage BIGINT -> 400 au lieu d'une erreur driver
PageId = Annotated[int, Path(ge=PAGE_ID_MIN, le=PAGE_ID_MAX)]


def get_pagination(
    page: int = Query(1, ge=1, le=MAX_PAGE_NUMBER),
    per_page: int = Query(15, ge=1, le=100, alias="perPage"),
    store_id: Optional[int] = Query(None, ge=STORE_ID_MIN, le=STORE_ID_MAX, alias="storeId"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
) -> PaginationParams:
    return PaginationParams(page=page, per_page=per_page, store_id=store_id, is_active=is_active)


@router.get("", response_model=CmsPageList)
def list_pages(params: PaginationParams = Depends(get_pagination), db: Session = Depends(get_db)):
    pages, meta = cms_page_service.list_pages(db, params)
    return CmsPageList(
        data=[CmsPageResponse.model_validate(p) for p in pages],
        meta=meta
    )


# déclarée avant /{page_id} sinon "stats" est pris pour un id
@router.get("/stats", response_model=CmsPageStats)
def get_stats(db: Session = Depends(get_db)):
    return cms_page_service.get_stats(db)


@router.get("/{page_id}", response_model=CmsPageResponse)
def get_page(page_id: PageId, db: Session = Depends(get_db)):
    page = cms_page_service.get_page(db, page_id)
    if page is None:
        raise NotFoundError(PAGE_NOT_FOUND)
    return page


@router.post("", response_model=CmsPageResponse, status_code=status.HTTP_201_CREATED)
def create_page(page_data: CmsPageCreate, db: Session = Depends(get_db)):
    page = cms_page_service.create_page(db, page_data)
    logger.info(f"Created CMS page {page.id} (store {page.store_id}, url_key '{page.url_key}')")
    return page


@router.put("/{page_id}", response_model=CmsPageResponse)
def update_page(page_id: PageId, page_data: CmsPageUpdate, db: Session = Depends(get_db)):
    page = cms_page_service.update_page(db, page_id, page_data)
    if page is None:
        raise NotFoundError(PAGE_NOT_FOUND)
    logger.info(f"Updated CMS page {page_id}: {sorted(page_data.changes())}")
    return page


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_page(page_id: PageId, db: Session = Depends(get_db)):
    if not cms_page_service.delete_page(db, page_id):
        raise NotFoundError(PAGE_NOT_FOUND)
    logger.info(f"Deleted CMS page {page_id}")
