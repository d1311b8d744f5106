from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, List, Mapping, Optional

from cms_api.core.errors import ValidationFailedError, format_validation_errors

# bornes des colonnes: store_id INTEGER (int4), id BIGINT (int8)
STORE_ID_MIN = -2**31
STORE_ID_MAX = 2**31 - 1
PAGE_ID_MIN = -2**63
PAGE_ID_MAX = 2**63 - 1
MAX_PAGE_NUMBER = 2**31 - 1

# Schemas pour les pages CMS (JSON en camelCase, attributs en snake_case)

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CmsPageCreate(CamelModel):
    store_id: int = Field(ge=STORE_ID_MIN, le=STORE_ID_MAX)
    title: str = Field(min_length=1)
    layout: Optional[str] = "1column"
    url_key: str = Field(min_length=1)
    content: Optional[str] = None
    is_active: bool = True


class CmsPageUpdate(CamelModel):
    store_id: Optional[int] = Field(default=None, ge=STORE_ID_MIN, le=STORE_ID_MAX)
    title: Optional[str] = Field(default=None, min_length=1)
    layout: Optional[str] = None
    url_key: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        # null accepté seulement pour les colonnes nullables (layout, content)
        for name in ("store_id", "title", "url_key", "is_active"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Champs réellement envoyés par le client"""
        return self.model_dump(exclude_unset=True)


class CmsPageResponse(CamelModel):
    id: int
    store_id: int
    title: str
    layout: Optional[str]
    url_key: str
    content: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class PaginationParams(CamelModel):
    page: int = Field(default=1, ge=1, le=MAX_PAGE_NUMBER)
    per_page: int = Field(default=15, ge=1, le=100)
    store_id: Optional[int] = Field(default=None, ge=STORE_ID_MIN, le=STORE_ID_MAX)
    is_active: Optional[bool] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


class PaginationMeta(CamelModel):
    current_page: int
    per_page: int
    total: int
    last_page: int


class CmsPageList(BaseModel):
    data: List[CmsPageResponse]
    meta: PaginationMeta


class CmsPageStats(CamelModel):
    total_pages: int
    active_pages: int
    inactive_pages: int


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    service: str
    version: str


def _validate(model: type[BaseModel], payload: Mapping[str, Any], message: str):
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        raise ValidationFailedError(message, details=format_validation_errors(exc.errors())) from exc


def validate_page_create(payload: Mapping[str, Any]) -> CmsPageCreate:
    return _validate(CmsPageCreate, payload, "Invalid request data")


def validate_page_update(payload: Mapping[str, Any]) -> CmsPageUpdate:
    return _validate(CmsPageUpdate, payload, "Invalid request data")


def validate_pagination(params: Mapping[str, Any]) -> PaginationParams:
    return _validate(PaginationParams, params, "Invalid query parameters")
