"""CMS page model"""

from sqlalchemy import Column, Integer, BigInteger, String, Text, DateTime, Boolean, Index, UniqueConstraint
from datetime import datetime, timezone
from cms_api.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CmsPage(Base):
    __tablename__ = "cms_pages"
    __table_args__ = (
        Index("idx_store_active", "store_id", "is_active"),
        UniqueConstraint("store_id", "url_key", name="idx_store_url"),
        Index("idx_created_at", "created_at"),
        Index("idx_title", "title"),
    )

    # BigInteger sur Postgres, INTEGER sur SQLite pour garder l'autoincrement
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    store_id = Column(Integer, nullable=False)

    title = Column(Text, nullable=False)
    layout = Column(String, nullable=True, default="1column")
    url_key = Column(Text, nullable=False)
    content = Column(Text, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
