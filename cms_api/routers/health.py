import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cms_api.core.database import get_db
from cms_api.schemas.cms_page import HealthResponse
from cms_api.services.cms_page_service import count_pages

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


# pas d'auth sur le health check
@router.get("/health", response_model=HealthResponse)
def health(request: Request, db: Session = Depends(get_db)):
    now = datetime.now(timezone.utc)
    try:
        # Check que la DB répond
        count_pages(db)
    except SQLAlchemyError as e:
        logger.warning(f"Health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "timestamp": now.isoformat(),
                "error": "Database connection failed"
            }
        )

    settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        timestamp=now,
        service=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION
    )
