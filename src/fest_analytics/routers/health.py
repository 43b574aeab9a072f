from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func
from sqlmodel import Session, select

from fest_analytics.config import config
from fest_analytics.logging_config import get_logger
from fest_analytics.models.database import get_db
from fest_analytics.models.registration import Registration

logger = get_logger(__name__)

health = APIRouter(tags=["Health"])


def _base_status() -> dict:
    return {
        "status": "healthy",
        "service": "fest-analytics",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": config["environment"],
    }


@health.get("/health")
async def health_check():
    return _base_status()


@health.get("/health/detailed")
def detailed_health_check(db: Session = Depends(get_db)):
    """
    Database connectivity plus export capacity.

    ``exports`` turns "degraded" once the registrations table outgrows the
    snapshot row cap, since every report built after that is partial.
    """
    body = _base_status()
    checks = body["checks"] = {}

    try:
        total = db.exec(select(func.count()).select_from(Registration)).one()
    except Exception as e:
        logger.error(f"Health check could not query registrations: {e}")
        checks["database"] = f"unhealthy: {e}"
        body["status"] = "unhealthy"
        return JSONResponse(status_code=503, content=body)

    checks["database"] = "healthy"
    max_rows = config["export_max_rows"]
    checks["registrations"] = total
    checks["exports"] = "healthy" if total <= max_rows else "degraded"
    if total > max_rows:
        logger.warning(f"{total} registrations exceed the export cap of {max_rows}")
        body["status"] = "degraded"
    return body
