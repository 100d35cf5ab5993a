"""
FastAPI app assembly: logging and dependency wiring.

Marketplace routes are mounted by the service that embeds this layer; only the
health probe lives here.
"""
import logging
import os
from fastapi import FastAPI, Depends, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from skillbridge.db.database import get_db  # noqa: E402

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="SkillBridge Marketplace Service",
    description="Persistence layer for clients, projects and freelancer proposals.",
    version="1.0.0",
)


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("health_check_failed: %s", exc)
        return JSONResponse(
            {"status": "degraded", "service": "skillbridge-service", "database": "unreachable"},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return {"status": "ok", "service": "skillbridge-service", "database": "ok"}
