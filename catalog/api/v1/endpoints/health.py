"""
Health checks - for load balancers, Kubernetes, and monitoring.
Liveness never touches the database; readiness runs a trivial query.
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def health(request: Request):
    """Liveness: is the process up?"""
    return {"status": "ok", "app": request.app.title}


@router.get("/ready")
async def ready(request: Request):
    """Readiness: is the database reachable?"""
    try:
        async with request.app.state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("readiness check failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "detail": "database unreachable"},
        )
    return {"status": "ready"}
