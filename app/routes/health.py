import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.db import db_ping
from app.redis_client import redis_ping

log = structlog.get_logger()

router = APIRouter(tags=["health"])

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

# 503 until both storage and the rate-limit store answer
@router.get("/ready")
def ready() -> JSONResponse:
    checks = {"db": db_ping(), "redis": redis_ping()}
    ok = all(checks.values())
    if not ok:
        log.warning("ready.failed", down=[name for name, up in checks.items() if not up])
    return JSONResponse(
        status_code=200 if ok else 503,
        content={"status": "ok" if ok else "unready", "checks": checks},
    )
