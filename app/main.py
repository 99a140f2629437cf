from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings
from app.db import init_db
from app.errors import ApiError, FieldError, InternalError, ValidationError
from app.logging_config import configure_logging
from app.routes.auth import router as auth_router
from app.routes.health import router as health_router
from app.routes.orgs import router as orgs_router
from app.routes.users import router as users_router

log = structlog.get_logger()

_LOCATIONS = {"body", "query", "path", "header"}

@asynccontextmanager
async def lifespan(app: FastAPI):
    # an unreachable database aborts startup
    init_db()
    log.info("app.started", env=settings.app_env)
    yield
    log.info("app.stopped")

async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())

async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if str(p) not in _LOCATIONS]
        field = loc[-1] if loc and not loc[-1].isdigit() else "body"
        errors.append(FieldError(field=field, message=err.get("msg", "invalid value")))
    return await handle_api_error(request, ValidationError(errors))

async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    log.error("request.failed", path=request.url.path, error=exc.__class__.__name__)
    return await handle_api_error(request, InternalError())

def create_app() -> FastAPI:
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(title="org-accounts-api", version="0.1.0", lifespan=lifespan)
    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(orgs_router)
    return app

app = create_app()
