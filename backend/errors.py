import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from utils.scope import ScopeError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI):
    @app.exception_handler(ScopeError)
    async def scope_error(request: Request, exc: ScopeError):
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(OperationalError)
    async def database_unavailable(request: Request, exc: OperationalError):
        # Connection-level failures are worth retrying, unlike bad input
        logger.error(f"Database unavailable while serving {request.url.path}: {exc}")
        return JSONResponse(
            status_code=503,
            content={"detail": "Database temporarily unavailable, please retry", "retryable": True},
        )
