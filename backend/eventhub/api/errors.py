"""
Error shaping: every failure leaves the API as ``{"error": "<message>"}``.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventhub.core.metrics import record_auth_attempt
from eventhub.core.logging import get_logger

logger = get_logger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    logger.info("request_validation_failed", error=message, count=len(errors))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


@asynccontextmanager
async def generic_failure(
    db: AsyncSession,
    message: str,
    action: str,
    log_traceback: bool = False,
):
    """
    Turn anything other than an HTTPException raised inside the block into a
    400 carrying ``message``. The session is rolled back first.
    """
    try:
        yield
    except HTTPException:
        raise
    except Exception:
        await db.rollback()
        record_auth_attempt(action, "error")
        if log_traceback:
            logger.exception(f"{action}_error")
        else:
            logger.warning(f"{action}_error")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
