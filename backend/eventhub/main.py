"""
EventHub API.

Mounts the ``/api/v1`` routers (auth, events) and the operational
endpoints: ``/health`` reports database and cache reachability and
``/metrics`` exposes the Prometheus counters. Errors everywhere are shaped
as ``{"error": ...}`` by ``eventhub.api.errors``.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from eventhub.api.errors import register_exception_handlers
from eventhub.api.middleware import RequestLoggingMiddleware
from eventhub.api.router import api_router
from eventhub.core.config import get_settings
from eventhub.core.logging import get_logger, setup_logging
from eventhub.core.metrics import metrics_endpoint
from eventhub.db.session import engine
from eventhub.services.cache_service import close_redis, get_cache_stats, get_redis

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(
        "eventhub_starting",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        cache_enabled=settings.REDIS_ENABLED,
    )

    # Event lists are served uncached when Redis is missing
    if settings.REDIS_ENABLED and await get_redis() is None:
        logger.warning("event_list_cache_offline")

    yield

    await close_redis()
    await engine.dispose()
    logger.info("eventhub_stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Events with organizers, attendees and guest accounts",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)
app.include_router(api_router)


async def database_status() -> str:
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("database_unreachable", error=str(e))
        return "unavailable"
    return "ok"


@app.get("/health", tags=["Health"])
async def health_check():
    database = await database_status()
    return {
        "status": "healthy" if database == "ok" else "degraded",
        "version": settings.APP_VERSION,
        "database": database,
        "cache": await get_cache_stats(),
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"], include_in_schema=False)
async def root():
    return {"name": settings.APP_NAME, "api": api_router.prefix, "docs": "/docs"}
