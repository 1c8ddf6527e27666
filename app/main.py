import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request

from app.core.config import settings
from app.core.database.db import engine
from app.core.database.base import Base
from app.core.errors import register_exception_handlers

# Routers
from content.routers import contents_router, images_router, reviews_router
from users.routers import auth_router, users_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: dev-friendly table creation (migrations/ holds the Alembic schema for prod)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s started", settings.app_name)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    debug=settings.debug,
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

register_exception_handlers(app)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s - %s - %.3fs",
        request.method, request.url.path, response.status_code, time.perf_counter() - start,
    )
    return response


@app.get("/health", tags=["system"])
async def health():
    return {"status": "ok"}


# Users / Auth
app.include_router(auth_router)
app.include_router(users_router)

# Content (fixed paths such as /image before the /{path} routes)
app.include_router(images_router)
app.include_router(reviews_router)
app.include_router(contents_router)
