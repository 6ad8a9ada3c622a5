import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from commanders_vault.api import (
    assistant_router,
    auth_router,
    collection_router,
    decks_router,
    health_router,
    shell_router,
)
from commanders_vault.config import get_settings
from commanders_vault.db.database import dispose_db, init_db
from commanders_vault.logging_config import configure_logging
from commanders_vault.models.failure import KnownError

logger = logging.getLogger(__name__)

try:
    __version__ = pkg_version("commanders-vault")
except PackageNotFoundError:
    __version__ = "0.0.0"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Missing Supabase settings raise ConfigurationError here and abort startup
    settings = get_settings()
    configure_logging(settings)

    if settings.database_url:
        await init_db()
    logger.info("startup", extra={"direct_database": bool(settings.database_url)})
    yield
    if settings.database_url:
        await dispose_db()


app = FastAPI(
    title="Commander's Vault",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render every known failure in the ApiResponse envelope."""
    if exc.status_code >= 500:
        logger.warning("request_failed", extra={"kind": exc.kind.value, "error": exc.message})
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


app.include_router(auth_router)
app.include_router(shell_router)
app.include_router(collection_router)
app.include_router(decks_router)
app.include_router(assistant_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
