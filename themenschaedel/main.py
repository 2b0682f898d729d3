"""FastAPI application shell.

Exposes health endpoints and turns domain errors raised inside request
handlers into JSON responses.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from themenschaedel import __version__
from themenschaedel.core.config import get_config
from themenschaedel.core.container import container
from themenschaedel.core.database import check_db_connection, close_db, init_db
from themenschaedel.core.exceptions import ClaimError, RecordNotFoundError
from themenschaedel.core.logging import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

# HTTP status per claim error code; unknown codes map to 400
CLAIM_ERROR_STATUS = {
    "ALREADY_CLAIMED": status.HTTP_409_CONFLICT,
    "NOT_YOUR_CLAIM": status.HTTP_409_CONFLICT,
    "NOT_AUTHORIZED": status.HTTP_403_FORBIDDEN,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the schema in development and release the engine on shutdown.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    config = get_config()
    engine = container.infrastructure.db_engine()
    logger.info("Starting Themenschaedel", env=config.app_env)

    if config.is_development:
        if await check_db_connection(engine):
            await init_db(engine)
        else:
            logger.warning("Database not reachable, schema not created")

    yield

    await close_db(engine)
    await container.infrastructure.redis_client().aclose()
    logger.info("Themenschaedel stopped")


async def claim_error_handler(request: Request, exc: ClaimError) -> JSONResponse:
    """Render a rejected claim transition."""
    logger.info("Claim request rejected", path=request.url.path, **exc.context)
    return JSONResponse(
        status_code=CLAIM_ERROR_STATUS.get(exc.error_code, status.HTTP_400_BAD_REQUEST),
        content=exc.to_dict(),
    )


async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    """Render a failed lookup."""
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=exc.to_dict())


_config = get_config()
app = FastAPI(
    title=_config.app_name,
    description="Podcast companion backend: episodes, topics, votes and claims",
    version=__version__,
    docs_url="/docs" if _config.is_development else None,
    redoc_url="/redoc" if _config.is_development else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_config.cors_origins,
    allow_credentials=_config.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(ClaimError, claim_error_handler)
app.add_exception_handler(RecordNotFoundError, not_found_handler)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Report liveness together with app name and environment."""
    return {
        "status": "healthy",
        "app": _config.app_name,
        "env": _config.app_env,
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Describe the API."""
    return {
        "message": "Themenschaedel API",
        "version": __version__,
        "docs": "/docs" if _config.is_development else "disabled",
    }
