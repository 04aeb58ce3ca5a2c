import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pokebrowser.api import (
    browse_router,
    compare_router,
    creator_router,
    health_router,
    resources_router,
    users_router,
)
from pokebrowser.browsing import reset_session_registry
from pokebrowser.config import settings
from pokebrowser.db.database import init_db
from pokebrowser.models.failure import KnownError, create_unknown_failure, finalize_response
from pokebrowser.sources.pokeapi import close_pokeapi_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield
    reset_session_registry()
    await close_pokeapi_client()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("pokebrowser"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render a known failure through the authority boundary."""
    response = finalize_response(exc.to_response())
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unknown_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is an unknown failure; only the exception type leaks."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    response = create_unknown_failure(exc)
    return JSONResponse(status_code=500, content=response.model_dump(mode="json"))


app.include_router(creator_router)
app.include_router(resources_router)
app.include_router(browse_router)
app.include_router(compare_router)
app.include_router(users_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
