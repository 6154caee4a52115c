"""
Movie Reviews API - FastAPI application.

Provides endpoints for:
- Importing movies from OMDb by IMDb id or title, with a personal score and review
- Listing, fetching, patching and deleting stored movies
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.deps import init_store, shutdown_store
from api.routers import movies, reviews
from movie_reviews.utils.env import env_str

logger = logging.getLogger(__name__)

DEFAULT_PORT = 4000


def get_cors_origins() -> list[str]:
    """
    Get CORS allowed origins from environment.
    Set CORS_ALLOW_ORIGINS as comma-separated list of origins.
    Example: CORS_ALLOW_ORIGINS=https://movies.example.com,http://localhost:3000
    """
    origins_str = env_str("CORS_ALLOW_ORIGINS", "")
    if not origins_str:
        return []
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


def get_port() -> int:
    raw = env_str("PORT", "")
    if raw.isdigit():
        return int(raw)
    return DEFAULT_PORT


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    logger.info("Starting up Movie Reviews API...")
    init_store()
    yield
    # Shutdown
    logger.info("Shutting down Movie Reviews API...")
    shutdown_store()


app = FastAPI(
    title="Movie Reviews API",
    description="Stores OMDb movie metadata together with personal scores and reviews",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration
# If no origins configured, allows all origins but disables credentials
cors_origins = get_cors_origins()
allow_credentials = len(cors_origins) > 0

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if cors_origins else ["*"],
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0].get("msg") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"message": f"Invalid request body: {first}"})


# Include routers
app.include_router(movies.router, prefix="/api")
app.include_router(reviews.router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "movie-reviews"}


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("api.main:app", host="0.0.0.0", port=get_port())
