"""
Dependency injection for the Supabase store, the OMDb session, and error mapping.
"""
from __future__ import annotations

import logging
import threading
from typing import Annotated

import requests
from fastapi import Depends, HTTPException
from supabase import Client

from movie_reviews.db.supabase import StoreNotConfiguredError, create_supabase_admin_client
from movie_reviews.integrations.omdb.client import OmdbClientError, OmdbNotFoundError
from movie_reviews.models.movies import InvalidMovieRequestError
from movie_reviews.repositories.movies import MovieRepositoryError
from movie_reviews.utils.env import load_env

load_env()

logger = logging.getLogger(__name__)


# --- Process-wide store handle ---

_store: Client | None = None
_omdb_session: requests.Session | None = None
_omdb_session_lock = threading.Lock()


def init_store() -> Client | None:
    """
    Connect the shared Supabase client and open the shared OMDb session.
    Called once from the app lifespan.

    Missing configuration is logged, not raised: the app keeps serving and
    store-backed routes answer 500 until the environment is fixed.
    """
    global _store
    _open_omdb_session()
    try:
        _store = create_supabase_admin_client()
    except StoreNotConfiguredError as e:
        logger.error(f"Could not connect to Supabase: {e}")
        _store = None
        return None
    logger.info("Connected to Supabase")
    return _store


def shutdown_store() -> None:
    global _store, _omdb_session
    with _omdb_session_lock:
        if _omdb_session is not None:
            _omdb_session.close()
            _omdb_session = None
    if _store is not None:
        _store = None
        logger.info("Supabase client released")


def _open_omdb_session() -> requests.Session:
    global _omdb_session
    with _omdb_session_lock:
        if _omdb_session is None:
            _omdb_session = requests.Session()
        return _omdb_session


def get_store() -> Client:
    if _store is None:
        raise HTTPException(status_code=500, detail="Database is not configured")
    return _store


def get_omdb_session() -> requests.Session:
    session = _omdb_session
    if session is not None:
        return session
    # Only reached when the lifespan did not run (e.g. the app is mounted without it).
    return _open_omdb_session()


# Type aliases for dependency injection
StoreClient = Annotated[Client, Depends(get_store)]
OmdbSession = Annotated[requests.Session, Depends(get_omdb_session)]


def to_http_exception(exc: Exception, context: str = "request") -> HTTPException:
    """
    Map a domain exception onto the HTTP error it should surface as.

    400 for bad caller input, 404 for OMDb misses, 500 for everything else.
    """
    if isinstance(exc, InvalidMovieRequestError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, OmdbNotFoundError):
        return HTTPException(status_code=404, detail="Movie not found")
    if isinstance(exc, (OmdbClientError, MovieRepositoryError)):
        logger.error(f"Downstream error during {context}: {exc}")
        return HTTPException(status_code=500, detail=str(exc))
    logger.error(f"Unexpected error during {context}: {exc}")
    return HTTPException(status_code=500, detail=str(exc) or "Internal server error")


def require_movie(row: dict | None) -> dict:
    if not row:
        raise HTTPException(status_code=404, detail="Movie not found")
    return row
