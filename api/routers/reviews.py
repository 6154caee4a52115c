"""
Review endpoints.

Same import workflow as `/movies/by-id` and `/movies/by-title`, but these
answer 201 Created.
"""
from __future__ import annotations

from fastapi import APIRouter, status

from api.deps import OmdbSession, StoreClient
from api.routers.movies import (
    Movie,
    MovieByIdRequest,
    MovieByTitleRequest,
    import_movie_by_id,
    import_movie_by_title,
)

router = APIRouter(prefix="/review", tags=["reviews"])


@router.post("/by-id", response_model=Movie, status_code=status.HTTP_201_CREATED)
def post_review_by_id(db: StoreClient, session: OmdbSession, body: MovieByIdRequest) -> dict:
    """Review a movie identified by IMDb id."""
    return import_movie_by_id(db, session, body)


@router.post("/by-title", response_model=Movie, status_code=status.HTTP_201_CREATED)
def post_review_by_title(db: StoreClient, session: OmdbSession, body: MovieByTitleRequest) -> dict:
    """Review a movie identified by title and optional year."""
    return import_movie_by_title(db, session, body)
