"""
Movie endpoints: import from OMDb with a score/review, then list, fetch, patch and delete.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from api.deps import OmdbSession, StoreClient, require_movie, to_http_exception
from movie_reviews.ingestion.movie_importer import import_movie
from movie_reviews.models.movies import InvalidMovieRequestError, MovieLookup, MoviePatch, MovieRecord
from movie_reviews.repositories.movies import (
    MovieRepositoryError,
    delete_movie,
    find_movie_by_imdb_id,
    list_movies,
    update_movie_annotations,
)

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/movies", tags=["movies"])


# --- Pydantic models ---


class RatingOut(BaseModel):
    Source: str
    Value: str


class Movie(BaseModel):
    """A stored movie as returned to callers; bookkeeping columns are never included."""

    imdbID: str
    Title: str | None = None
    Year: str | None = None
    Rated: str | None = None
    Released: str | None = None
    Runtime: str | None = None
    Genre: str | None = None
    Director: str | None = None
    Writer: str | None = None
    Actors: str | None = None
    Plot: str | None = None
    Language: str | None = None
    Country: str | None = None
    Awards: str | None = None
    Ratings: list[RatingOut] = []
    Metascore: str | None = None
    imdbRating: str | None = None
    imdbVotes: str | None = None
    BoxOffice: str | None = None
    myScore: int | None = None
    myReview: str | None = None


class MovieByIdRequest(BaseModel):
    """
    Fields are typed loosely on purpose: a missing id or a bad score is
    reported as 400 by the import workflow, not as a 422 schema error.
    """

    id: Any = None
    myScore: Any = None
    myReview: Any = None


class MovieByTitleRequest(BaseModel):
    title: Any = None
    year: Any = None
    myScore: Any = None
    myReview: Any = None


class MovieAnnotationsUpdate(BaseModel):
    myScore: Any = None
    myReview: Any = None


class DeletedMovieResponse(BaseModel):
    message: str
    deletedMovie: Movie


# --- Helpers ---


def movie_payload(row: dict[str, Any]) -> dict[str, Any]:
    return MovieRecord.from_row(row).to_payload()


def import_movie_by_id(db: StoreClient, session: OmdbSession, body: MovieByIdRequest) -> dict[str, Any]:
    try:
        lookup = MovieLookup.by_id(body.id)
        movie = import_movie(db, lookup, body.myScore, body.myReview, session=session)
    except Exception as exc:
        raise to_http_exception(exc, "importing movie by id") from exc
    return movie.to_payload()


def import_movie_by_title(db: StoreClient, session: OmdbSession, body: MovieByTitleRequest) -> dict[str, Any]:
    try:
        lookup = MovieLookup.by_title(body.title, body.year)
        movie = import_movie(db, lookup, body.myScore, body.myReview, session=session)
    except Exception as exc:
        raise to_http_exception(exc, "importing movie by title") from exc
    return movie.to_payload()


# --- Endpoints ---


@router.post("/by-id", response_model=Movie)
def post_movie_by_id(db: StoreClient, session: OmdbSession, body: MovieByIdRequest) -> dict:
    """Fetch a movie from OMDb by IMDb id and store it with the caller's score/review."""
    return import_movie_by_id(db, session, body)


@router.post("/by-title", response_model=Movie)
def post_movie_by_title(db: StoreClient, session: OmdbSession, body: MovieByTitleRequest) -> dict:
    """Fetch a movie from OMDb by title (and optional year) and store it with the caller's score/review."""
    return import_movie_by_title(db, session, body)


@router.get("", response_model=list[Movie])
def get_movies(db: StoreClient) -> list[dict]:
    """List all stored movies."""
    try:
        rows = list_movies(db)
    except MovieRepositoryError as exc:
        raise to_http_exception(exc, "listing movies") from exc
    return [movie_payload(row) for row in rows]


@router.get("/{imdb_id}", response_model=Movie)
def get_movie(db: StoreClient, imdb_id: str) -> dict:
    """Get a stored movie by IMDb id."""
    try:
        row = find_movie_by_imdb_id(db, imdb_id)
    except MovieRepositoryError as exc:
        raise to_http_exception(exc, "fetching movie") from exc
    return movie_payload(require_movie(row))


@router.patch("/{imdb_id}", response_model=Movie)
def patch_movie(db: StoreClient, imdb_id: str, body: MovieAnnotationsUpdate) -> dict:
    """
    Update the score and/or review of a stored movie.
    Only fields present in the body are changed; `"myReview": null` clears the review.
    """
    try:
        patch = MoviePatch.from_request({name: getattr(body, name) for name in body.model_fields_set})
        row = update_movie_annotations(db, imdb_id, patch)
    except (InvalidMovieRequestError, MovieRepositoryError) as exc:
        raise to_http_exception(exc, "updating movie") from exc
    return movie_payload(require_movie(row))


@router.delete("/{imdb_id}", response_model=DeletedMovieResponse)
def remove_movie(db: StoreClient, imdb_id: str) -> dict:
    """Delete a stored movie and return what was removed."""
    try:
        row = delete_movie(db, imdb_id)
    except MovieRepositoryError as exc:
        raise to_http_exception(exc, "deleting movie") from exc
    if not row:
        raise HTTPException(status_code=404, detail="Movie not found")
    logger.info(f"Deleted movie {imdb_id}")
    return {"message": "Movie successfully deleted", "deletedMovie": movie_payload(row)}
