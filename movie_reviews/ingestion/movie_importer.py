from __future__ import annotations

import logging
from typing import Any

import requests
from supabase import Client

from movie_reviews.integrations.omdb.client import fetch_movie_by_imdb_id, fetch_movie_by_title
from movie_reviews.models.movies import InvalidMovieRequestError, MovieLookup, MovieRecord, parse_score
from movie_reviews.repositories.movies import upsert_movie

logger = logging.getLogger(__name__)


def fetch_catalog_payload(
    lookup: MovieLookup,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
) -> dict[str, Any]:
    if lookup.imdb_id:
        return fetch_movie_by_imdb_id(lookup.imdb_id, api_key=api_key, session=session)
    if lookup.title:
        return fetch_movie_by_title(lookup.title, lookup.year, api_key=api_key, session=session)
    raise InvalidMovieRequestError("Movie ID or title is required")


def import_movie(
    db: Client,
    lookup: MovieLookup,
    my_score: Any,
    my_review: Any = None,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
) -> MovieRecord:
    """
    Fetch a movie from OMDb, attach the user's score/review, and upsert it into `core.movies`.

    Steps:
    1. Validate the score (and review) before touching the network
    2. Fetch the catalog payload by id or by title/year
    3. Merge allow-listed catalog fields with the user annotations
    4. Upsert keyed by the imdbID OMDb returned (not the caller's lookup key)

    Raises:
        InvalidMovieRequestError: bad lookup key, score or review
        OmdbNotFoundError: OMDb has no match
        OmdbClientError: OMDb transport/payload failure
        MovieRepositoryError: Supabase failure
    """

    score = parse_score(my_score)
    if my_review is not None and not isinstance(my_review, str):
        raise InvalidMovieRequestError("myReview must be a string")

    payload = fetch_catalog_payload(lookup, api_key=api_key, session=session)
    movie = MovieRecord.from_omdb(payload, my_score=score, my_review=my_review)

    row = upsert_movie(db, movie)
    logger.info(f"Upserted movie {movie.imdb_id} ({movie.title!r}) with score {score}")
    return MovieRecord.from_row(row)
