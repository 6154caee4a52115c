from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from supabase import Client

from movie_reviews.models.movies import MoviePatch, MovieRecord

MOVIES_SCHEMA = "core"
MOVIES_TABLE = "movies"


class MovieRepositoryError(RuntimeError):
    pass


def _now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _movies(db: Client):
    return db.schema(MOVIES_SCHEMA).table(MOVIES_TABLE)


def _execute(query: Any, context: str) -> Any:
    """Run a PostgREST query; raised client errors and `response.error` both become MovieRepositoryError."""

    try:
        response = query.execute()
    except Exception as exc:
        raise MovieRepositoryError(f"Supabase error during {context}: {exc}") from exc
    if hasattr(response, "error") and response.error:
        raise MovieRepositoryError(f"Supabase error during {context}: {response.error}")
    return response


def _first_row(response: Any) -> dict[str, Any] | None:
    data = response.data or []
    if isinstance(data, list) and data:
        return data[0]
    return None


def find_movie_by_imdb_id(db: Client, imdb_id: str) -> dict[str, Any] | None:
    response = _execute(_movies(db).select("*").eq("imdb_id", imdb_id).limit(1), "finding movie by imdb id")
    return _first_row(response)


def list_movies(db: Client) -> list[dict[str, Any]]:
    response = _execute(_movies(db).select("*"), "listing movies")
    data = response.data or []
    return data if isinstance(data, list) else []


def upsert_movie(db: Client, movie: MovieRecord) -> dict[str, Any]:
    """
    Insert or fully replace the row keyed by `imdb_id`.

    Every column is sent, so catalog fields missing from the latest payload are
    cleared rather than carried over from the previous row.
    """

    if not movie.imdb_id:
        raise MovieRepositoryError("Cannot upsert a movie without imdb_id.")
    payload = movie.to_row()
    payload["updated_at"] = _now_utc_iso()
    response = _execute(_movies(db).upsert(payload, on_conflict="imdb_id"), "upserting movie")
    row = _first_row(response)
    if row is None:
        raise MovieRepositoryError("Supabase upsert returned no data for movie.")
    return row


def update_movie_annotations(db: Client, imdb_id: str, patch: MoviePatch) -> dict[str, Any] | None:
    """
    Apply `patch` to the movie's user fields. Returns the updated row, or None when no row matches.
    """

    if patch.is_empty:
        return find_movie_by_imdb_id(db, imdb_id)
    payload = patch.to_row()
    payload["updated_at"] = _now_utc_iso()
    response = _execute(_movies(db).update(payload).eq("imdb_id", imdb_id), "updating movie")
    return _first_row(response)


def delete_movie(db: Client, imdb_id: str) -> dict[str, Any] | None:
    response = _execute(_movies(db).delete().eq("imdb_id", imdb_id), "deleting movie")
    return _first_row(response)
