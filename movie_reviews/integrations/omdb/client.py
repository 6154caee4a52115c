from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from movie_reviews.utils.env import env_str

logger = logging.getLogger(__name__)

OMDB_API_BASE_URL = "https://www.omdbapi.com/"


class OmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


class OmdbNotFoundError(OmdbClientError):
    """OMDb answered `Response: "False"` for the lookup."""


def _require_api_key(api_key: str | None) -> str:
    resolved = (api_key or env_str("OMDB_API_KEY") or "").strip()
    if not resolved:
        raise OmdbClientError("OMDB_API_KEY is not set.")
    return resolved


def resolve_base_url(base_url: str | None = None) -> str:
    return (base_url or env_str("OMDB_API_BASE_URL") or OMDB_API_BASE_URL).strip()


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any],
    timeout_seconds: float = 20.0,
) -> dict[str, Any]:
    headers = {"accept": "application/json"}
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise OmdbClientError(f"OMDb request failed: {exc}") from exc

    if resp.status_code != 200:
        raise OmdbClientError(
            f"OMDb request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        raise OmdbClientError(
            "OMDb returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise OmdbClientError("OMDb returned unexpected JSON shape (not an object).")
    return payload


def _require_found(payload: dict[str, Any], what: str) -> dict[str, Any]:
    # OMDb reports misses in-band: HTTP 200 with {"Response": "False", "Error": "..."}.
    if str(payload.get("Response", "")).strip().casefold() != "true":
        error = payload.get("Error") or "Movie not found!"
        raise OmdbNotFoundError(f"OMDb has no match for {what}: {error}")
    if not isinstance(payload.get("imdbID"), str) or not payload["imdbID"].strip():
        raise OmdbClientError(f"OMDb response for {what} is missing imdbID.")
    return payload


def fetch_movie_by_imdb_id(
    imdb_id: str,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
    base_url: str | None = None,
) -> dict[str, Any]:
    """
    Fetch a title's full OMDb payload by IMDb id (`?i=tt...`).

    Raises `OmdbNotFoundError` when OMDb has no such title.
    """

    api_key = _require_api_key(api_key)
    session = session or requests.Session()
    logger.debug(f"OMDb lookup by id: {imdb_id}")
    payload = _request_json(session, resolve_base_url(base_url), params={"apikey": api_key, "i": imdb_id})
    return _require_found(payload, f"id {imdb_id!r}")


def fetch_movie_by_title(
    title: str,
    year: str | None = None,
    *,
    api_key: str | None = None,
    session: requests.Session | None = None,
    base_url: str | None = None,
) -> dict[str, Any]:
    """
    Fetch the best OMDb match for a title, optionally narrowed by year (`?t=...&y=...`).
    """

    api_key = _require_api_key(api_key)
    session = session or requests.Session()
    params: dict[str, Any] = {"apikey": api_key, "t": title}
    if year:
        params["y"] = year
    logger.debug(f"OMDb lookup by title: {title!r} year={year!r}")
    payload = _request_json(session, resolve_base_url(base_url), params=params)
    what = f"title {title!r}" + (f" ({year})" if year else "")
    return _require_found(payload, what)
