"""
OMDb integration client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from movie_reviews.integrations.omdb.client import (
        OmdbClientError,
        OmdbNotFoundError,
        fetch_movie_by_imdb_id,
        fetch_movie_by_title,
    )

__all__ = [
    "OmdbClientError",
    "OmdbNotFoundError",
    "fetch_movie_by_imdb_id",
    "fetch_movie_by_title",
]


def __getattr__(name: str):
    if name in __all__:
        from movie_reviews.integrations.omdb import client

        return getattr(client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
