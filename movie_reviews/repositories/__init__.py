"""
Repository layer for DB access patterns.
"""

from movie_reviews.repositories.movies import (
    MovieRepositoryError,
    delete_movie,
    find_movie_by_imdb_id,
    list_movies,
    update_movie_annotations,
    upsert_movie,
)

__all__ = [
    "MovieRepositoryError",
    "delete_movie",
    "find_movie_by_imdb_id",
    "list_movies",
    "update_movie_annotations",
    "upsert_movie",
]
