#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys

from movie_reviews.db.supabase import StoreNotConfiguredError, create_supabase_admin_client
from movie_reviews.ingestion.movie_importer import import_movie
from movie_reviews.integrations.omdb.client import OmdbClientError, OmdbNotFoundError
from movie_reviews.models.movies import InvalidMovieRequestError, MovieLookup
from movie_reviews.repositories.movies import MovieRepositoryError
from movie_reviews.utils.env import load_env


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="import_movie",
        description="Fetch a movie from OMDb and store it in core.movies with a score and review.",
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--imdb-id", default=None, help="IMDb title id (tt...).")
    target.add_argument("--title", default=None, help="Movie title to look up.")
    parser.add_argument("--year", default=None, help="Release year, used with --title.")
    parser.add_argument("--score", required=True, help="Your score, an integer from 0 to 10.")
    parser.add_argument("--review", default=None, help="Your review text.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    load_env()

    try:
        if args.imdb_id is not None:
            lookup = MovieLookup.by_id(args.imdb_id)
        else:
            lookup = MovieLookup.by_title(args.title, args.year)
        db = create_supabase_admin_client()
        movie = import_movie(db, lookup, args.score, args.review)
    except InvalidMovieRequestError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return 2
    except OmdbNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (OmdbClientError, MovieRepositoryError, StoreNotConfiguredError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(movie.to_payload(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
