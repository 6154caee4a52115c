from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

SCORE_MIN = 0
SCORE_MAX = 10

# OMDb response key -> `core.movies` column. Keys outside this map are dropped.
OMDB_FIELD_COLUMNS: dict[str, str] = {
    "Title": "title",
    "Year": "year",
    "Rated": "rated",
    "Released": "released",
    "Runtime": "runtime",
    "Genre": "genre",
    "Director": "director",
    "Writer": "writer",
    "Actors": "actors",
    "Plot": "plot",
    "Language": "language",
    "Country": "country",
    "Awards": "awards",
    "Metascore": "metascore",
    "imdbRating": "imdb_rating",
    "imdbVotes": "imdb_votes",
    "BoxOffice": "box_office",
}

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class InvalidMovieRequestError(ValueError):
    pass


def parse_score(value: Any) -> int:
    """
    Parse a user score into an int in [SCORE_MIN, SCORE_MAX].

    Accepts ints, integral floats and decimal-integer strings ("7", " 7 ").
    """

    if isinstance(value, bool) or value is None:
        raise InvalidMovieRequestError("myScore must be an integer between 0 and 10")

    score: int | None = None
    if isinstance(value, int):
        score = value
    elif isinstance(value, float):
        if value.is_integer():
            score = int(value)
    elif isinstance(value, str):
        raw = value.strip()
        if _INTEGER_RE.match(raw):
            try:
                score = int(raw)
            except ValueError as exc:
                # int() refuses strings past sys.get_int_max_str_digits().
                raise InvalidMovieRequestError("myScore must be an integer between 0 and 10") from exc

    if score is None or not SCORE_MIN <= score <= SCORE_MAX:
        raise InvalidMovieRequestError("myScore must be an integer between 0 and 10")
    return score


def _clean_str(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


@dataclass(frozen=True)
class Rating:
    source: str
    value: str

    def to_payload(self) -> dict[str, str]:
        return {"Source": self.source, "Value": self.value}

    @classmethod
    def from_any(cls, raw: Any) -> Rating | None:
        if not isinstance(raw, Mapping):
            return None
        source = raw.get("Source", raw.get("source"))
        value = raw.get("Value", raw.get("value"))
        if not isinstance(source, str) or not isinstance(value, str):
            return None
        return cls(source=source, value=value)


@dataclass(frozen=True)
class MovieLookup:
    """Catalog lookup key: either an IMDb id or a title with an optional year."""

    imdb_id: str | None = None
    title: str | None = None
    year: str | None = None

    @classmethod
    def by_id(cls, imdb_id: Any) -> MovieLookup:
        resolved = str(imdb_id).strip() if imdb_id is not None else ""
        if not resolved:
            raise InvalidMovieRequestError("Movie ID is required")
        return cls(imdb_id=resolved)

    @classmethod
    def by_title(cls, title: Any, year: Any = None) -> MovieLookup:
        resolved = str(title).strip() if title is not None else ""
        if not resolved:
            raise InvalidMovieRequestError("Movie title is required")
        year_str = str(year).strip() if year is not None else ""
        return cls(title=resolved, year=year_str or None)


@dataclass(frozen=True)
class MovieRecord:
    """
    Canonical movie record (maps to `core.movies`).

    Catalog fields are copied verbatim from OMDb; `my_score`/`my_review`
    are the user's annotations.
    """

    imdb_id: str
    title: str | None = None
    year: str | None = None
    rated: str | None = None
    released: str | None = None
    runtime: str | None = None
    genre: str | None = None
    director: str | None = None
    writer: str | None = None
    actors: str | None = None
    plot: str | None = None
    language: str | None = None
    country: str | None = None
    awards: str | None = None
    metascore: str | None = None
    imdb_rating: str | None = None
    imdb_votes: str | None = None
    box_office: str | None = None
    ratings: tuple[Rating, ...] = field(default_factory=tuple)
    my_score: int | None = None
    my_review: str | None = None

    @classmethod
    def from_omdb(
        cls,
        payload: Mapping[str, Any],
        *,
        my_score: int | None,
        my_review: str | None,
    ) -> MovieRecord:
        imdb_id = _clean_str(payload.get("imdbID"))
        if not imdb_id:
            raise ValueError("OMDb payload is missing imdbID.")
        catalog = {column: _clean_str(payload.get(key)) for key, column in OMDB_FIELD_COLUMNS.items()}
        raw_ratings = payload.get("Ratings")
        ratings = tuple(
            r for r in (Rating.from_any(item) for item in (raw_ratings if isinstance(raw_ratings, list) else [])) if r
        )
        return cls(imdb_id=imdb_id, ratings=ratings, my_score=my_score, my_review=my_review, **catalog)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> MovieRecord:
        """Build a record from a `core.movies` row, ignoring bookkeeping columns."""

        raw_ratings = row.get("ratings")
        ratings = tuple(
            r for r in (Rating.from_any(item) for item in (raw_ratings if isinstance(raw_ratings, list) else [])) if r
        )
        score = row.get("my_score")
        return cls(
            imdb_id=str(row.get("imdb_id") or ""),
            ratings=ratings,
            my_score=score if isinstance(score, int) and not isinstance(score, bool) else None,
            my_review=_clean_str(row.get("my_review")),
            **{column: _clean_str(row.get(column)) for column in OMDB_FIELD_COLUMNS.values()},
        )

    def to_row(self) -> dict[str, Any]:
        """Full row for a replace-style upsert; every column is present."""

        row: dict[str, Any] = {"imdb_id": self.imdb_id}
        for column in OMDB_FIELD_COLUMNS.values():
            row[column] = getattr(self, column)
        row["ratings"] = [{"Source": r.source, "Value": r.value} for r in self.ratings]
        row["my_score"] = self.my_score
        row["my_review"] = self.my_review
        return row

    def to_payload(self) -> dict[str, Any]:
        """API shape, using the catalog's own field names."""

        payload: dict[str, Any] = {}
        for key, column in OMDB_FIELD_COLUMNS.items():
            payload[key] = getattr(self, column)
        payload["Ratings"] = [r.to_payload() for r in self.ratings]
        payload["imdbID"] = self.imdb_id
        payload["myScore"] = self.my_score
        payload["myReview"] = self.my_review
        return payload


@dataclass(frozen=True)
class MoviePatch:
    """
    Partial update of user annotations.

    `fields` names the columns the caller actually sent; anything not listed is
    left unchanged. A review sent as null clears the stored review.
    """

    my_score: int | None = None
    my_review: str | None = None
    fields: frozenset[str] | None = None

    def __post_init__(self) -> None:
        if self.fields is None:
            present = {name for name in ("my_score", "my_review") if getattr(self, name) is not None}
            object.__setattr__(self, "fields", frozenset(present))

    @classmethod
    def from_request(cls, body: Mapping[str, Any]) -> MoviePatch:
        """Build a patch from the request keys that were present (`myScore`, `myReview`)."""

        fields: set[str] = set()
        score: int | None = None
        review: str | None = None
        if "myScore" in body:
            score = parse_score(body["myScore"])
            fields.add("my_score")
        if "myReview" in body:
            review = body["myReview"]
            if review is not None and not isinstance(review, str):
                raise InvalidMovieRequestError("myReview must be a string")
            fields.add("my_review")
        return cls(my_score=score, my_review=review, fields=frozenset(fields))

    def to_row(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in sorted(self.fields or ())}

    @property
    def is_empty(self) -> bool:
        return not self.fields
