"""
Shared fakes: an in-memory Supabase query builder and a scripted OMDb session.
"""
from __future__ import annotations

import copy
from typing import Any

import pytest
import requests
from postgrest.exceptions import APIError


class _FakeResponse:
    def __init__(self, *, data=None, error=None):  # noqa: ANN001
        self.data = data if data is not None else []
        self.error = error


class _FakeQuery:
    def __init__(self, client: FakeSupabase, table: str) -> None:
        self._client = client
        self._table = table
        self._op = "select"
        self._payload: dict[str, Any] | None = None
        self._on_conflict: str | None = None
        self._filters: list[tuple[str, Any]] = []
        self._limit: int | None = None

    def select(self, _columns: str = "*") -> _FakeQuery:
        self._op = "select"
        return self

    def upsert(self, payload: dict[str, Any], on_conflict: str = "") -> _FakeQuery:
        self._op = "upsert"
        self._payload = dict(payload)
        self._on_conflict = on_conflict
        return self

    def update(self, payload: dict[str, Any]) -> _FakeQuery:
        self._op = "update"
        self._payload = dict(payload)
        return self

    def delete(self) -> _FakeQuery:
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> _FakeQuery:
        self._filters.append((column, value))
        return self

    def limit(self, count: int) -> _FakeQuery:
        self._limit = count
        return self

    def _matches(self, row: dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> _FakeResponse:
        self._client.calls.append((self._op, self._table, copy.deepcopy(self._payload), list(self._filters)))
        if self._client.raise_exc is not None:
            raise self._client.raise_exc
        if self._client.error is not None:
            return _FakeResponse(error=self._client.error)

        rows = self._client.tables.setdefault(self._table, [])
        if self._op == "select":
            matched = [copy.deepcopy(r) for r in rows if self._matches(r)]
            if self._limit is not None:
                matched = matched[: self._limit]
            return _FakeResponse(data=matched)

        if self._op == "upsert":
            assert self._payload is not None
            key = self._on_conflict or "id"
            for index, existing in enumerate(rows):
                if existing.get(key) == self._payload.get(key):
                    replaced = {"id": existing["id"], "created_at": existing["created_at"], **self._payload}
                    rows[index] = replaced
                    return _FakeResponse(data=[copy.deepcopy(replaced)])
            self._client.next_id += 1
            inserted = {"id": self._client.next_id, "created_at": "2025-01-01T00:00:00+00:00", **self._payload}
            rows.append(inserted)
            return _FakeResponse(data=[copy.deepcopy(inserted)])

        if self._op == "update":
            assert self._payload is not None
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self._payload)
                    updated.append(copy.deepcopy(row))
            return _FakeResponse(data=updated)

        if self._op == "delete":
            removed = [r for r in rows if self._matches(r)]
            self._client.tables[self._table] = [r for r in rows if not self._matches(r)]
            return _FakeResponse(data=copy.deepcopy(removed))

        raise AssertionError(f"unsupported op {self._op}")


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str, Any, list[tuple[str, Any]]]] = []
        self.next_id = 0
        self.error: Any = None
        # Raised from `execute()`, the way supabase-py v2 surfaces PostgREST and transport failures.
        self.raise_exc: Exception | None = None

    def schema(self, _name: str) -> FakeSupabase:
        return self

    def table(self, name: str) -> _FakeQuery:
        return _FakeQuery(self, name)

    @property
    def movies(self) -> list[dict[str, Any]]:
        return self.tables.get("movies", [])

    @property
    def mutations(self) -> list[tuple[str, str, Any, list[tuple[str, Any]]]]:
        return [c for c in self.calls if c[0] != "select"]


class _FakeHttpResponse:
    def __init__(self, payload: Any, *, status_code: int = 200, text: str | None = None) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else str(payload)

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeOmdbSession:
    """
    Answers `?i=` lookups from `by_id` and `?t=` lookups from `by_title`
    (keyed by `(title, year)`); anything else is an OMDb miss.
    """

    def __init__(self) -> None:
        self.by_id: dict[str, dict[str, Any]] = {}
        self.by_title: dict[tuple[str, str | None], dict[str, Any]] = {}
        self.calls: list[dict[str, Any]] = []
        self.raise_exc: Exception | None = None
        self.override: _FakeHttpResponse | None = None

    def get(self, url: str, params=None, headers=None, timeout=None):  # noqa: ANN001
        params = dict(params or {})
        self.calls.append({"url": url, "params": params})
        if self.raise_exc is not None:
            raise self.raise_exc
        if self.override is not None:
            return self.override
        payload: dict[str, Any] | None = None
        if "i" in params:
            payload = self.by_id.get(params["i"])
        elif "t" in params:
            payload = self.by_title.get((params["t"], params.get("y")))
        if payload is None:
            payload = {"Response": "False", "Error": "Movie not found!"}
        return _FakeHttpResponse(copy.deepcopy(payload))


MATRIX_PAYLOAD: dict[str, Any] = {
    "Title": "The Matrix",
    "Year": "1999",
    "Rated": "R",
    "Released": "31 Mar 1999",
    "Runtime": "136 min",
    "Genre": "Action, Sci-Fi",
    "Director": "Lana Wachowski, Lilly Wachowski",
    "Writer": "Lilly Wachowski, Lana Wachowski",
    "Actors": "Keanu Reeves, Laurence Fishburne, Carrie-Anne Moss",
    "Plot": "A computer hacker learns about the true nature of reality.",
    "Language": "English",
    "Country": "United States, Australia",
    "Awards": "Won 4 Oscars.",
    "Poster": "https://m.media-amazon.com/images/M/matrix.jpg",
    "Ratings": [
        {"Source": "Internet Movie Database", "Value": "8.7/10"},
        {"Source": "Rotten Tomatoes", "Value": "83%"},
        {"Source": "Metacritic", "Value": "73/100"},
    ],
    "Metascore": "73",
    "imdbRating": "8.7",
    "imdbVotes": "2,100,000",
    "imdbID": "tt0133093",
    "Type": "movie",
    "BoxOffice": "$172,076,928",
    "Response": "True",
}


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def fake_omdb() -> FakeOmdbSession:
    session = FakeOmdbSession()
    session.by_id["tt0133093"] = MATRIX_PAYLOAD
    session.by_title[("The Matrix", "1999")] = MATRIX_PAYLOAD
    session.by_title[("The Matrix", None)] = MATRIX_PAYLOAD
    return session


@pytest.fixture(autouse=True)
def omdb_api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("OMDB_API_KEY", "test-key")
    monkeypatch.delenv("OMDB_API_BASE_URL", raising=False)
    return "test-key"


@pytest.fixture
def fake_http_response():
    return _FakeHttpResponse


@pytest.fixture
def connection_error() -> Exception:
    return requests.ConnectionError("connection refused")


@pytest.fixture
def matrix_payload() -> dict[str, Any]:
    return copy.deepcopy(MATRIX_PAYLOAD)


@pytest.fixture
def postgrest_error() -> APIError:
    return APIError({"message": "permission denied for table movies", "code": "42501", "hint": None, "details": None})
