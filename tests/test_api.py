"""
HTTP-level tests for the FastAPI app with the OMDb provider replaced by an in-memory fake.
Run: python -m pytest tests/test_api.py
"""

import pytest
from fastapi.testclient import TestClient

import api
from flickpick.config import Settings
from flickpick.omdb_client import OmdbClient

from fakes import ExplodingProvider, FakeProvider, candidate, detail


@pytest.fixture
def wire():
	"""Install settings and a provider for one test; returns a TestClient."""
	def _wire(provider, settings=None):
		settings = settings or Settings(omdb_api_key="test-key")
		api.app.dependency_overrides[api.get_settings] = lambda: settings
		api.app.dependency_overrides[api.get_provider] = lambda: provider if settings.has_api_key else None
		return TestClient(api.app)
	yield _wire
	api.app.dependency_overrides.clear()


def ten_action_movies():
	return FakeProvider({
		"action": [candidate(f"tt{i}") for i in range(6)],
		"hero": [candidate(f"tt{i}") for i in range(6, 10)],
	})


def test_post_returns_requested_count(wire):
	provider = ten_action_movies()
	res = wire(provider).post("/api/movies/new", json={"genres": ["action"], "count": 5})

	assert res.status_code == 200
	body = res.json()
	assert body["success"] is True
	assert body["total"] == 5
	assert len(body["movies"]) == 5
	assert len({m["id"] for m in body["movies"]}) == 5
	assert body["requestedGenres"] == ["action"]
	assert body["requestedCount"] == 5


def test_fewer_movies_than_requested_is_still_success(wire):
	provider = FakeProvider({
		"action": [candidate("tt1"), candidate("tt2")],
		"comedy": [candidate("tt2"), candidate("tt3")],
	})
	res = wire(provider).post("/api/movies/new", json={"genres": ["action", "comedy"], "count": 10})

	assert res.status_code == 200
	body = res.json()
	assert body["success"] is True
	assert body["total"] == 3
	assert sorted(m["id"] for m in body["movies"]) == ["tt1", "tt2", "tt3"]


def test_movie_schema(wire):
	provider = FakeProvider(
		{"action": [candidate("tt1")]},
		details={"tt1": detail("tt1", poster="N/A", year="1999", imdb_rating="N/A", metascore="N/A")},
	)
	res = wire(provider).post("/api/movies/new", json={"genres": ["action"], "count": 1})
	movie = res.json()["movies"][0]

	assert movie["id"] == "tt1"
	assert movie["year"] == 1999
	assert movie["poster"] is None
	assert movie["imdbRating"] is None
	assert movie["metascore"] is None
	assert movie["ratings"] == [{"source": "Internet Movie Database", "value": "7.1/10"}]
	assert "boxOffice" in movie and "imdbVotes" in movie


@pytest.mark.parametrize("body", [
	{"genres": [], "count": 5},
	{"genres": "action", "count": 5},
	{"count": 5},
	{"genres": [1, 2], "count": 5},
	["action"],
])
def test_bad_genres_are_client_errors(wire, body):
	provider = ten_action_movies()
	res = wire(provider).post("/api/movies/new", json=body)

	assert res.status_code == 400
	assert "error" in res.json()
	assert provider.calls == 0


@pytest.mark.parametrize("count", [0, -3, 201, None, "5", True, 2.5])
def test_bad_count_is_client_error(wire, count):
	provider = ten_action_movies()
	res = wire(provider).post("/api/movies/new", json={"genres": ["action"], "count": count})

	assert res.status_code == 400
	assert "error" in res.json()
	assert provider.calls == 0


def test_count_bounds_are_inclusive(wire):
	provider = ten_action_movies()
	client = wire(provider)
	assert client.post("/api/movies/new", json={"genres": ["action"], "count": 1}).status_code == 200
	assert client.post("/api/movies/new", json={"genres": ["action"], "count": 200}).status_code == 200


def test_invalid_json_is_client_error(wire):
	res = wire(ten_action_movies()).post(
		"/api/movies/new", content=b"{nope", headers={"Content-Type": "application/json"}
	)
	assert res.status_code == 400


def test_missing_api_key_is_server_error(wire):
	provider = ten_action_movies()
	res = wire(provider, Settings()).post("/api/movies/new", json={"genres": ["action"], "count": 5})

	assert res.status_code == 500
	assert res.json() == {"error": "OMDB API key not configured"}
	assert provider.calls == 0


def test_unexpected_failure_returns_generic_error(wire):
	res = wire(ExplodingProvider()).post("/api/movies/new", json={"genres": ["action"], "count": 5})

	assert res.status_code == 500
	assert res.json() == {"error": "Failed to fetch movies"}


def test_get_alias_converts_query_params(wire):
	provider = FakeProvider({"comedy": [candidate(f"tt{i}") for i in range(4)], "space": [candidate("tt9")]})
	res = wire(provider).get("/api/movies/new", params={"genres": "comedy, sci-fi", "count": "3"})

	assert res.status_code == 200
	body = res.json()
	assert body["requestedGenres"] == ["comedy", "sci-fi"]
	assert body["requestedCount"] == 3
	assert body["total"] == 3


def test_get_alias_defaults(wire):
	provider = ten_action_movies()
	body = wire(provider).get("/api/movies/new").json()
	assert body["requestedGenres"] == ["action"]
	assert body["requestedCount"] == 10
	assert body["total"] == 10


def test_get_alias_rejects_non_numeric_count(wire):
	provider = ten_action_movies()
	res = wire(provider).get("/api/movies/new", params={"genres": "action", "count": "many"})
	assert res.status_code == 400
	assert provider.calls == 0


@pytest.mark.parametrize("params", [
	{"genres": ""},  # empty list after splitting
	{"genres": " , "},
	{"genres": "action", "count": "5abc"},  # no prefix parsing
	{"genres": "action", "count": "5.5"},
])
def test_get_alias_rejects_blank_genres_and_partial_numbers(wire, params):
	provider = ten_action_movies()
	res = wire(provider).get("/api/movies/new", params=params)
	assert res.status_code == 400
	assert "error" in res.json()
	assert provider.calls == 0


def test_genres_listing(wire):
	res = wire(FakeProvider()).get("/api/genres")
	assert res.status_code == 200
	genres = {g["name"]: g["searchTerms"] for g in res.json()["genres"]}
	assert genres["action"] == ["action", "fight", "war", "battle", "hero"]
	assert "sci-fi" in genres


def test_health_reports_key_presence(wire):
	assert wire(FakeProvider()).get("/health").json()["omdb_configured"] is True
	assert wire(FakeProvider(), Settings()).get("/health").json()["omdb_configured"] is False


class OmdbRoutingSession:
	"""requests.Session stand-in: one search hit for 'action' page 1, a fixed detail payload for every id."""

	def __init__(self, detail_payload):
		self.detail_payload = detail_payload
		self.calls = 0

	def get(self, url, params=None, timeout=None):
		self.calls += 1
		if "i" in params:
			return OmdbResponse(dict(self.detail_payload, imdbID=params["i"]))
		if params["s"] == "action" and params["page"] == 1:
			return OmdbResponse({"Response": "True", "Search": [{"imdbID": "tt1", "Title": "X", "Year": "1999", "Type": "movie"}]})
		return OmdbResponse({"Response": "False", "Error": "Movie not found!"})

	def close(self):
		pass


class OmdbResponse:
	def __init__(self, payload):
		self.payload = payload

	def json(self):
		return self.payload


def test_non_string_provider_fields_are_coerced(wire):
	session = OmdbRoutingSession({
		"Response": "True", "Title": None, "Year": 1999, "Director": 5, "Actors": ["not", "text"],
		"imdbRating": 7.5, "Metascore": 61, "Poster": None,
		"Ratings": [{"Source": "X", "Value": 7}, {"Source": None, "Value": None}, "junk"],
	})
	client = OmdbClient(api_key="test-key", session=session)
	res = wire(client).post("/api/movies/new", json={"genres": ["action"], "count": 1})

	assert res.status_code == 200
	movie = res.json()["movies"][0]
	assert movie["id"] == "tt1"
	assert movie["title"] == ""
	assert movie["year"] == 1999
	assert movie["director"] == "5"
	assert movie["actors"] is None
	assert movie["imdbRating"] == 7.5
	assert movie["metascore"] == 61
	assert movie["poster"] is None
	assert movie["ratings"] == [{"source": "X", "value": "7"}, {"source": "", "value": ""}]


def test_response_building_failure_returns_json_error(wire, monkeypatch):
	def broken_movie(**fields):
		raise ValueError("bad movie")
	monkeypatch.setattr(api, "MovieOut", broken_movie)
	res = wire(ten_action_movies()).post("/api/movies/new", json={"genres": ["action"], "count": 2})

	assert res.status_code == 500
	assert res.json() == {"error": "Failed to fetch movies"}


if __name__ == '__main__':
	raise SystemExit(pytest.main([__file__, "-v"]))
