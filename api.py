"""
FastAPI server exposing the flickpick movie API.
Endpoints:
- GET /health: basic health check
- GET /api/genres: genres the search-term table knows, with their keywords
- POST /api/movies/new: {"genres": [...], "count": n} -> shuffled, de-duplicated movies
- GET /api/movies/new?genres=a,b&count=n: same as POST, for quick manual testing

Startup configures logging and loads the genre search-term table once.
"""

# Import standard libraries for stderr logging and timing
import sys  # log sink
import time  # measure startup and request latencies
from typing import Iterator, List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import Depends, FastAPI, Query, Request  # FastAPI primitives
from fastapi.responses import JSONResponse  # error payloads
from pydantic import BaseModel  # response schema definitions
from starlette.concurrency import run_in_threadpool  # keep blocking HTTP off the event loop

# Import our internal modules for configuration and aggregation
from flickpick.aggregator import MovieAggregator, MovieProvider  # core pipeline
from flickpick.config import Settings, load_settings  # env-based settings
from flickpick.errors import ConfigurationError, InvalidRequestError  # error taxonomy
from flickpick.models import AggregationResult  # pipeline output
from flickpick.omdb_client import OmdbClient  # real provider
from flickpick.search_terms import SearchTermTable, load_search_terms  # genre table
from flickpick.validation import parse_query_params, validate_movie_request  # body checks

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="flickpick API", version="1.0.0")  # web app

# Globals that hold the genre table and measured startup time
SEARCH_TERMS: Optional[SearchTermTable] = None  # loaded once at startup
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model for one {source, value} rating pair
class RatingOut(BaseModel):
	source: str  # e.g. "Rotten Tomatoes"
	value: str  # e.g. "87%"


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	id: str  # IMDb id
	title: str  # display title
	year: Optional[int] = None  # release year (first year for series)
	genre: Optional[str] = None  # comma-separated genres
	director: Optional[str] = None  # director name(s)
	actors: Optional[str] = None  # main cast
	plot: Optional[str] = None  # full plot
	poster: Optional[str] = None  # poster URL, None when unavailable
	imdbRating: Optional[float] = None  # IMDb rating 0..10
	runtime: Optional[str] = None
	rated: Optional[str] = None
	released: Optional[str] = None
	language: Optional[str] = None
	country: Optional[str] = None
	awards: Optional[str] = None
	boxOffice: Optional[str] = None
	metascore: Optional[int] = None  # 0..100
	imdbVotes: Optional[str] = None
	type: Optional[str] = None  # "movie", "series", ...
	ratings: List[RatingOut] = []  # third-party ratings


# Pydantic model for the complete movie response payload
class MoviesResponse(BaseModel):
	success: bool  # always True for 200 responses
	movies: List[MovieOut]  # shaped movies
	total: int  # len(movies)
	requestedGenres: List[str]  # genres as sent by the client
	requestedCount: int  # count as sent by the client


# Pydantic models for the genre listing
class GenreOut(BaseModel):
	name: str  # genre tag clients can send
	searchTerms: List[str]  # keywords searched for it


class GenresResponse(BaseModel):
	genres: List[GenreOut]


# FastAPI startup hook to configure logging and load the genre table once
@app.on_event("startup")
async def startup_event():
	"""Configure the log level and load the search-term table."""
	global SEARCH_TERMS, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	settings = load_settings()  # read env (and .env)
	logger.remove()  # replace loguru's default sink to apply our level
	logger.add(sys.stderr, level=settings.log_level)
	logger.info("[API] Startup: loading genre search terms...")  # log intent

	SEARCH_TERMS = load_search_terms(settings.search_terms_path)  # built-in or override
	logger.info(f"[API] Loaded {len(SEARCH_TERMS.genres())} genres")  # record table size
	if not settings.has_api_key:
		logger.warning("[API] OMDB_API_KEY is not set; movie requests will fail with 500")

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s.")  # summary log


# Errors from validation and configuration map to fixed HTTP statuses
@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
	logger.info(f"[API] Rejected request to {request.url.path}: {exc}")
	return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
	logger.error(f"[API] Configuration error: {exc}")
	return JSONResponse(status_code=500, content={"error": str(exc)})


# Dependencies; tests swap these through app.dependency_overrides
def get_settings() -> Settings:
	"""Settings are read per request so a key added to the environment is picked up."""
	return load_settings()


def get_search_terms(settings: Settings = Depends(get_settings)) -> SearchTermTable:
	"""The table loaded at startup, or a fresh one when startup has not run."""
	if SEARCH_TERMS is not None:
		return SEARCH_TERMS
	return load_search_terms(settings.search_terms_path)


def get_provider(settings: Settings = Depends(get_settings)) -> Iterator[Optional[MovieProvider]]:
	"""One OMDb client per request, closed after the response; None when no key is configured."""
	if not settings.has_api_key:
		yield None  # the handler reports the missing key
		return
	with OmdbClient.from_settings(settings) as client:
		yield client


# Simple health endpoint for readiness checks
@app.get("/health")
async def health(settings: Settings = Depends(get_settings)):
	"""Return minimal health info for liveness and readiness checks."""
	return {
		"status": "ok",  # constant indicator
		"omdb_configured": settings.has_api_key,  # True if the API key is set
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/api/genres", response_model=GenresResponse)
async def list_genres(terms: SearchTermTable = Depends(get_search_terms)):
	"""List the genres the UI can offer, with the keywords searched for each."""
	return GenresResponse(genres=[GenreOut(name=name, searchTerms=kw) for name, kw in terms.as_dict().items()])


async def _serve_movies(
	body, settings: Settings, terms: SearchTermTable, provider: Optional[MovieProvider]
):
	"""Shared POST/GET flow: key check, validation, aggregation, response shaping."""
	settings.require_api_key()  # raises ConfigurationError -> 500 before any provider call
	genres, count = validate_movie_request(body, settings.max_count)  # raises -> 400
	if provider is None:  # key present but no provider wired
		raise ConfigurationError("OMDB API key not configured")

	start = time.time()  # start timer
	logger.debug(f"[API] /api/movies/new genres={genres} count={count}")  # debug log of input
	aggregator = MovieAggregator(provider, search_terms=terms, search_pages=settings.search_pages)
	try:
		result: AggregationResult = await run_in_threadpool(aggregator.collect, genres, count)
		# Convert pipeline results to response schema
		response = MoviesResponse(
			success=True,
			movies=[MovieOut(**m.to_dict()) for m in result.movies],
			total=result.total,
			requestedGenres=result.requested_genres,
			requestedCount=result.requested_count,
		)
	except Exception:
		logger.exception("[API] Error fetching movies")  # stack trace for operators
		return JSONResponse(status_code=500, content={"error": "Failed to fetch movies"})
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /api/movies/new served {result.total}/{count} movies in {elapsed_ms:.2f} ms")  # summary
	return response


# Main endpoint: JSON body with genres and count
@app.post("/api/movies/new", response_model=MoviesResponse)
async def new_movies(
	request: Request,
	settings: Settings = Depends(get_settings),
	terms: SearchTermTable = Depends(get_search_terms),
	provider: Optional[MovieProvider] = Depends(get_provider),
):
	"""Fetch a shuffled, de-duplicated set of movies for the requested genres."""
	settings.require_api_key()  # missing key wins over a malformed body
	try:
		body = await request.json()  # decode JSON body
	except ValueError:
		raise InvalidRequestError("Request body must be valid JSON")
	return await _serve_movies(body, settings, terms, provider)


# Convenience alias that converts query parameters into the POST shape
@app.get("/api/movies/new", response_model=MoviesResponse)
async def new_movies_query(
	genres: Optional[str] = Query(None, description="Comma-separated genres, default 'action'"),
	count: Optional[str] = Query(None, description="Number of movies, default 10"),
	settings: Settings = Depends(get_settings),
	terms: SearchTermTable = Depends(get_search_terms),
	provider: Optional[MovieProvider] = Depends(get_provider),
):
	"""GET form of /api/movies/new for browsers and curl."""
	settings.require_api_key()
	return await _serve_movies(parse_query_params(genres, count), settings, terms, provider)
