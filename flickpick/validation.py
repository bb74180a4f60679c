"""
Request validation for the movie endpoint.
Checks the raw JSON body before any provider call is made.
"""

from typing import Any, List, Optional, Tuple

from .config import DEFAULT_MAX_COUNT
from .errors import InvalidRequestError


def validate_genres(genres: Any) -> List[str]:
	"""genres must be a non-empty list of strings."""
	if not isinstance(genres, list) or len(genres) == 0:
		raise InvalidRequestError("Please provide at least one genre")
	if not all(isinstance(g, str) for g in genres):
		raise InvalidRequestError("Genres must be strings")
	return list(genres)


def validate_count(count: Any, max_count: int = DEFAULT_MAX_COUNT) -> int:
	"""count must be an integer in [1, max_count]; booleans are not counts."""
	if isinstance(count, bool) or not isinstance(count, (int, float)):
		raise InvalidRequestError(f"Count must be between 1 and {max_count}")
	if isinstance(count, float):
		if not count.is_integer():  # 2.5 movies is not a count
			raise InvalidRequestError("Count must be a whole number")
		count = int(count)
	if count < 1 or count > max_count:
		raise InvalidRequestError(f"Count must be between 1 and {max_count}")
	return count


def validate_movie_request(body: Any, max_count: int = DEFAULT_MAX_COUNT) -> Tuple[List[str], int]:
	"""Validate a decoded JSON body of the form {"genres": [...], "count": n}."""
	if not isinstance(body, dict):
		raise InvalidRequestError("Request body must be a JSON object")
	genres = validate_genres(body.get("genres"))
	count = validate_count(body.get("count"), max_count)
	return genres, count


def parse_query_params(genres: Optional[str], count: Optional[str]) -> dict:
	"""
	Convert GET query parameters into the POST body shape.
	genres is comma separated and defaults to "action"; count defaults to 10.
	"""
	genre_list = [g.strip() for g in (genres if genres is not None else "action").split(",") if g.strip()]
	raw_count = count if count is not None else "10"
	try:
		parsed_count: Any = int(raw_count)
	except ValueError:
		raise InvalidRequestError(f"Count must be an integer, got {raw_count!r}")
	return {"genres": genre_list, "count": parsed_count}
