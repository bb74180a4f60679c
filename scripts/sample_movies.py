"""
Fetch one batch of genre movies from the command line.

This script:
1) Loads settings from the environment (OMDB_API_KEY is required)
2) Loads the genre search-term table
3) Runs one aggregation against OMDb
4) Prints the same JSON payload the API returns

Usage:
    python -m scripts.sample_movies action comedy --count 6
"""

import argparse  # command-line options
import json  # print the payload
import time  # measure the run

from loguru import logger  # console logging

from flickpick.aggregator import MovieAggregator  # core pipeline
from flickpick.config import load_settings  # env-based settings
from flickpick.errors import ConfigurationError, InvalidRequestError  # missing key, bad arguments
from flickpick.omdb_client import OmdbClient  # real provider
from flickpick.search_terms import load_search_terms  # genre table
from flickpick.validation import validate_movie_request  # same checks as the API


def main(argv=None) -> int:
	parser = argparse.ArgumentParser(description="Sample movies for up to three genres from OMDb")
	parser.add_argument("genres", nargs="+", help="Genre tags, e.g. action comedy sci-fi")
	parser.add_argument("--count", type=int, default=10, help="Number of movies to return (default 10)")
	args = parser.parse_args(argv)

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("flickpick sampler")
	logger.info("=" * 60)

	settings = load_settings()  # read env (and .env)
	try:
		settings.require_api_key()
	except ConfigurationError as e:
		logger.error(f"[CLI] {e}. Set OMDB_API_KEY and retry.")
		return 2
	try:
		genres, count = validate_movie_request({"genres": args.genres, "count": args.count}, settings.max_count)
	except InvalidRequestError as e:
		parser.error(str(e))  # exits with status 2

	terms = load_search_terms(settings.search_terms_path)  # built-in or override
	t0 = time.time()  # start timer
	with OmdbClient.from_settings(settings) as client:
		aggregator = MovieAggregator(client, search_terms=terms, search_pages=settings.search_pages)
		result = aggregator.collect(genres, count)
		logger.info(f"[CLI] {result.total} movies in {time.time() - t0:.2f}s using {client.calls} OMDb calls")

	payload = {
		"success": True,
		"movies": [m.to_dict() for m in result.movies],
		"total": result.total,
		"requestedGenres": result.requested_genres,
		"requestedCount": result.requested_count,
	}
	print(json.dumps(payload, indent=2, ensure_ascii=False))
	return 0


if __name__ == '__main__':
	raise SystemExit(main())  # invoke sampler
