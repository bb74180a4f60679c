"""
Aggregation module.
Searches each requested genre, samples a per-genre quota of unseen candidates,
fetches their details, and shapes the final shuffled result list.
"""

from typing import List, Optional, Protocol, Sequence, Set  # type annotations for clarity

# Import project modules for data structures and components
from .models import AggregationResult, CandidateRecord, DetailRecord  # core data classes
from .sampler import Sampler, per_genre_quota  # dedup + shuffle + quota
from .search_terms import SearchTermTable  # genre → keywords
from .shaper import shape_results  # client-facing schema

# Import loguru for console logging
from loguru import logger  # simple structured logger


class MovieProvider(Protocol):
	"""What the aggregator needs from a metadata provider. OmdbClient implements it."""

	def search(self, keyword: str, page: int = 1) -> List[CandidateRecord]:
		...

	def get_details(self, imdb_id: str) -> Optional[DetailRecord]:
		...


class MovieAggregator:
	"""
	High-level API combining genre search, sampling, detail lookup and shaping.
	All provider calls are issued sequentially; pacing lives in the provider.
	"""
	def __init__(
		self,
		provider: MovieProvider,  # search + detail capability
		search_terms: Optional[SearchTermTable] = None,  # defaults to the built-in table
		sampler: Optional[Sampler] = None,  # random source for shuffles
		search_pages: int = 3,  # pages queried per search term
	):
		self.provider = provider  # outbound calls
		self.search_terms = search_terms or SearchTermTable()  # genre table
		self.sampler = sampler or Sampler()  # unbiased shuffles
		self.search_pages = search_pages  # depth per term

	def search_genre(self, genre: str) -> List[CandidateRecord]:
		"""Pool every search hit for a genre across its terms and pages 1..search_pages."""
		terms = self.search_terms.terms_for(genre)  # synonyms or the raw tag
		pool: List[CandidateRecord] = []  # accumulator
		for term in terms:  # widen coverage with each synonym
			for page in range(1, self.search_pages + 1):  # multiple pages for variety
				pool.extend(self.provider.search(term, page))
		logger.debug(f"[Aggregator] Genre '{genre}' searched {len(terms)} terms -> {len(pool)} raw candidates")
		return pool

	def fetch_details(
		self,
		candidates: Sequence[CandidateRecord],  # this genre's sampled quota
		seen_ids: Set[str],  # ids selected so far in this request (updated in place)
		collected: List[DetailRecord],  # details accumulated so far (appended in place)
		count: int,  # requested total
	) -> int:
		"""
		Fetch details for sampled candidates until the request total is reached.
		A failed lookup is skipped and its id is not marked as seen.
		Returns the number of details added.
		"""
		added = 0
		for candidate in candidates:
			if len(collected) >= count:  # request already satisfied
				break
			details = self.provider.get_details(candidate.imdb_id)
			if details is None:
				logger.debug(f"[Aggregator] Skipping {candidate.imdb_id}: no details")
				continue
			if details.imdb_id in seen_ids:  # provider resolved to a record we already hold
				logger.debug(f"[Aggregator] Skipping {candidate.imdb_id}: resolved to seen id {details.imdb_id}")
				continue
			seen_ids.add(candidate.imdb_id)
			seen_ids.add(details.imdb_id)
			collected.append(details)
			added += 1
		return added

	def collect(self, genres: Sequence[str], count: int) -> AggregationResult:
		"""Run the full pipeline for a validated request."""
		if not genres:
			raise ValueError("At least one genre is required")
		if count < 1:
			raise ValueError("Count must be at least 1")

		quota = per_genre_quota(count, len(genres))  # per-genre target
		seen_ids: Set[str] = set()  # cross-genre uniqueness for this request
		collected: List[DetailRecord] = []  # details across all genres
		logger.info(f"[Aggregator] Collecting {count} movies for genres={list(genres)} (quota {quota}/genre)")

		for genre in genres:
			if len(collected) >= count:  # nothing left to fetch, skip remaining searches
				logger.debug(f"[Aggregator] Target reached before genre '{genre}'")
				break
			pool = self.search_genre(genre)  # raw hits
			picked = self.sampler.sample(pool, seen_ids, quota)  # unique, unseen, shuffled quota
			added = self.fetch_details(picked, seen_ids, collected, count)
			logger.debug(f"[Aggregator] Genre '{genre}': picked {len(picked)}, added {added}, total {len(collected)}")

		movies = shape_results(collected, count, self.sampler)  # final shuffle + truncate + shape
		logger.info(f"[Aggregator] Returning {len(movies)} of {count} requested movies")
		return AggregationResult(movies=movies, requested_genres=list(genres), requested_count=count)
