"""
In-memory stand-ins for OMDb used across the tests.
No network access: every search and detail lookup is answered from dictionaries.
"""

from typing import Dict, Iterable, List, Optional, Tuple, Union

from flickpick.models import CandidateRecord, DetailRecord


def candidate(imdb_id: str, title: Optional[str] = None) -> CandidateRecord:
	return CandidateRecord(
		imdb_id=imdb_id,
		title=title or f"Movie {imdb_id}",
		year="2001",
		media_type="movie",
		poster=f"https://img.example/{imdb_id}.jpg",
	)


def detail(imdb_id: str, **overrides) -> DetailRecord:
	values = dict(
		imdb_id=imdb_id,
		title=f"Movie {imdb_id}",
		year="2001",
		rated="PG-13",
		runtime="101 min",
		genre="Action, Drama",
		director="Jane Doe",
		actors="A. Actor, B. Actor",
		plot="Things happen.",
		poster=f"https://img.example/{imdb_id}.jpg",
		ratings=[{"Source": "Internet Movie Database", "Value": "7.1/10"}],
		metascore="64",
		imdb_rating="7.1",
		imdb_votes="12,345",
		media_type="movie",
	)
	values.update(overrides)
	return DetailRecord(**values)


SearchKey = Union[str, Tuple[str, int]]


class FakeProvider:
	"""
	search_results: term -> hits for page 1, or (term, page) -> hits for a given page
	details: explicit DetailRecords by id; any other id gets a generated record
	failing_ids: ids whose detail lookup fails (returns None)
	"""

	def __init__(
		self,
		search_results: Optional[Dict[SearchKey, List[CandidateRecord]]] = None,
		details: Optional[Dict[str, DetailRecord]] = None,
		failing_ids: Iterable[str] = (),
	):
		self.search_results = search_results or {}
		self.details = details or {}
		self.failing_ids = set(failing_ids)
		self.search_calls: List[Tuple[str, int]] = []
		self.detail_calls: List[str] = []

	@property
	def calls(self) -> int:
		return len(self.search_calls) + len(self.detail_calls)

	def search(self, keyword: str, page: int = 1) -> List[CandidateRecord]:
		self.search_calls.append((keyword, page))
		if (keyword, page) in self.search_results:
			return list(self.search_results[(keyword, page)])
		if page == 1 and keyword in self.search_results:
			return list(self.search_results[keyword])
		return []

	def get_details(self, imdb_id: str) -> Optional[DetailRecord]:
		self.detail_calls.append(imdb_id)
		if imdb_id in self.failing_ids:
			return None
		return self.details.get(imdb_id) or detail(imdb_id)


class ExplodingProvider(FakeProvider):
	"""Raises from search to exercise the API's top-level failure handling."""

	def search(self, keyword: str, page: int = 1) -> List[CandidateRecord]:
		self.search_calls.append((keyword, page))
		raise RuntimeError("provider exploded")
