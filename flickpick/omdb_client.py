"""
OMDb API client.
Wraps the two provider calls the aggregator needs (keyword search and detail lookup).
Failures never propagate: they are logged and reported as "no results".
"""

# HTTP client with connection pooling
import requests  # make web requests to OMDb
# Typing helpers for clear API contracts
from typing import Any, Dict, List, Optional  # type hints

# Console logging
from loguru import logger  # console logger

from .config import Settings  # process-wide configuration
from .models import CandidateRecord, DetailRecord  # parsed provider records
from .pacing import Pacer  # post-call delay policy


class OmdbClient:
	"""
	Thin OMDb client used as the aggregator's provider.
	- api_key: OMDb key sent as the 'apikey' query parameter
	- search_pacer/detail_pacer: waits applied after every search page / detail lookup
	- session: injectable requests.Session (one is created when omitted)
	"""

	def __init__(
		self,
		api_key: str,
		base_url: str = "http://www.omdbapi.com/",
		timeout_s: float = 10.0,
		search_pacer: Optional[Pacer] = None,
		detail_pacer: Optional[Pacer] = None,
		session: Optional[requests.Session] = None,
	):
		if not api_key:
			raise ValueError("OMDb API key is required")
		self.api_key = api_key  # credential
		self.base_url = base_url  # endpoint root
		self.timeout_s = timeout_s  # per-request timeout
		self.search_pacer = search_pacer or Pacer.disabled("search")  # no wait unless configured
		self.detail_pacer = detail_pacer or Pacer.disabled("detail")
		self.session = session or requests.Session()  # pooled connections
		self.calls = 0  # outbound requests issued (diagnostics)

	@classmethod
	def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "OmdbClient":
		"""Build a client with the configured key, endpoint, timeout and pacing delays."""
		return cls(
			api_key=settings.require_api_key(),
			base_url=settings.omdb_base_url,
			timeout_s=settings.http_timeout_s,
			search_pacer=Pacer(settings.search_delay_s, name="search"),
			detail_pacer=Pacer(settings.detail_delay_s, name="detail"),
			session=session,
		)

	def close(self) -> None:
		self.session.close()

	def __enter__(self) -> "OmdbClient":
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.close()

	def search(self, keyword: str, page: int = 1) -> List[CandidateRecord]:
		"""
		Keyword search restricted to movies.
		Returns an empty list on network errors, malformed JSON, or a provider-reported failure.
		"""
		if not keyword or not keyword.strip():  # nothing to search for
			return []
		try:
			data = self._get({"s": keyword, "type": "movie", "page": page})
		finally:
			self.search_pacer.pause()  # wait even when the call failed

		if data is None:
			return []
		if data.get("Response") != "True" or not isinstance(data.get("Search"), list):
			# "Movie not found!" is routine past the last page
			logger.debug(f"[OMDb] No results for '{keyword}' page {page}: {data.get('Error', 'unknown error')}")
			return []

		candidates = []  # accumulator
		for item in data["Search"]:
			if not isinstance(item, dict) or not item.get("imdbID"):
				continue  # skip malformed hits
			candidates.append(self._parse_candidate(item))
		logger.debug(f"[OMDb] '{keyword}' page {page}: {len(candidates)} candidates")
		return candidates

	def get_details(self, imdb_id: str) -> Optional[DetailRecord]:
		"""
		Full-plot detail lookup by IMDb id.
		Returns None on network errors, malformed JSON, or a provider-reported failure.
		"""
		try:
			data = self._get({"i": imdb_id, "plot": "full"})
		finally:
			self.detail_pacer.pause()  # wait even when the call failed

		if data is None:
			return None
		if data.get("Response") != "True":
			logger.warning(f"[OMDb] Detail lookup failed for {imdb_id}: {data.get('Error', 'unknown error')}")
			return None
		return self._parse_detail(data, fallback_id=imdb_id)

	def _get(self, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
		"""Issue one GET against the OMDb endpoint and decode its JSON body."""
		query = {"apikey": self.api_key}
		query.update(params)
		self.calls += 1
		try:
			response = self.session.get(self.base_url, params=query, timeout=self.timeout_s)
			data = response.json()  # OMDb reports errors inside a JSON body
		except requests.RequestException as e:  # connection errors, timeouts, ...
			logger.warning(f"[OMDb] Request failed for {self._describe(params)}: {e}")
			return None
		except ValueError as e:  # body was not JSON
			logger.warning(f"[OMDb] Malformed response for {self._describe(params)}: {e}")
			return None

		if not isinstance(data, dict):
			logger.warning(f"[OMDb] Unexpected payload type {type(data).__name__} for {self._describe(params)}")
			return None
		return data

	@staticmethod
	def _describe(params: Dict[str, Any]) -> str:
		if "s" in params:
			return f"search '{params['s']}' page {params.get('page', 1)}"
		return f"details {params.get('i')}"

	@staticmethod
	def _text(value: Any) -> Optional[str]:
		"""Provider strings as str; null stays None, numbers and other scalars are stringified."""
		if value is None:
			return None
		if isinstance(value, (dict, list)):  # structured values have no text form here
			return None
		return str(value)

	@classmethod
	def _parse_candidate(cls, item: Dict[str, Any]) -> CandidateRecord:
		return CandidateRecord(
			imdb_id=str(item.get("imdbID", "")),
			title=cls._text(item.get("Title")) or "",
			year=cls._text(item.get("Year")) or "",
			media_type=cls._text(item.get("Type")) or "",
			poster=cls._text(item.get("Poster")),
			genre=cls._text(item.get("Genre")),
		)

	@classmethod
	def _parse_detail(cls, data: Dict[str, Any], fallback_id: str) -> DetailRecord:
		text = cls._text
		ratings = data.get("Ratings")
		return DetailRecord(
			imdb_id=str(data.get("imdbID") or fallback_id),  # keep the id we asked for if absent
			title=text(data.get("Title")) or "",
			year=text(data.get("Year")) or "",
			rated=text(data.get("Rated")),
			released=text(data.get("Released")),
			runtime=text(data.get("Runtime")),
			genre=text(data.get("Genre")),
			director=text(data.get("Director")),
			writer=text(data.get("Writer")),
			actors=text(data.get("Actors")),
			plot=text(data.get("Plot")),
			language=text(data.get("Language")),
			country=text(data.get("Country")),
			awards=text(data.get("Awards")),
			poster=text(data.get("Poster")),
			ratings=[
				{"Source": text(r.get("Source")) or "", "Value": text(r.get("Value")) or ""}
				for r in ratings if isinstance(r, dict)
			] if isinstance(ratings, list) else [],
			metascore=text(data.get("Metascore")),
			imdb_rating=text(data.get("imdbRating")),
			imdb_votes=text(data.get("imdbVotes")),
			media_type=text(data.get("Type")),
			dvd=text(data.get("DVD")),
			box_office=text(data.get("BoxOffice")),
			production=text(data.get("Production")),
			website=text(data.get("Website")),
		)
