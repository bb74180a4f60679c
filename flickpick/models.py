"""
Data models for flickpick.
Defines the records that flow from a provider search through to the client response.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional  # lists, dicts and optional values


@dataclass
class CandidateRecord:
	"""
	A lightweight search hit returned by the provider's keyword search.
	Either promoted to a DetailRecord or discarded.
	"""
	imdb_id: str  # provider's external identifier (e.g., "tt0133093")
	title: str  # title as returned by the search endpoint
	year: str  # raw year string (may be a range like "2010–2012")
	media_type: str  # "movie", "series", ...
	poster: Optional[str] = None  # poster URL or the provider's "N/A" sentinel
	genre: Optional[str] = None  # search hits rarely carry genres


@dataclass
class DetailRecord:
	"""
	Full metadata for one selected candidate.
	Values are kept as the provider sends them; the shaper coerces types later.
	"""
	imdb_id: str  # external identifier
	title: str  # display title
	year: str  # raw year string
	rated: Optional[str] = None  # MPAA-style rating, e.g. "PG-13"
	released: Optional[str] = None  # release date string
	runtime: Optional[str] = None  # e.g. "136 min"
	genre: Optional[str] = None  # comma-separated genres
	director: Optional[str] = None  # comma-separated directors
	writer: Optional[str] = None  # comma-separated writers
	actors: Optional[str] = None  # comma-separated main cast
	plot: Optional[str] = None  # full plot text
	language: Optional[str] = None  # comma-separated languages
	country: Optional[str] = None  # comma-separated countries
	awards: Optional[str] = None  # awards summary
	poster: Optional[str] = None  # poster URL or "N/A"
	ratings: List[Dict[str, str]] = field(default_factory=list)  # [{"Source": ..., "Value": ...}]
	metascore: Optional[str] = None  # raw metascore string
	imdb_rating: Optional[str] = None  # raw IMDb rating string
	imdb_votes: Optional[str] = None  # raw vote count, e.g. "1,234,567"
	media_type: Optional[str] = None  # "movie", "series", ...
	dvd: Optional[str] = None  # DVD release date
	box_office: Optional[str] = None  # e.g. "$171,479,930"
	production: Optional[str] = None  # production company
	website: Optional[str] = None  # official site


@dataclass
class MovieResult:
	"""
	The shaped, client-facing record.
	Field names follow the JSON schema served by the API (see to_dict).
	"""
	id: str
	title: str
	year: Optional[int]
	genre: Optional[str]
	director: Optional[str]
	actors: Optional[str]
	plot: Optional[str]
	poster: Optional[str]
	imdb_rating: Optional[float]
	runtime: Optional[str]
	rated: Optional[str]
	released: Optional[str]
	language: Optional[str]
	country: Optional[str]
	awards: Optional[str]
	box_office: Optional[str]
	metascore: Optional[int]
	imdb_votes: Optional[str]
	type: Optional[str]
	ratings: List[Dict[str, str]] = field(default_factory=list)  # [{"source": ..., "value": ...}]

	def to_dict(self) -> Dict[str, Any]:
		"""Serialize with the camelCase keys the web client expects."""
		return {
			"id": self.id,
			"title": self.title,
			"year": self.year,
			"genre": self.genre,
			"director": self.director,
			"actors": self.actors,
			"plot": self.plot,
			"poster": self.poster,
			"imdbRating": self.imdb_rating,
			"runtime": self.runtime,
			"rated": self.rated,
			"released": self.released,
			"language": self.language,
			"country": self.country,
			"awards": self.awards,
			"boxOffice": self.box_office,
			"metascore": self.metascore,
			"imdbVotes": self.imdb_votes,
			"type": self.type,
			"ratings": [dict(r) for r in self.ratings],
		}


@dataclass
class AggregationResult:
	"""Outcome of one aggregation run, before it is wrapped into an HTTP payload."""
	movies: List[MovieResult]  # shaped, shuffled, truncated records
	requested_genres: List[str]  # genres exactly as the caller sent them
	requested_count: int  # the caller's requested total

	@property
	def total(self) -> int:
		return len(self.movies)
