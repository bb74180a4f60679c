"""
Response shaping module.
Turns provider detail records into the stable client-facing MovieResult schema.
"""

import re  # leading-year extraction
from typing import List, Optional, Sequence

from .models import DetailRecord, MovieResult
from .sampler import Sampler

NOT_AVAILABLE = "N/A"  # OMDb's placeholder for missing values

RE_LEADING_INT = re.compile(r"^\s*(-?\d+)")  # "2010–2012" -> 2010, "71" -> 71
RE_LEADING_FLOAT = re.compile(r"^\s*(-?\d+(?:\.\d+)?)")  # "7.8" -> 7.8


def parse_year(raw: Optional[str]) -> Optional[int]:
	"""Leading integer of the year string (series report ranges); None if there is none."""
	if not raw or raw == NOT_AVAILABLE:
		return None
	m = RE_LEADING_INT.match(raw)
	return int(m.group(1)) if m else None


def parse_rating(raw: Optional[str]) -> Optional[float]:
	if not raw or raw == NOT_AVAILABLE:
		return None
	m = RE_LEADING_FLOAT.match(raw)
	return float(m.group(1)) if m else None


def parse_metascore(raw: Optional[str]) -> Optional[int]:
	if not raw or raw == NOT_AVAILABLE:
		return None
	m = RE_LEADING_INT.match(raw)
	return int(m.group(1)) if m else None


def poster_url(raw: Optional[str]) -> Optional[str]:
	"""The literal "N/A" sentinel becomes None; any other value passes through unchanged."""
	if raw is None or raw == NOT_AVAILABLE:
		return None
	return raw


def _as_text(value) -> str:
	return "" if value is None else str(value)


def shape_movie(detail: DetailRecord) -> MovieResult:
	"""Map one DetailRecord to a MovieResult with coerced numeric fields."""
	return MovieResult(
		id=detail.imdb_id,
		title=detail.title,
		year=parse_year(detail.year),
		genre=detail.genre,
		director=detail.director,
		actors=detail.actors,
		plot=detail.plot,
		poster=poster_url(detail.poster),
		imdb_rating=parse_rating(detail.imdb_rating),
		runtime=detail.runtime,
		rated=detail.rated,
		released=detail.released,
		language=detail.language,
		country=detail.country,
		awards=detail.awards,
		box_office=detail.box_office,
		metascore=parse_metascore(detail.metascore),
		imdb_votes=detail.imdb_votes,
		type=detail.media_type,
		ratings=[
			{"source": _as_text(r.get("Source")), "value": _as_text(r.get("Value"))}
			for r in (detail.ratings or [])
		],
	)


def shape_results(details: Sequence[DetailRecord], count: int, sampler: Sampler) -> List[MovieResult]:
	"""
	Final shuffle, truncate to `count`, then shape.
	Returns fewer than `count` results when fewer details were collected.
	"""
	final = sampler.shuffled(details)[:max(0, count)]
	return [shape_movie(d) for d in final]
