"""
Genre search-term table.
Maps each supported genre tag to the keyword synonyms used to widen provider searches,
and resolves loosely spelled tags ("scifi", "comdy") to the tags the table knows.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # read the optional override file
from pathlib import Path  # filesystem-safe paths
from typing import Dict, List, Mapping, Optional, Sequence  # type hints

# Fuzzy matching so small typos still hit a known genre
from rapidfuzz import process, fuzz  # fuzzy matching utilities

# Console logging
from loguru import logger  # console logger

from .errors import ConfigurationError  # malformed override file


class SearchTermTable:
	"""
	Static mapping from genre tag to an ordered list of keyword synonyms.
	Unknown tags are searched literally; the table is never persisted.
	"""

	# Built-in table: genre tag → keywords searched for that genre
	GENRE_SEARCH_TERMS: Dict[str, List[str]] = {
		'action': ['action', 'fight', 'war', 'battle', 'hero'],
		'comedy': ['comedy', 'funny', 'laugh', 'humor', 'comic'],
		'drama': ['drama', 'story', 'life', 'family', 'love'],
		'horror': ['horror', 'scary', 'ghost', 'evil', 'dark'],
		'romance': ['love', 'romance', 'heart', 'wedding', 'couple'],
		'thriller': ['thriller', 'suspense', 'mystery', 'crime', 'detective'],
		'fantasy': ['fantasy', 'magic', 'wizard', 'dragon', 'adventure'],
		'sci-fi': ['space', 'future', 'alien', 'robot', 'science'],
		'animation': ['animation', 'cartoon', 'animated', 'disney', 'pixar'],
		'documentary': ['documentary', 'true', 'real', 'history', 'nature'],
	}

	# Common user phrasings → table tag
	GENRE_ALIASES: Dict[str, str] = {
		'sci fi': 'sci-fi',  # spaced form
		'scifi': 'sci-fi',  # common variant
		'sci-fy': 'sci-fi',  # typo variant
		'science fiction': 'sci-fi',
		'science-fiction': 'sci-fi',
		'romantic': 'romance',
		'animated': 'animation',
		'cartoon': 'animation',
		'comedies': 'comedy',
		'documentaries': 'documentary',
	}

	FUZZY_MIN_SCORE = 90  # rapidfuzz ratio needed to accept a near-miss spelling

	def __init__(self, terms: Optional[Mapping[str, Sequence[str]]] = None):
		"""Build the table from a mapping (defaults to the built-in GENRE_SEARCH_TERMS)."""
		source = terms if terms is not None else self.GENRE_SEARCH_TERMS
		self._terms: Dict[str, List[str]] = {}
		for tag, keywords in source.items():
			cleaned = [str(k).strip() for k in keywords if str(k).strip()]  # drop blanks
			if not cleaned:
				raise ConfigurationError(f"Genre '{tag}' has no search terms")
			self._terms[str(tag).strip().lower()] = cleaned
		# Aliases only apply when they point at a tag this table actually has
		self._aliases = {k: v for k, v in self.GENRE_ALIASES.items() if v in self._terms}
		self._choices = sorted(list(self._terms.keys()) + list(self._aliases.keys()))  # fuzzy targets
		logger.debug(f"[SearchTerms] Table ready with {len(self._terms)} genres")

	@classmethod
	def from_json_file(cls, filepath: str) -> "SearchTermTable":
		"""
		Load a table from a JSON object of the form {"genre": ["term", ...], ...}.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise ConfigurationError(f"Search term file not found: {filepath}")

		logger.info(f"[SearchTerms] Loading genre search terms from {filepath}...")
		try:
			with open(filepath, 'r', encoding='utf-8') as f:
				data = json.load(f)
		except json.JSONDecodeError as e:
			raise ConfigurationError(f"Invalid JSON in {filepath}: {e}")

		if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
			raise ConfigurationError(f"{filepath} must map genre names to lists of search terms")
		return cls(data)

	def genres(self) -> List[str]:
		"""Known genre tags in table order."""
		return list(self._terms.keys())

	def as_dict(self) -> Dict[str, List[str]]:
		return {tag: list(terms) for tag, terms in self._terms.items()}

	def resolve_genre(self, tag: str) -> Optional[str]:
		"""
		Map a user-supplied tag to a known table tag.
		Exact (case-insensitive) hits win, then aliases, then a close fuzzy match.
		Returns None when the tag should be searched literally.
		"""
		key = (tag or '').strip().lower()
		if not key:
			return None
		if key in self._terms:
			return key
		if key in self._aliases:
			return self._aliases[key]

		match = process.extractOne(key, self._choices, scorer=fuzz.ratio)
		if match and match[1] >= self.FUZZY_MIN_SCORE:
			resolved = self._aliases.get(match[0], match[0])
			logger.debug(f"[SearchTerms] Fuzzy genre match: '{tag}' -> '{resolved}' (score={match[1]:.0f})")
			return resolved
		return None

	def terms_for(self, tag: str) -> List[str]:
		"""Search terms for a tag; an unknown tag is its own sole term."""
		resolved = self.resolve_genre(tag)
		if resolved is None:
			logger.debug(f"[SearchTerms] Unknown genre '{tag}', searching it literally")
			return [tag]
		return list(self._terms[resolved])


def load_search_terms(filepath: Optional[str] = None) -> SearchTermTable:
	"""Return the override table when a path is configured, else the built-in one."""
	if filepath:
		return SearchTermTable.from_json_file(filepath)
	return SearchTermTable()
