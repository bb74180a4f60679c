"""
Sampling module.
De-duplicates a genre's candidate pool, shuffles it, and takes that genre's quota.
"""

import math  # ceil for per-genre quotas
import random  # unbiased shuffles
from typing import List, Optional, Sequence, Set, TypeVar

from loguru import logger

from .models import CandidateRecord

T = TypeVar("T")


def per_genre_quota(count: int, genre_count: int) -> int:
	"""Split the requested total evenly across genres, rounding up."""
	if genre_count < 1:
		raise ValueError("At least one genre is required")
	return math.ceil(count / genre_count)


class Sampler:
	"""
	Random sampling over candidate pools.
	- rng: random.Random instance; pass a seeded one for reproducible runs
	"""

	def __init__(self, rng: Optional[random.Random] = None):
		self.rng = rng or random.Random()

	def shuffled(self, items: Sequence[T]) -> List[T]:
		"""
		Return a shuffled copy. random.Random.shuffle is a Fisher-Yates shuffle,
		so every permutation is equally likely.
		"""
		out = list(items)
		self.rng.shuffle(out)
		return out

	def unique_unseen(self, pool: Sequence[CandidateRecord], seen_ids: Set[str]) -> List[CandidateRecord]:
		"""
		Keep the first occurrence of each id, dropping ids already selected in this request.
		seen_ids is read, never modified.
		"""
		kept: List[CandidateRecord] = []
		local: Set[str] = set()  # ids kept from this pool
		for c in pool:
			if not c.imdb_id or c.imdb_id in local or c.imdb_id in seen_ids:
				continue
			local.add(c.imdb_id)
			kept.append(c)
		return kept

	def sample(self, pool: Sequence[CandidateRecord], seen_ids: Set[str], quota: int) -> List[CandidateRecord]:
		"""De-duplicate, shuffle, and take the first `quota` candidates."""
		unique = self.unique_unseen(pool, seen_ids)
		picked = self.shuffled(unique)[:max(0, quota)]
		logger.debug(f"[Sampler] pool={len(pool)} unique_unseen={len(unique)} quota={quota} picked={len(picked)}")
		return picked
