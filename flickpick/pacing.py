"""
Client-side pacing for provider calls.
A Pacer waits a fixed interval after each call so a burst of sequential requests
stays under the provider's rate limit.
"""

import time  # default sleep implementation
from typing import Callable  # injectable sleep function

from loguru import logger  # console logger


class Pacer:
	"""
	Fixed post-call delay.
	- interval_s: seconds to wait after each call (0 disables waiting)
	- sleep: injectable for tests; defaults to time.sleep
	"""

	def __init__(self, interval_s: float, sleep: Callable[[float], None] = time.sleep, name: str = "pacer"):
		if interval_s < 0:
			raise ValueError("Pacing interval cannot be negative")
		self.interval_s = interval_s
		self.name = name
		self._sleep = sleep
		self.waits = 0  # how many times pause() actually slept

	@classmethod
	def disabled(cls, name: str = "disabled") -> "Pacer":
		"""A pacer that never waits."""
		return cls(0.0, name=name)

	def pause(self) -> None:
		"""Wait out the interval after a provider call."""
		if self.interval_s <= 0:
			return
		logger.trace(f"[Pacer] {self.name}: sleeping {self.interval_s:.3f}s")
		self._sleep(self.interval_s)
		self.waits += 1
