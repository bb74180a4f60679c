"""
Exception types raised by flickpick.
Provider call failures are not represented here: the OMDb client logs them and returns empty results.
"""


class FlickpickError(Exception):
	"""Base class for all flickpick errors."""


class ConfigurationError(FlickpickError):
	"""Process configuration is missing or malformed (e.g., no OMDb API key)."""


class InvalidRequestError(FlickpickError):
	"""The client sent a request body or query that cannot be served."""
