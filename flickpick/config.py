"""
Configuration module.
Reads process-wide settings from environment variables (and an optional .env file).
"""

# Standard libs for environment access and typing
import os  # environment variables
from dataclasses import dataclass  # immutable settings record
from typing import Mapping, Optional  # type hints

# python-dotenv lets local development keep the API key in a .env file
from dotenv import load_dotenv  # populate os.environ from .env if present

# Console logging
from loguru import logger  # console logger

from .errors import ConfigurationError  # raised on malformed values


DEFAULT_OMDB_BASE_URL = "http://www.omdbapi.com/"  # public OMDb endpoint
DEFAULT_MAX_COUNT = 200  # largest count a client may request


@dataclass(frozen=True)
class Settings:
	"""
	Process-wide settings shared by the API, the OMDb client and the CLI.
	Frozen: one instance may be shared by concurrent requests.
	"""
	omdb_api_key: Optional[str] = None  # required to serve requests
	omdb_base_url: str = DEFAULT_OMDB_BASE_URL  # provider endpoint
	http_timeout_s: float = 10.0  # per-call timeout for provider requests
	search_delay_s: float = 0.1  # pause after each search page
	detail_delay_s: float = 0.15  # pause after each detail lookup
	search_pages: int = 3  # pages queried per search term
	max_count: int = DEFAULT_MAX_COUNT  # upper bound for the requested count
	search_terms_path: Optional[str] = None  # optional JSON override of the genre table
	log_level: str = "INFO"  # loguru level for the API process

	@property
	def has_api_key(self) -> bool:
		return bool(self.omdb_api_key)

	def require_api_key(self) -> str:
		"""Return the API key or raise ConfigurationError when it is not configured."""
		if not self.omdb_api_key:
			raise ConfigurationError("OMDB API key not configured")
		return self.omdb_api_key


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
	raw = env.get(name)
	if raw is None or raw.strip() == "":
		return default
	try:
		value = float(raw)
	except ValueError:
		raise ConfigurationError(f"{name} must be a number, got {raw!r}")
	if value < 0:
		raise ConfigurationError(f"{name} must not be negative, got {raw!r}")
	return value


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
	raw = env.get(name)
	if raw is None or raw.strip() == "":
		return default
	try:
		value = int(raw)
	except ValueError:
		raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
	if value < 1:
		raise ConfigurationError(f"{name} must be at least 1, got {raw!r}")
	return value


def load_settings(env: Optional[Mapping[str, str]] = None, use_dotenv: bool = True) -> Settings:
	"""
	Build Settings from a mapping of environment variables.
	- env: defaults to os.environ (after loading .env when use_dotenv is True)
	"""
	if env is None:
		if use_dotenv:
			load_dotenv()  # no-op when there is no .env file
		env = os.environ  # live process environment

	api_key = (env.get("OMDB_API_KEY") or "").strip() or None  # blank counts as missing
	settings = Settings(
		omdb_api_key=api_key,
		omdb_base_url=env.get("OMDB_BASE_URL") or DEFAULT_OMDB_BASE_URL,
		http_timeout_s=_read_float(env, "OMDB_HTTP_TIMEOUT_SECONDS", 10.0),
		search_delay_s=_read_float(env, "OMDB_SEARCH_DELAY_SECONDS", 0.1),
		detail_delay_s=_read_float(env, "OMDB_DETAIL_DELAY_SECONDS", 0.15),
		search_pages=_read_int(env, "OMDB_SEARCH_PAGES", 3),
		max_count=_read_int(env, "FLICKPICK_MAX_COUNT", DEFAULT_MAX_COUNT),
		search_terms_path=env.get("FLICKPICK_SEARCH_TERMS_PATH") or None,
		log_level=(env.get("FLICKPICK_LOG_LEVEL") or "INFO").upper(),
	)
	logger.debug(
		f"[Config] base_url={settings.omdb_base_url} api_key_set={settings.has_api_key} "
		f"pages={settings.search_pages} delays=({settings.search_delay_s}s, {settings.detail_delay_s}s)"
	)
	return settings
