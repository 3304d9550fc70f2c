"""Configuration helpers for the Attire Advisor app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Dict, Optional

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CONFIG_DIR = "config/environments"


def _as_bool(value: object, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _as_timeout(value: Optional[str]) -> float:
    try:
        return float(value) if value else DEFAULT_TIMEOUT_SECONDS
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS


def _config_file(env_name: Optional[str]) -> Optional[Path]:
    """``APP_CONFIG_PATH`` wins; otherwise ``<ATTIRE_CONFIG_DIR>/<APP_ENV>.yaml``."""

    explicit = os.getenv("APP_CONFIG_PATH")
    if explicit:
        return Path(explicit)
    if env_name:
        return Path(os.getenv("ATTIRE_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{env_name}.yaml"
    return None


def _read_flat_config(path: Path) -> Dict[str, str]:
    """Read top-level ``key: value`` pairs; comments and nested blocks are ignored."""

    values: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        if line[:1].isspace():
            continue
        key, sep, raw = line.partition(":")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        value = raw.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        values[key] = value
    return values


@dataclass
class AttireConfig:
    """Configuration values for the advisor.

    Only the Gemini API key is needed for recommendations; the Unsplash key is
    optional and image illustration degrades to placeholders without it.
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    unsplash_access_key: Optional[str] = None
    weather_enabled: bool = True
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "AttireConfig":
        """Build a config from an optional environment file plus environment variables.

        Variables always override the file (``google_api_key`` in the file is
        ``GOOGLE_API_KEY`` in the environment) so secrets never need to be
        written to disk.
        """

        env_name = os.getenv("APP_ENV")
        path = _config_file(env_name)
        file_values = _read_flat_config(path) if path and path.exists() else {}

        def lookup(key: str, default: Optional[str] = None) -> Optional[str]:
            return os.getenv(key.upper(), file_values.get(key, default))

        return cls(
            api_key=lookup("google_api_key"),
            model=lookup("model") or DEFAULT_GEMINI_MODEL,
            unsplash_access_key=lookup("unsplash_access_key"),
            weather_enabled=_as_bool(lookup("weather_enabled"), True),
            request_timeout_seconds=_as_timeout(lookup("request_timeout_seconds")),
            log_level=(lookup("log_level") or "INFO").upper(),
            environment=env_name,
        )
