"""Client configuration.

Static venue constants live in ``connectors/databento/config.py``; this
module holds the tunables an application may override, optionally from
environment variables.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ConfigurationError

API_KEY_ENV = "DATABENTO_API_KEY"
API_KEY_PREFIX = "db-"

DEFAULT_BASE_URL = "https://hist.databento.com"
DEFAULT_USER_AGENT = "dbento-data/0.1"


class ClientConfig(BaseModel):
    """Transport and cache settings."""

    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = Field(15.0, gt=0)
    retry_attempts: int = Field(3, ge=1)
    retry_base_delay: float = Field(1.0, ge=0)
    quote_cache_ttl: float = Field(30.0, ge=0)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ClientConfig:
        """Build a config from ``DATABENTO_*`` variables, falling back to defaults.

        Recognized: DATABENTO_BASE_URL, DATABENTO_TIMEOUT,
        DATABENTO_RETRY_ATTEMPTS, DATABENTO_RETRY_BASE_DELAY,
        DATABENTO_QUOTE_CACHE_TTL.
        """
        env = os.environ if environ is None else environ
        mapping = {
            "base_url": "DATABENTO_BASE_URL",
            "timeout": "DATABENTO_TIMEOUT",
            "retry_attempts": "DATABENTO_RETRY_ATTEMPTS",
            "retry_base_delay": "DATABENTO_RETRY_BASE_DELAY",
            "quote_cache_ttl": "DATABENTO_QUOTE_CACHE_TTL",
        }
        values = {field: env[var] for field, var in mapping.items() if env.get(var)}
        return cls(**values)


def validate_api_key(api_key: str | None) -> str:
    """Return the key unchanged or raise ConfigurationError."""
    if not api_key:
        raise ConfigurationError(f"{API_KEY_ENV} is required")
    if not api_key.startswith(API_KEY_PREFIX):
        raise ConfigurationError(f'{API_KEY_ENV} must start with "{API_KEY_PREFIX}"')
    return api_key


def api_key_from_env(environ: dict[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    return validate_api_key(env.get(API_KEY_ENV))
