"""Configuration management for the API contract suite.

This module centralizes environment-driven configuration for every API the
suite exercises (JSONPlaceholder, ReqRes, HTTPBin, Dog API, Cat Facts). It
builds on ``pydantic_settings.BaseSettings`` so configuration can be provided
via environment variables, ``.env`` files, or defaults.

Highlights
- Strongly-typed settings with sensible defaults
- One place to discover the environment variables the suite honours
- Small per-API subclasses that only add the target's base URL

Usage
- Build the config for one API: ``config = HttpBinConfig()``
- Or select dynamically: ``config = get_config("httpbin")``
"""

from typing import Dict, Type

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration shared by all API suites.

    Field names double as environment variable names (case-insensitive),
    e.g. ``API_TIMEOUT_SECONDS=10``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    api_env: str = Field(default="local")

    # Logging
    api_log_level: str = Field(default="INFO")
    api_log_format: str = Field(default="console")
    api_request_logging: bool = Field(default=True)

    # Client
    api_timeout_seconds: float = Field(default=5.0, gt=0)
    api_slow_timeout_seconds: float = Field(default=15.0, gt=0)

    # Scenario knobs
    api_concurrency: int = Field(default=5, ge=1)
    api_max_response_ms: int = Field(default=5000, gt=0)

    @property
    def base_url(self) -> str:
        """Base URL of the API under test; set by the per-API subclasses."""
        raise NotImplementedError(f"{type(self).__name__} has no target API")

    def default_headers(self) -> Dict[str, str]:
        """Extra headers the target API requires on every request."""
        return {}


class JsonPlaceholderConfig(BaseConfig):
    """Configuration for the JSONPlaceholder fake REST API."""

    api_jsonplaceholder_url: str = Field(default="https://jsonplaceholder.typicode.com")

    @property
    def base_url(self) -> str:
        return self.api_jsonplaceholder_url


class ReqResConfig(BaseConfig):
    """Configuration for the ReqRes API.

    ReqRes rejects anonymous traffic, so every request carries the
    ``x-api-key`` header taken from ``API_REQRES_KEY``.
    """

    api_reqres_url: str = Field(default="https://reqres.in/api")
    api_reqres_key: str = Field(default="reqres-free-v1")

    @property
    def base_url(self) -> str:
        return self.api_reqres_url

    def default_headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_reqres_key}


class HttpBinConfig(BaseConfig):
    """Configuration for the HTTPBin echo service."""

    api_httpbin_url: str = Field(default="https://httpbin.org")

    @property
    def base_url(self) -> str:
        return self.api_httpbin_url


class DogApiConfig(BaseConfig):
    """Configuration for the Dog CEO API."""

    api_dog_url: str = Field(default="https://dog.ceo/api")

    @property
    def base_url(self) -> str:
        return self.api_dog_url


class CatFactsConfig(BaseConfig):
    """Configuration for the Cat Facts API."""

    api_catfacts_url: str = Field(default="https://catfact.ninja")

    @property
    def base_url(self) -> str:
        return self.api_catfacts_url


CONFIG_MAP: Dict[str, Type[BaseConfig]] = {
    "jsonplaceholder": JsonPlaceholderConfig,
    "reqres": ReqResConfig,
    "httpbin": HttpBinConfig,
    "dog-api": DogApiConfig,
    "cat-facts": CatFactsConfig,
}


def get_config(api_name: str) -> BaseConfig:
    """Get configuration for a specific API.

    Parameters
    - api_name: Literal name: ``jsonplaceholder``, ``reqres``, ``httpbin``,
      ``dog-api``, or ``cat-facts``.

    Returns
    - A concrete ``BaseConfig`` subclass pre-wired to read the right env vars.
    """
    try:
        config_class = CONFIG_MAP[api_name]
    except KeyError:
        raise ValueError(f"Unknown API: {api_name}") from None
    return config_class()
