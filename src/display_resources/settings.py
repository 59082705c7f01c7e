"""Resolver configuration using pydantic-settings.

Values come from keyword arguments first, then ``DISPLAY_RESOURCES_*``
environment variables, then the defaults below.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from display_resources.duration import parse_duration
from display_resources.types import Duration

ENV_PREFIX = "DISPLAY_RESOURCES_"
DEFAULT_USER_AGENT = "display-resources/0.1.0"


class ResolverSettings(BaseSettings):
    """Configuration for a ResourceResolver.

    Environment (all optional):
        DISPLAY_RESOURCES_CACHE_TTL: How long fetched URL content stays valid
        DISPLAY_RESOURCES_READ_TIMEOUT: Network read timeout
        DISPLAY_RESOURCES_LEGACY_EXTENSION: Extension of legacy display files
        DISPLAY_RESOURCES_FILE_EXTENSION: Extension preferred over the legacy one
        DISPLAY_RESOURCES_TRUST_SELF_SIGNED: Accept any certificate for https
        DISPLAY_RESOURCES_SINGLE_FLIGHT: Share one fetch between concurrent misses
        DISPLAY_RESOURCES_USER_AGENT: Sent with every URL read

    A bare number for a duration means milliseconds.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        frozen=True,
        extra="ignore",
    )

    cache_ttl: Duration = Field(
        default="60s", description="How long fetched URL content stays valid"
    )
    read_timeout: Duration = Field(
        default=10_000, description="Network read timeout, milliseconds if numeric"
    )
    legacy_extension: str = Field(
        default="opi", description="Extension of legacy display files"
    )
    file_extension: str = Field(
        default="bob", description="Extension preferred over the legacy one"
    )
    trust_self_signed: bool = Field(
        default=True, description="Accept any certificate and hostname for https"
    )
    single_flight: bool = Field(
        default=False, description="Share one fetch between concurrent misses"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="User-Agent for URL reads"
    )

    @field_validator("cache_ttl", "read_timeout", mode="before")
    @classmethod
    def validate_duration(cls, v: Any) -> Any:
        """Accept unit strings or milliseconds, including numeric strings."""
        if isinstance(v, str):
            v = v.strip()
            try:
                v = float(v)
            except ValueError:
                pass
            else:
                if v.is_integer():
                    v = int(v)
        parse_duration(v)
        return v

    @field_validator("legacy_extension", "file_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Strip a leading dot and reject empty extensions."""
        v = v.strip().lstrip(".")
        if not v:
            raise ValueError("File extensions must not be empty")
        return v

    @property
    def cache_ttl_ms(self) -> int:
        """Cache TTL in milliseconds."""
        return parse_duration(self.cache_ttl)

    @property
    def read_timeout_ms(self) -> int:
        """Read timeout in milliseconds."""
        return parse_duration(self.read_timeout)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = ENV_PREFIX,
    ) -> ResolverSettings:
        """Build settings from the process environment or a given mapping.

        Raises:
            pydantic.ValidationError: If a value cannot be parsed
        """
        if environ is None:
            return cls(_env_prefix=prefix)
        values = {
            name: environ[f"{prefix}{name.upper()}"]
            for name in cls.model_fields
            if f"{prefix}{name.upper()}" in environ
        }
        return cls(_env_prefix=prefix, **values)
