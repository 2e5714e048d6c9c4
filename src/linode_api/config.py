# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Client configuration model and environment loading."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import __version__
from .decoding import ResponseFormat
from .errors import ConfigurationError
from .transport import IpFamily, TransportOptions

DEFAULT_ENDPOINT: Final[str] = "https://api.linode.com/"
DEFAULT_USER_AGENT: Final[str] = f"linode-api-python/{__version__}"
ENV_PREFIX: Final[str] = "LINODE_"
API_KEY_ENV: Final[str] = f"{ENV_PREFIX}API_KEY"

_ENV_FIELDS: Final[tuple[str, ...]] = (
    "endpoint",
    "user_agent",
    "verify_peer",
    "ip_family",
    "timeout",
    "response_format",
    "raise_api_errors",
    "allow_insecure_scheme",
)


class ClientSettings(BaseModel):
    """Connection and decoding options shared by every call a client makes."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    endpoint: str = DEFAULT_ENDPOINT
    user_agent: str = DEFAULT_USER_AGENT
    verify_peer: bool = True
    ip_family: IpFamily = "ipv4"
    timeout: float = Field(default=30.0, gt=0)
    response_format: ResponseFormat = ResponseFormat.JSON
    raise_api_errors: bool = False
    allow_insecure_scheme: bool = False

    @field_validator("endpoint")
    @classmethod
    def endpoint_is_absolute(cls, value: str) -> str:
        if "://" not in value:
            raise ValueError("endpoint must be an absolute URL")
        return value

    @classmethod
    def create(cls, **values: object) -> ClientSettings:
        """Build settings, reporting invalid values as :class:`ConfigurationError`."""

        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid client settings: {exc}") from exc

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        prefix: str = ENV_PREFIX,
        **overrides: object,
    ) -> ClientSettings:
        """Load settings from ``LINODE_*`` environment variables.

        Args:
            environ: Environment mapping; defaults to :data:`os.environ`.
            prefix: Variable name prefix.
            **overrides: Explicit values taking precedence over the environment.

        Returns:
            ClientSettings: Validated settings.

        Raises:
            ConfigurationError: If a variable holds a value pydantic cannot coerce.
        """

        source = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for name in _ENV_FIELDS:
            raw = source.get(f"{prefix}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        values.update(overrides)
        return cls.create(**values)

    def transport_options(self) -> TransportOptions:
        """Return the connection options handed to the default transport."""

        return TransportOptions(
            user_agent=self.user_agent,
            verify_peer=self.verify_peer,
            ip_family=self.ip_family,
            timeout=self.timeout,
            allow_insecure_scheme=self.allow_insecure_scheme,
        )


__all__ = ["API_KEY_ENV", "DEFAULT_ENDPOINT", "DEFAULT_USER_AGENT", "ClientSettings"]
