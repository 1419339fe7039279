# referral-stats
# Copyright (c) 2026 Mücahit Muzaffer Karafil (MchtMzffr)
# SPDX-License-Identifier: MIT
"""Secrets provider: env-based or static. No secrets in code or logs."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping

from referral_stats.config import API_KEY_ENV, API_SECRET_ENV
from referral_stats.errors import ConfigError


class SecretsProvider(ABC):
    """Abstract provider for secrets (API keys, tokens). Never log values."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return secret for key or None if not set."""
        ...


class EnvSecretsProvider(SecretsProvider):
    """Read secrets from environment variables (e.g. API_KEY -> os.environ['API_KEY'])."""

    def __init__(self, prefix: str = "", environ: Mapping[str, str] | None = None) -> None:
        self.prefix = prefix
        self._environ = os.environ if environ is None else environ

    def get(self, key: str) -> str | None:
        env_key = f"{self.prefix}{key}".replace(".", "_").upper()
        return self._environ.get(env_key)


class StaticSecretsProvider(SecretsProvider):
    """Fixed mapping; for tests and embedding."""

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = dict(values)

    def get(self, key: str) -> str | None:
        return self._values.get(key)


def check_header_value(name: str, value: str) -> str:
    """HTTP header values must be Latin-1, single-line, with no leading whitespace."""
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        raise ConfigError(f"{name} contains characters that cannot be sent in a header") from None
    if "\r" in value or "\n" in value:
        raise ConfigError(f"{name} must not contain line breaks")
    if value[:1].isspace():
        raise ConfigError(f"{name} must not start with whitespace")
    return value


@dataclass(frozen=True)
class Credentials:
    """API key (sent verbatim) and secret (HMAC key only, never sent)."""

    api_key: str
    api_secret: str = field(repr=False)

    def __post_init__(self) -> None:
        check_header_value(API_KEY_ENV, self.api_key)

    @property
    def secret_bytes(self) -> bytes:
        return self.api_secret.encode("utf-8")


def load_credentials(provider: SecretsProvider) -> Credentials:
    """Read API_KEY / API_SECRET once; empty values count as missing."""
    api_key = provider.get(API_KEY_ENV)
    api_secret = provider.get(API_SECRET_ENV)
    missing = [
        name
        for name, value in ((API_KEY_ENV, api_key), (API_SECRET_ENV, api_secret))
        if not value
    ]
    if missing:
        raise ConfigError(f"{', '.join(missing)} is not set")
    return Credentials(api_key=api_key, api_secret=api_secret)
