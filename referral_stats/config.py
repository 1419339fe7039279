# Boltz referral-stats client: endpoint, header names, env var names, timeouts.
# Secrets are never stored here; see referral_stats.security.secrets.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from referral_stats.errors import ConfigError

if TYPE_CHECKING:
    from referral_stats.security.secrets import SecretsProvider

DEFAULT_ENDPOINT = "https://api.boltz.exchange"
REFERRAL_STATS_PATH = "/v2/referral/stats"
DEFAULT_TIMEOUT_S = 10.0
USER_AGENT = "referral-stats/0.1 (python-requests)"

# Request headers
HEADER_TIMESTAMP = "TS"
HEADER_API_KEY = "API-KEY"
HEADER_SIGNATURE = "API-HMAC"

# Environment
API_KEY_ENV = "API_KEY"
API_SECRET_ENV = "API_SECRET"
ENDPOINT_ENV = "BOLTZ_API_URL"
TIMEOUT_ENV = "BOLTZ_API_TIMEOUT"


def parse_timeout(raw: str | float | None) -> float:
    """Positive float seconds; None -> DEFAULT_TIMEOUT_S."""
    if raw is None or raw == "":
        return DEFAULT_TIMEOUT_S
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"timeout must be a number, got {raw!r}") from None
    if not (math.isfinite(value) and value > 0):
        raise ConfigError(f"timeout must be a finite number > 0, got {value}")
    return value


@dataclass(frozen=True)
class ClientConfig:
    """Non-secret client settings."""

    endpoint: str = DEFAULT_ENDPOINT
    timeout_s: float = DEFAULT_TIMEOUT_S

    def __post_init__(self) -> None:
        if not self.endpoint:
            raise ConfigError("endpoint must not be empty")
        if not (math.isfinite(self.timeout_s) and self.timeout_s > 0):
            raise ConfigError(f"timeout must be a finite number > 0, got {self.timeout_s}")

    @classmethod
    def from_env(cls, provider: "SecretsProvider") -> "ClientConfig":
        """BOLTZ_API_URL and BOLTZ_API_TIMEOUT override the defaults."""
        return cls(
            endpoint=provider.get(ENDPOINT_ENV) or DEFAULT_ENDPOINT,
            timeout_s=parse_timeout(provider.get(TIMEOUT_ENV)),
        )
