"""referral-stats: HMAC-signed client for the Boltz referral stats endpoint."""

__version__ = "0.1.0"

from referral_stats.errors import (  # noqa: E402
    ApiError,
    ClockError,
    ConfigError,
    NetworkError,
    ParseError,
    ReferralStatsError,
)
from referral_stats.client import ReferralStatsClient, send_authenticated_request  # noqa: E402

__all__ = [
    "__version__",
    "send_authenticated_request",
    "ReferralStatsClient",
    "ReferralStatsError",
    "ConfigError",
    "ClockError",
    "NetworkError",
    "ParseError",
    "ApiError",
]
