# referral-stats
# Copyright (c) 2026 Mücahit Muzaffer Karafil (MchtMzffr)
# SPDX-License-Identifier: MIT
"""Error kinds for the signed request path; each maps to one CLI exit code."""

from __future__ import annotations


class ReferralStatsError(Exception):
    """Base for every failure the client surfaces."""

    exit_code = 1
    kind = "error"


class ConfigError(ReferralStatsError):
    """Missing credential or invalid configuration. Fatal, never retried."""

    exit_code = 2
    kind = "config"


class ClockError(ReferralStatsError):
    """System clock reports a time before the Unix epoch."""

    exit_code = 3
    kind = "clock"


class NetworkError(ReferralStatsError):
    """Connection, DNS, TLS or timeout failure."""

    exit_code = 4
    kind = "network"


class ParseError(ReferralStatsError):
    """Response body is not valid JSON."""

    exit_code = 5
    kind = "parse"


class ApiError(ReferralStatsError):
    """Server answered with a non-2xx status."""

    exit_code = 6
    kind = "api"

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body[:500]
        msg = f"HTTP {status_code}"
        if self.body:
            msg = f"{msg}: {self.body}"
        super().__init__(msg)
