# referral-stats
# Copyright (c) 2026 Mücahit Muzaffer Karafil (MchtMzffr)
# SPDX-License-Identifier: MIT
"""Send one HMAC-signed request to the Boltz API and return the parsed JSON body.

No retries: every failure is raised once as a ReferralStatsError subclass.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import requests

from referral_stats.config import REFERRAL_STATS_PATH, USER_AGENT, ClientConfig
from referral_stats.errors import (
    ApiError,
    ConfigError,
    NetworkError,
    ParseError,
    ReferralStatsError,
)
from referral_stats.security.audit import AuditLogger
from referral_stats.security.redaction import redact_dict
from referral_stats.security.secrets import Credentials
from referral_stats.security.signing import sign_request

logger = logging.getLogger(__name__)

Document = Any


def _dispatch(
    session: requests.Session,
    method: str,
    url: str,
    headers: dict[str, str],
    timeout_s: float,
) -> requests.Response:
    try:
        return session.request(method, url, headers=headers, timeout=timeout_s)
    except (requests.exceptions.MissingSchema, requests.exceptions.InvalidSchema, requests.exceptions.InvalidURL) as e:
        raise ConfigError(f"invalid endpoint URL {url!r}: {e}") from e
    except (requests.exceptions.InvalidHeader, UnicodeEncodeError) as e:
        raise ConfigError(f"request header cannot be sent: {type(e).__name__}") from e
    except requests.exceptions.Timeout as e:
        raise NetworkError(f"request to {url} timed out after {timeout_s}s") from e
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"request to {url} failed: {type(e).__name__}: {e}") from e


def _parse(response: requests.Response) -> Document:
    """Non-2xx -> ApiError; malformed body -> ParseError."""
    if not 200 <= response.status_code < 300:
        raise ApiError(response.status_code, response.text or "")
    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"response body is not valid JSON: {e}") from e


def send_authenticated_request(
    method: str,
    path: str,
    credentials: Credentials,
    *,
    config: ClientConfig | None = None,
    session: requests.Session | None = None,
    clock: Callable[[], float] = time.time,
    audit: AuditLogger | None = None,
) -> Document:
    """
    Sign and send one request; return the parsed response document.

    Args:
        method: HTTP verb; upper-cased before signing.
        path: Resource path starting with "/" (no host, no query string).
        credentials: API key and secret, injected by the caller.
        config: Endpoint and timeout; defaults to ClientConfig().
        session: Reused if given; otherwise a session is opened and closed here.
        clock: Wall-clock source in seconds since the epoch.
        audit: Optional request audit log.

    Raises:
        ClockError, ConfigError, NetworkError, ApiError, ParseError.
    """
    config = config or ClientConfig()
    signed = sign_request(credentials, method, path, clock=clock)
    url = signed.url(config.endpoint)
    headers = signed.headers(credentials.api_key)
    headers["User-Agent"] = USER_AGENT
    logger.debug("%s %s headers=%s", signed.method, url, redact_dict(headers))

    t0 = time.monotonic()
    status: int | None = None
    try:
        if session is None:
            with requests.Session() as own_session:
                response = _dispatch(own_session, signed.method, url, headers, config.timeout_s)
        else:
            response = _dispatch(session, signed.method, url, headers, config.timeout_s)
        status = response.status_code
        latency_ms = round((time.monotonic() - t0) * 1000, 2)
        logger.debug("%s %s -> %s in %.2f ms", signed.method, url, status, latency_ms)
        document = _parse(response)
    except ReferralStatsError as e:
        if audit is not None:
            audit.log(
                "request_failed",
                {
                    "method": signed.method,
                    "path": signed.path,
                    "status": status,
                    "latency_ms": round((time.monotonic() - t0) * 1000, 2),
                    "error_kind": e.kind,
                },
            )
        raise
    if audit is not None:
        audit.log(
            "request_ok",
            {
                "method": signed.method,
                "path": signed.path,
                "status": status,
                "latency_ms": latency_ms,
            },
        )
    return document


class ReferralStatsClient:
    """Thin wrapper holding credentials, config and a reusable session."""

    def __init__(
        self,
        credentials: Credentials,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
        audit: AuditLogger | None = None,
    ):
        self.credentials = credentials
        self.config = config or ClientConfig()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.audit = audit

    def request(self, method: str, path: str) -> Document:
        return send_authenticated_request(
            method,
            path,
            self.credentials,
            config=self.config,
            session=self.session,
            audit=self.audit,
        )

    def get(self, path: str) -> Document:
        return self.request("GET", path)

    def referral_stats(self) -> Document:
        """GET /v2/referral/stats."""
        return self.get(REFERRAL_STATS_PATH)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
