# referral-stats
# Copyright (c) 2026 Mücahit Muzaffer Karafil (MchtMzffr)
# SPDX-License-Identifier: MIT
"""Redact credentials from header maps and log payloads before they leave the process."""

from __future__ import annotations

import re
from typing import Any, Mapping

REDACTED = "[REDACTED]"

REDACT_KEYS = frozenset(
    {
        "api_key",
        "api_secret",
        "api_hmac",
        "hmac",
        "secret",
        "signature",
        "password",
        "token",
        "authorization",
        "cookie",
    }
)

_SEPARATORS = re.compile(r"[-_\s]")


def _normalize(key: str) -> str:
    return _SEPARATORS.sub("", key.lower())


def redact_dict(
    d: Mapping[str, Any], key_subset: frozenset[str] | None = None
) -> dict[str, Any]:
    """Copy mapping with sensitive keys replaced by [REDACTED].

    Matching ignores case and -/_/space, so "API-KEY" matches "api_key".
    """
    norm_set = {_normalize(k) for k in (key_subset or REDACT_KEYS)}
    return _redact_impl(d, norm_set)


def _redact_impl(d: Mapping[str, Any], norm_set: set[str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in d.items():
        if _normalize(str(k)) in norm_set:
            out[k] = REDACTED
        elif isinstance(v, Mapping):
            out[k] = _redact_impl(v, norm_set)
        elif isinstance(v, list):
            out[k] = [_redact_impl(x, norm_set) if isinstance(x, Mapping) else x for x in v]
        else:
            out[k] = v
    return out
