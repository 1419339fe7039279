"""HMAC-SHA256 request signing: timestamp + METHOD + path, lowercase hex."""

from __future__ import annotations

import hashlib
import hmac
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable
from urllib.parse import quote

from referral_stats.config import HEADER_API_KEY, HEADER_SIGNATURE, HEADER_TIMESTAMP
from referral_stats.errors import ClockError
from referral_stats.security.secrets import Credentials


class SigningProvider(ABC):
    """Sign requests for the live API; the timestamp is the freshness marker."""

    @abstractmethod
    def sign(self, method: str, path: str, timestamp: int) -> str:
        """Return signature string."""
        ...


def canonicalize_request(method: str, path: str, timestamp: int) -> bytes:
    """Message the server verifies: f"{ts}{METHOD}{path}", no separators."""
    return f"{timestamp}{method.upper()}{path}".encode("utf-8")


class HmacSha256Signer(SigningProvider):
    """Keyed by the raw UTF-8 bytes of the API secret."""

    def __init__(self, secret: bytes) -> None:
        self._secret = secret

    def sign(self, method: str, path: str, timestamp: int) -> str:
        message = canonicalize_request(method, path, timestamp)
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()

    def __repr__(self) -> str:
        return "HmacSha256Signer(secret=[REDACTED])"


def unix_timestamp(clock: Callable[[], float] = time.time) -> int:
    """Whole seconds since the epoch; a pre-epoch clock raises ClockError."""
    now = clock()
    if now < 0:
        raise ClockError(f"system clock is before the Unix epoch ({now})")
    return int(now)


# Characters requests leaves as-is when it requotes a URL.
_PATH_SAFE = "!$%&'()*+,/:;=@[]~"
# %XX escapes of unreserved characters, which requests decodes before sending.
_UNRESERVED_ESCAPE = re.compile(r"%(?:3[0-9]|[46][1-9a-fA-F]|[57][0-9aA]|2[dDeE]|5[fF]|7[eE])")
_METHOD = re.compile(r"[A-Za-z]+")


def validate_path(path: str) -> str:
    """Path is signed byte-for-byte as the server will receive it.

    No query string or fragment: the signed message covers the path only. Anything
    requests would re-encode on the wire (spaces, non-ASCII, %-escaped unreserved
    characters) is rejected so the server verifies the same string that was signed.
    """
    if not isinstance(path, str) or not path:
        raise ValueError("path must be a non-empty string")
    if not path.startswith("/"):
        raise ValueError(f"path must start with '/', got {path!r}")
    if "?" in path or "#" in path:
        raise ValueError(f"path must not carry a query string or fragment, got {path!r}")
    if quote(path, safe=_PATH_SAFE) != path or _UNRESERVED_ESCAPE.search(path):
        raise ValueError(f"path must be ASCII and already percent-encoded, got {path!r}")
    return path


def validate_method(method: str) -> str:
    if not isinstance(method, str) or not _METHOD.fullmatch(method):
        raise ValueError(f"method must be a non-empty alphabetic HTTP verb, got {method!r}")
    return method.upper()


@dataclass(frozen=True)
class SignedRequest:
    """Ephemeral signed request; built right before dispatch."""

    timestamp: int
    method: str
    path: str
    signature: str

    def headers(self, api_key: str) -> dict[str, str]:
        return {
            HEADER_TIMESTAMP: str(self.timestamp),
            HEADER_API_KEY: api_key,
            HEADER_SIGNATURE: self.signature,
        }

    def url(self, endpoint: str) -> str:
        """Plain concatenation; no slash normalization."""
        return f"{endpoint}{self.path}"


def sign_request(
    credentials: Credentials,
    method: str,
    path: str,
    clock: Callable[[], float] = time.time,
) -> SignedRequest:
    """Capture the timestamp and sign method/path with the credentials' secret."""
    method = validate_method(method)
    validate_path(path)
    timestamp = unix_timestamp(clock)
    signature = HmacSha256Signer(credentials.secret_bytes).sign(method, path, timestamp)
    return SignedRequest(timestamp=timestamp, method=method, path=path, signature=signature)
