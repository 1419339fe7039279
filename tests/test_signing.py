"""Signing: known vector, field sensitivity, timestamp capture, headers."""

import hashlib
import hmac

import pytest

from referral_stats.errors import ClockError
from referral_stats.security.secrets import Credentials
from referral_stats.security.signing import (
    HmacSha256Signer,
    canonicalize_request,
    sign_request,
    unix_timestamp,
    validate_path,
)

PATH = "/v2/referral/stats"


def test_known_vector() -> None:
    sig = HmacSha256Signer(b"s").sign("GET", PATH, 1000)
    assert sig == "10edd790312deaf619066424c75fbafe505ea589e7f71085a9e4af4baa1dc34b"
    assert sig == hmac.new(b"s", b"1000GET/v2/referral/stats", hashlib.sha256).hexdigest()


def test_canonical_message_has_no_separators() -> None:
    assert canonicalize_request("get", PATH, 1000) == b"1000GET/v2/referral/stats"


def test_each_field_changes_signature() -> None:
    signer = HmacSha256Signer(b"s")
    base = signer.sign("GET", PATH, 1000)
    assert signer.sign("GET", PATH, 1001) == "8cb111e31b01bd9cf4cb31a4b2f4ab1ba00c779466b5b31ef9ee916e589acf56"
    assert signer.sign("GET", PATH, 1001) != base
    assert signer.sign("POST", PATH, 1000) != base
    assert signer.sign("GET", "/v2/referral", 1000) != base
    assert HmacSha256Signer(b"t").sign("GET", PATH, 1000) != base


def test_signature_is_lowercase_hex() -> None:
    sig = HmacSha256Signer(b"s").sign("GET", PATH, 1000)
    assert len(sig) == 64
    assert sig == sig.lower()
    int(sig, 16)


def test_sign_request_headers_and_url() -> None:
    creds = Credentials(api_key="k", api_secret="s")
    signed = sign_request(creds, "get", PATH, clock=lambda: 1000.9)
    assert signed.timestamp == 1000
    assert signed.method == "GET"
    assert signed.headers("k") == {
        "TS": "1000",
        "API-KEY": "k",
        "API-HMAC": "10edd790312deaf619066424c75fbafe505ea589e7f71085a9e4af4baa1dc34b",
    }
    assert signed.url("https://api.boltz.exchange") == "https://api.boltz.exchange/v2/referral/stats"
    # no slash normalization
    assert signed.url("https://host/") == "https://host//v2/referral/stats"


def test_pre_epoch_clock_raises_not_clamped() -> None:
    with pytest.raises(ClockError):
        unix_timestamp(lambda: -1.0)
    assert unix_timestamp(lambda: 0.0) == 0


@pytest.mark.parametrize("path", ["", "v2/referral/stats", None])
def test_invalid_path_rejected(path) -> None:
    creds = Credentials(api_key="k", api_secret="s")
    with pytest.raises(ValueError):
        sign_request(creds, "GET", path, clock=lambda: 1000)


def test_secret_not_in_repr() -> None:
    creds = Credentials(api_key="k", api_secret="hunter2")
    assert "hunter2" not in repr(creds)
    assert "hunter2" not in repr(HmacSha256Signer(b"hunter2"))


@pytest.mark.parametrize(
    "path",
    [
        "/v2/referral stats",
        "/v2/реферал",
        "/v2/referral/stats?from=1",
        "/v2/referral/stats#top",
        "/v2/%7Euser",
        "/v2/<stats>",
    ],
)
def test_path_that_would_be_reencoded_on_the_wire_is_rejected(path) -> None:
    with pytest.raises(ValueError):
        validate_path(path)


@pytest.mark.parametrize("path", ["/v2/referral/stats", "/v2/a%20b", "/v2/pair/BTC:L-BTC", "/v2/~user/x_y.z"])
def test_wire_safe_path_signed_verbatim(path) -> None:
    creds = Credentials(api_key="k", api_secret="s")
    assert sign_request(creds, "GET", path, clock=lambda: 1000).path == path


@pytest.mark.parametrize("method", ["", "GE T", "GET\n", None])
def test_invalid_method_rejected(method) -> None:
    creds = Credentials(api_key="k", api_secret="s")
    with pytest.raises(ValueError):
        sign_request(creds, method, PATH, clock=lambda: 1000)
