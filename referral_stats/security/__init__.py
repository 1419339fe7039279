"""Security: credentials, signing, redaction, request audit."""

from referral_stats.security.secrets import (
    Credentials,
    EnvSecretsProvider,
    SecretsProvider,
    StaticSecretsProvider,
    load_credentials,
)
from referral_stats.security.signing import (
    HmacSha256Signer,
    SignedRequest,
    SigningProvider,
    sign_request,
)
from referral_stats.security.redaction import redact_dict
from referral_stats.security.audit import AuditLogger

__all__ = [
    "Credentials",
    "SecretsProvider",
    "EnvSecretsProvider",
    "StaticSecretsProvider",
    "load_credentials",
    "SigningProvider",
    "HmacSha256Signer",
    "SignedRequest",
    "sign_request",
    "redact_dict",
    "AuditLogger",
]
