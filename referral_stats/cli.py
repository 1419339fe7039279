"""Command line entry: read credentials once, send the signed request, print indented JSON."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Mapping, Sequence

from referral_stats import __version__
from referral_stats.client import send_authenticated_request
from referral_stats.config import REFERRAL_STATS_PATH, ClientConfig
from referral_stats.errors import ReferralStatsError
from referral_stats.security.audit import AuditLogger
from referral_stats.security.secrets import EnvSecretsProvider, load_credentials
from referral_stats.security.signing import validate_method, validate_path

logger = logging.getLogger(__name__)


def _path_arg(value: str) -> str:
    try:
        return validate_path(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _method_arg(value: str) -> str:
    try:
        return validate_method(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="referral-stats",
        description="Query Boltz referral stats with an HMAC-signed request (API_KEY / API_SECRET from env)",
    )
    ap.add_argument("--path", type=_path_arg, default=REFERRAL_STATS_PATH, help="Resource path, must start with '/'")
    ap.add_argument("--method", type=_method_arg, default="GET", help="HTTP method (default: GET)")
    ap.add_argument("--endpoint", default=None, help="Base URL (default: $BOLTZ_API_URL or https://api.boltz.exchange)")
    ap.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    ap.add_argument("--audit-dir", type=Path, default=None, help="Append request_audit.jsonl to this directory")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr (credentials redacted)")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None, env: Mapping[str, str] | None = None) -> int:
    """Return process exit code: 0 after printing the document, the error's exit_code otherwise."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    provider = EnvSecretsProvider(environ=env)
    audit = None
    try:
        credentials = load_credentials(provider)
        config = ClientConfig.from_env(provider)
        if args.endpoint:
            config = dataclasses.replace(config, endpoint=args.endpoint)
        if args.timeout is not None:
            config = dataclasses.replace(config, timeout_s=args.timeout)
        if args.audit_dir is not None:
            audit = AuditLogger(args.audit_dir)
        document = send_authenticated_request(
            args.method, args.path, credentials, config=config, audit=audit
        )
    except ReferralStatsError as e:
        logger.debug("request failed", exc_info=True)
        print(f"error ({e.kind}): {e}", file=sys.stderr)
        return e.exit_code
    finally:
        if audit is not None:
            audit.close()
    print(json.dumps(document, indent=2, ensure_ascii=False))
    return 0
