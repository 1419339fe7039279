"""Request audit: one JSON line per request in <run_dir>/request_audit.jsonl; no secrets."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from referral_stats.errors import ConfigError
from referral_stats.security.redaction import redact_dict

AUDIT_FILENAME = "request_audit.jsonl"


class AuditLogger:
    """Append request events (redacted) to request_audit.jsonl."""

    def __init__(self, run_dir: Path):
        self.run_dir = Path(run_dir)
        self.path = self.run_dir / AUDIT_FILENAME
        try:
            self.run_dir.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "a", encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"cannot open audit dir {self.run_dir}: {e.strerror or e}") from e

    def log(self, event_type: str, payload: dict[str, Any] | None = None) -> None:
        """Write one audit line; payload is redacted again as a guard."""
        record = {"event": event_type, **redact_dict(payload or {})}
        self._file.write(json.dumps(record, default=str) + "\n")
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
