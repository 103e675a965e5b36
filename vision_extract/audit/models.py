from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

NO_CONTENT_MARKER = "(no content)"


@dataclass(frozen=True)
class AuditRecord:
    """Redacted request/response/result trio for one invocation."""

    created_at: datetime
    redacted_request: dict[str, Any]
    raw_response: str
    text: str


@dataclass(frozen=True)
class AuditPaths:
    """Files written for one audit record."""

    run_key: str
    request: Path
    response: Path
    result: Path
