"""Persists the redacted audit trail of each extraction run."""

import json
import secrets
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from vision_extract.audit.models import NO_CONTENT_MARKER, AuditPaths, AuditRecord
from vision_extract.audit.redaction import redact_request, scrub
from vision_extract.logging.logger import Log
from vision_extract.request.models import SerializedRequest

_MAX_KEY_ATTEMPTS = 5


def error_document(error: BaseException) -> str:
    return json.dumps(
        {"error": {"type": type(error).__name__, "message": str(error)}},
        indent=2,
    )


class AuditLogger:
    """Writes <key>.request.json, <key>.response.json and <key>.response.md."""

    def __init__(self, log_dir: Path, redact_values: Iterable[str] = ()) -> None:
        self._log_dir = log_dir
        self._redact_values = [v for v in redact_values if v]

    def record(
        self,
        request: SerializedRequest,
        *,
        raw_response: str | None,
        text: str | None,
        error: BaseException | None = None,
    ) -> AuditRecord:
        """Build an immutable, redacted record of one run."""
        if raw_response is None:
            raw_response = error_document(error) if error is not None else ""
        if text is None or not text.strip():
            reason = str(error) if error is not None else "no content returned"
            text = f"{NO_CONTENT_MARKER}\n\n{reason}\n"
        return AuditRecord(
            created_at=datetime.now(),
            redacted_request=redact_request(request.request.model_dump(exclude_none=True)),
            raw_response=raw_response,
            text=text,
        )

    def write(self, record: AuditRecord, extra_redact_values: Iterable[str] = ()) -> AuditPaths:
        """Persist ``record``; every artifact is scrubbed of secrets first.

        Raises:
            OSError: if the log directory or files cannot be written.
        """
        hidden = [*self._redact_values, *extra_redact_values]
        request_text = scrub(json.dumps(record.redacted_request, indent=2), hidden)
        response_text = scrub(record.raw_response, hidden)
        result_text = scrub(record.text, hidden)

        self._log_dir.mkdir(parents=True, exist_ok=True)
        run_key, request_path = self._claim_key(record.created_at, request_text)
        paths = AuditPaths(
            run_key=run_key,
            request=request_path,
            response=self._log_dir / f"{run_key}.response.json",
            result=self._log_dir / f"{run_key}.response.md",
        )
        self._write_new(paths.response, response_text)
        self._write_new(paths.result, result_text)
        Log.info(f"Audit record written to {self._log_dir} with key {run_key}")
        return paths

    def _claim_key(self, created_at: datetime, request_text: str) -> tuple[str, Path]:
        stamp = created_at.strftime("%Y%m%d-%H%M%S")
        for _ in range(_MAX_KEY_ATTEMPTS):
            run_key = f"{stamp}-{secrets.token_hex(3)}"
            path = self._log_dir / f"{run_key}.request.json"
            try:
                self._write_new(path, request_text)
            except FileExistsError:
                Log.debug(f"Audit key {run_key} already taken, retrying")
                continue
            return run_key, path
        raise FileExistsError(f"Could not allocate a unique audit key for {stamp}")

    @staticmethod
    def _write_new(path: Path, text: str) -> None:
        with path.open("x", encoding="utf-8") as handle:
            handle.write(text)
