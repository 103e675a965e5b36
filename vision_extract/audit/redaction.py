"""Removal of bulk image data and credentials before anything is persisted."""

import copy
from collections.abc import Iterable
from typing import Any

REDACTED = "[REDACTED]"
# Shorter values (local placeholder keys such as "ollama") are ordinary words.
MIN_SECRET_LENGTH = 8


def image_placeholder(url: str) -> str:
    header, _, data = url.partition(",")
    mime = header.removeprefix("data:").split(";", 1)[0] or "unknown"
    return f"<image redacted: {mime}, {len(data)} base64 chars>"


def redact_request(payload: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``payload`` with every image_url.url replaced."""
    redacted = copy.deepcopy(payload)
    for message in redacted.get("messages", []):
        content = message.get("content")
        if not isinstance(content, list):
            continue
        for part in content:
            if not isinstance(part, dict):
                continue
            image_url = part.get("image_url")
            if isinstance(image_url, dict) and isinstance(image_url.get("url"), str):
                image_url["url"] = image_placeholder(image_url["url"])
    return redacted


def scrub(text: str, secrets: Iterable[str]) -> str:
    """Replace every occurrence of each secret of at least MIN_SECRET_LENGTH chars."""
    candidates = {s for s in secrets if len(s) >= MIN_SECRET_LENGTH}
    for secret in sorted(candidates, key=len, reverse=True):
        text = text.replace(secret, REDACTED)
    return text
