from dataclasses import dataclass


@dataclass(frozen=True)
class InferenceResult:
    """Successful extraction call: the content plus what the service sent back."""

    content: str
    raw_body: str
    model: str
    status_code: int = 200
    elapsed_ms: float = 0.0
