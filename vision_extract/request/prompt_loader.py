from pathlib import Path

from vision_extract.exceptions import RequestSerializationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt(path: Path | None = None) -> str:
    """Load the extraction prompt from a file.

    Args:
        path: Path to the prompt file.
              Defaults to the bundled extraction_prompt.txt.

    Returns:
        The prompt text with surrounding whitespace stripped.

    Raises:
        RequestSerializationError: if the file cannot be read or is empty.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_prompt.txt"
    try:
        prompt = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise RequestSerializationError(f"Failed to load extraction prompt: {exc}") from exc
    if not prompt:
        raise RequestSerializationError(f"Extraction prompt is empty: {path}")
    return prompt
